"""Configuration settings and constants for salty.

Re-exports `config.settings` so callers can write
`from config import KDF_ITERATIONS`. Keep the values themselves in
`settings.py`.
"""

from .settings import *  # noqa: F401,F403
from .settings import __all__  # noqa: F401
