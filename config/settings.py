"""Project configuration settings.

Constants shared by the crypto core, the service layer and the CLI.
Environment lookups that must honour overrides in tests are resolved
at call time (see `salty.lib.utils`), not here.
"""

import os

VERSION = "1.0.0"

# Key derivation
KDF_ITERATIONS = 600_000
KDF_HASH = "SHA-512"
KEY_LENGTH = 32  # AES-256
SALT_LENGTH = 16

# AES-GCM envelope
IV_LENGTH = 12
AUTH_TAG_LENGTH = 16  # 128-bit tag
MIN_ENVELOPE_LENGTH = IV_LENGTH + AUTH_TAG_LENGTH

# Salt
DEFAULT_SALT_HEX = "0E57CCD6AC0AF51DA4969E2A5DEF53C7"  # development fallback
SALT_ENV_VAR = "SALT_HEX"

# Limits
MAX_PAYLOAD_SIZE = 1024 * 1024  # 1MB
MAX_KEY_SIZE = 1024

# Logging
LOG_LEVEL = os.environ.get("SALTY_LOG_LEVEL", "WARNING")

__all__ = [
	'VERSION','KDF_ITERATIONS','KDF_HASH','KEY_LENGTH','SALT_LENGTH',
	'IV_LENGTH','AUTH_TAG_LENGTH','MIN_ENVELOPE_LENGTH',
	'DEFAULT_SALT_HEX','SALT_ENV_VAR','MAX_PAYLOAD_SIZE','MAX_KEY_SIZE','LOG_LEVEL'
]
