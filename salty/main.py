"""Program entry point (CLI dispatcher).

Logging is configured here, not in the click group, so commands run
under a test runner leave the root logger alone.
"""
from __future__ import annotations
import logging
from config.settings import LOG_LEVEL
from salty.cli.commands import cli

def main():  # pragma: no cover - thin wrapper
	logging.basicConfig(level=LOG_LEVEL, format='%(levelname)s %(name)s: %(message)s')
	cli()

if __name__ == '__main__':  # pragma: no cover
	main()
