"""Utility layer: salt resolution, input limits and the message service.

The crypto core stays silent; logging of salt decisions and failed
decrypts happens here. Only lengths are ever logged.
"""
from __future__ import annotations
import os, re, logging
from typing import Dict, Optional, Any
from config.settings import (
	DEFAULT_SALT_HEX, SALT_ENV_VAR, SALT_LENGTH, MAX_PAYLOAD_SIZE, MAX_KEY_SIZE,
	KDF_ITERATIONS, KDF_HASH, KEY_LENGTH, IV_LENGTH, AUTH_TAG_LENGTH, VERSION
)
from .crypto import SaltyCrypto, InvalidSalt, hex_to_bytes
from .base91 import is_base91

log = logging.getLogger(__name__)

_SALT_RE = re.compile(r'^[0-9A-Fa-f]{%d}$' % (SALT_LENGTH * 2))
_HEX_RE = re.compile(r'^[0-9A-Fa-f]+$')

class InputError(Exception): ...

def validate_salt_hex(value: str) -> bool:
	return bool(value) and _SALT_RE.match(value) is not None

def resolve_salt_hex(value: str | None = None, lenient: bool = False) -> str:
	"""Pick the deployment salt: explicit value, then $SALT_HEX, then the default.

	The salt must decode to SALT_LENGTH bytes; `lenient` downgrades a wrong
	length to a warning. Non-hex characters decode to 0 and only warn. An
	empty explicit salt is always an error.
	"""
	if value is None:
		# Resolve dynamically to honor environment overrides in tests
		value = os.environ.get(SALT_ENV_VAR) or None
		if value is None:
			log.warning('%s not set; using built-in development salt', SALT_ENV_VAR)
			value = DEFAULT_SALT_HEX
	salt_len = len(hex_to_bytes(value))
	if salt_len != SALT_LENGTH:
		if not lenient:
			raise InvalidSalt(f'Salt must decode to {SALT_LENGTH} bytes, got {salt_len}')
		log.warning('Salt decodes to %d bytes, expected %d', salt_len, SALT_LENGTH)
	if not _HEX_RE.match(value):
		log.warning('Salt contains non-hex characters; they decode as 0')
	return value

def check_input(value: str, max_length: int, label: str) -> str:
	"""Enforce a length limit and strip NUL characters."""
	if len(value) > max_length:
		log.debug('%s rejected: length %d > %d', label, len(value), max_length)
		raise InputError(f'{label} exceeds maximum length of {max_length}')
	return value.replace('\0', '')

class MessageService:
	"""Passphrase-based encrypt/decrypt bound to one deployment salt.

	The salt is resolved once, at construction. A key is derived per call
	and dropped when the call returns.
	"""

	def __init__(self, salt_hex: str | None = None, lenient: bool = False):
		self.salt_hex = resolve_salt_hex(salt_hex, lenient=lenient)
		self.crypto = SaltyCrypto()

	def encrypt(self, message: str, passphrase: str) -> str:
		passphrase = check_input(passphrase, MAX_KEY_SIZE, 'Key')
		message = check_input(message, MAX_PAYLOAD_SIZE, 'Payload')
		key = self.crypto.derive_key(passphrase, self.salt_hex)
		token = self.crypto.encrypt_text(message, key)
		log.debug('Encrypted %d chars into %d-char token', len(message), len(token))
		return token

	def decrypt(self, token: str, passphrase: str) -> Optional[str]:
		"""Return the plaintext, or None if the token does not open."""
		passphrase = check_input(passphrase, MAX_KEY_SIZE, 'Key')
		if not isinstance(token, str):
			return None
		# basE91 output is ~1.23x the envelope size
		token = check_input(token, MAX_PAYLOAD_SIZE * 2, 'Token')
		stripped = token.strip()
		if stripped and not is_base91(stripped):
			log.debug('Token contains non-alphabet characters; they will be skipped')
		key = self.crypto.derive_key(passphrase, self.salt_hex)
		plain = self.crypto.decrypt_text(token, key)
		if plain is None:
			log.info('Decryption failed for %d-char token', len(token))
		return plain

	def info(self) -> Dict[str, Any]:
		return {
			'version': VERSION,
			'kdf': {'name': 'PBKDF2', 'hash': KDF_HASH, 'iterations': KDF_ITERATIONS, 'key_bits': KEY_LENGTH * 8},
			'cipher': {'name': 'AES-GCM', 'iv_bytes': IV_LENGTH, 'tag_bits': AUTH_TAG_LENGTH * 8},
			'encoding': 'basE91',
			'salt': {'default': self.salt_hex == DEFAULT_SALT_HEX, 'valid': validate_salt_hex(self.salt_hex)},
		}
