"""Cryptographic core: PBKDF2 key derivation + AES-GCM envelopes.

Envelope layout is `iv (12) | ciphertext | tag (16)`, rendered as basE91
for transport. Nothing here logs or touches disk.
"""
from __future__ import annotations
import secrets
from dataclasses import dataclass, field
from typing import Optional
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.backends import default_backend
from config.settings import (
	KDF_ITERATIONS, KEY_LENGTH, IV_LENGTH, AUTH_TAG_LENGTH, MIN_ENVELOPE_LENGTH
)
from . import base91

_HEX_DIGITS = frozenset('0123456789abcdefABCDEF')

class CryptoError(Exception):
	pass

class InvalidSalt(CryptoError):
	pass

@dataclass(frozen=True)
class DerivedKey:
	"""AES-GCM key handle. Material is never shown in repr."""
	_material: bytes = field(repr=False)
	algorithm: str = 'AES-GCM'

	@property
	def length(self) -> int:
		return len(self._material) * 8

def _parse_hex_group(group: str) -> int:
	# Lenient prefix parse: leading whitespace and a sign are accepted,
	# parsing stops at the first non-hex char, no digits at all -> 0.
	s = group.lstrip()
	sign = 1
	if s[:1] in ('+', '-'):
		sign = -1 if s[0] == '-' else 1
		s = s[1:]
	digits = []
	for ch in s:
		if ch not in _HEX_DIGITS:
			break
		digits.append(ch)
	if not digits:
		return 0
	return (sign * int(''.join(digits), 16)) % 256

def hex_to_bytes(hex_string: str) -> bytes:
	"""Decode a salt hex string; odd length gets a leading '0'.

	Malformed groups decode to 0 instead of raising. Only an empty
	string is rejected.
	"""
	if not hex_string:
		raise InvalidSalt('Invalid hex string')
	if len(hex_string) % 2:
		hex_string = '0' + hex_string
	return bytes(_parse_hex_group(hex_string[i:i + 2]) for i in range(0, len(hex_string), 2))

def utf8(text: str) -> bytes:
	"""UTF-8 encode, replacing lone surrogates with U+FFFD."""
	try:
		return text.encode('utf-8')
	except UnicodeEncodeError:
		return ''.join('\ufffd' if '\ud800' <= ch <= '\udfff' else ch for ch in text).encode('utf-8')

class SaltyCrypto:
	def __init__(self):
		self._backend = default_backend()

	def derive_key(self, passphrase: str, salt_hex: str) -> DerivedKey:
		"""PBKDF2-HMAC-SHA512, 600k iterations, 256-bit output.

		Deliberately slow. Any passphrase is accepted, including ''.
		"""
		salt = hex_to_bytes(salt_hex)
		kdf = PBKDF2HMAC(algorithm=hashes.SHA512(), length=KEY_LENGTH, salt=salt, iterations=KDF_ITERATIONS, backend=self._backend)
		return DerivedKey(kdf.derive(utf8(passphrase)))

	def encrypt(self, data: bytes, key: DerivedKey) -> bytes:
		# Fresh nonce per call; never reuse under the same key.
		iv = secrets.token_bytes(IV_LENGTH)
		cipher = Cipher(algorithms.AES(key._material), modes.GCM(iv), backend=self._backend)
		enc = cipher.encryptor()
		ct = enc.update(data) + enc.finalize()
		return iv + ct + enc.tag

	def decrypt(self, blob: bytes, key: DerivedKey) -> Optional[bytes]:
		"""Open an envelope. Returns None on any failure.

		Short input, wrong key and tampering are indistinguishable to the
		caller.
		"""
		if not isinstance(blob, (bytes, bytearray)) or len(blob) < MIN_ENVELOPE_LENGTH:
			return None
		iv = blob[:IV_LENGTH]; tag = blob[-AUTH_TAG_LENGTH:]; ct = blob[IV_LENGTH:-AUTH_TAG_LENGTH]
		cipher = Cipher(algorithms.AES(key._material), modes.GCM(bytes(iv), bytes(tag)), backend=self._backend)
		dec = cipher.decryptor()
		try:
			return dec.update(ct) + dec.finalize()
		except InvalidTag:
			return None

	def encrypt_encoded(self, data: bytes, key: DerivedKey) -> str:
		return base91.encode(self.encrypt(data, key))

	def decrypt_encoded(self, token: str, key: DerivedKey) -> Optional[bytes]:
		if not isinstance(token, str):
			return None
		blob = base91.decode(token)
		if blob is None:
			return None
		return self.decrypt(blob, key)

	def encrypt_text(self, text: str, key: DerivedKey) -> str:
		return self.encrypt_encoded(utf8(text), key)

	def decrypt_text(self, token: str, key: DerivedKey) -> Optional[str]:
		raw = self.decrypt_encoded(token, key)
		if raw is None:
			return None
		return raw.decode('utf-8', errors='replace')
