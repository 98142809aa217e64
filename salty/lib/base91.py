"""basE91 binary-to-text codec.

Packs input bits into 13 or 14 bit groups and emits each group as two
symbols of a 91 character alphabet. Tables are fixed at import time and
must not change: the alphabet order is part of the wire format.
"""
from __future__ import annotations
from typing import Optional

ENCODE_TABLE = (
	'A', 'B', 'C', 'D', 'E', 'F', 'G', 'H', 'I', 'J', 'K', 'L', 'M',
	'N', 'O', 'P', 'Q', 'R', 'S', 'T', 'U', 'V', 'W', 'X', 'Y', 'Z',
	'a', 'b', 'c', 'd', 'e', 'f', 'g', 'h', 'i', 'j', 'k', 'l', 'm',
	'n', 'o', 'p', 'q', 'r', 's', 't', 'u', 'v', 'w', 'x', 'y', 'z',
	'0', '1', '2', '3', '4', '5', '6', '7', '8', '9', '!', '#', '$',
	'%', '&', '(', ')', '*', '+', ',', '.', '/', ':', ';', '<', '=',
	'>', '?', '@', '[', ']', '^', '_', '`', '{', '|', '}', '~', '"',
)

DECODE_TABLE = {ch: i for i, ch in enumerate(ENCODE_TABLE)}

def encode(data: bytes) -> str:
	"""Encode bytes to a basE91 string. Empty input gives ''."""
	acc = 0; nbits = 0
	out = []
	for byte in data:
		acc |= byte << nbits
		nbits += 8
		if nbits > 13:
			v = acc & 8191
			if v > 88:
				acc >>= 13; nbits -= 13
			else:
				v = acc & 16383
				acc >>= 14; nbits -= 14
			out.append(ENCODE_TABLE[v % 91])
			out.append(ENCODE_TABLE[v // 91])
	if nbits:
		out.append(ENCODE_TABLE[acc % 91])
		if nbits > 7 or acc > 90:
			out.append(ENCODE_TABLE[acc // 91])
	return ''.join(out)

def decode(text: str) -> Optional[bytes]:
	"""Decode a basE91 string.

	Characters outside the alphabet are skipped. Returns None when nothing
	decodes, so '' gives None rather than b''.
	"""
	acc = 0; nbits = 0
	pending = -1
	out = bytearray()
	for ch in text:
		c = DECODE_TABLE.get(ch)
		if c is None:
			continue
		if pending < 0:
			pending = c
			continue
		v = pending + c * 91
		acc |= v << nbits
		nbits += 13 if (v & 8191) > 88 else 14
		while True:
			out.append(acc & 0xFF)
			acc >>= 8; nbits -= 8
			if nbits <= 7:
				break
		pending = -1
	if pending >= 0:
		out.append((acc | (pending << nbits)) & 0xFF)
	if not out:
		return None
	return bytes(out)

def is_base91(text: str) -> bool:
	"""True if `text` is non-empty and made only of alphabet symbols."""
	return bool(text) and all(ch in DECODE_TABLE for ch in text)
