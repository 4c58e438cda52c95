"""Deterministic ephemeral scalar generation with HMAC_DRBG (RFC 6979)."""

from __future__ import annotations

import hmac
from typing import Any


class HmacDrbg:
    """HMAC_DRBG as described in NIST SP 800-90A, used to derive nonces."""

    def __init__(self, digest: Any, entropy_input: bytes, nonce: bytes, additional_data: bytes = b""):
        self._digest = digest
        size = hmac.new(b"", digestmod=digest).digest_size
        self._k = bytes(size)
        self._v = b"\x01" * size
        for i in (0, 1):
            self._k = self._mac(self._v, bytes([i]), entropy_input, nonce, additional_data)
            self._v = self._mac(self._v)

    def _mac(self, *parts: bytes) -> bytes:
        mac = hmac.new(self._k, digestmod=self._digest)
        for part in parts:
            mac.update(part)
        return mac.digest()

    def fill_bytes(self, length: int) -> bytes:
        """Return the next `length` output bytes and update the state."""
        if length < 0:
            raise ValueError("length cannot be negative")
        out = bytearray()
        while len(out) < length:
            self._v = self._mac(self._v)
            out += self._v[: length - len(out)]
        self._k = self._mac(self._v, b"\x00")
        self._v = self._mac(self._v)
        return bytes(out)


def generate_k(digest: Any, x: int, n: int, h: bytes, data: bytes = b"") -> int:
    """Deterministically derive the ephemeral scalar k in [1, n).

    `x` is the secret key, `n` the modulus, `h` the message digest already
    reduced modulo `n`, and `data` optional additional input.
    """
    if n < 2:
        raise ValueError("modulus must be at least 2")
    size = (n.bit_length() + 7) // 8
    if x < 0 or x.bit_length() > size * 8:
        raise ValueError("secret key does not fit the modulus size")
    drbg = HmacDrbg(digest, x.to_bytes(size, "big"), bytes(h), bytes(data))
    while True:
        k = int.from_bytes(drbg.fill_bytes(size), "big")
        if 0 < k < n:
            return k