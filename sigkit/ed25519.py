"""Ed25519 signature container with hex and binary serialization."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar

from .asn1 import SignatureError

_LENGTH_PREFIX = struct.Struct("<Q")
_HIGH_BITS = 0b1110_0000


@dataclass(frozen=True)
class Signature:
    """A 64-byte Ed25519 signature.

    Construction performs a partial reduction check on the `s` scalar: the
    three highest bits of the last byte must be clear.
    """

    data: bytes
    BYTE_SIZE: ClassVar[int] = 64

    def __post_init__(self) -> None:
        raw = bytes(self.data)
        if len(raw) != self.BYTE_SIZE:
            raise SignatureError(
                f"Ed25519 signature must be {self.BYTE_SIZE} bytes, got {len(raw)}"
            )
        if raw[-1] & _HIGH_BITS:
            raise SignatureError("Ed25519 signature scalar s is not reduced")
        object.__setattr__(self, "data", raw)

    @classmethod
    def from_bytes(cls, data: bytes) -> Signature:
        """Parse a signature from exactly 64 bytes."""
        return cls(bytes(data))

    def to_bytes(self) -> bytes:
        """The 64 signature bytes."""
        return self.data

    def __bytes__(self) -> bytes:
        return self.data

    @classmethod
    def from_hex(cls, text: str) -> Signature:
        """Decode from hexadecimal; upper or lower case, but not mixed."""
        if len(text) != cls.BYTE_SIZE * 2 or not text.isascii():
            raise SignatureError("hex signature has the wrong length")
        upper_case: bool | None = None
        for ch in text:
            if ch.isdigit():
                continue
            if "a" <= ch <= "z":
                is_upper = False
            elif "A" <= ch <= "Z":
                is_upper = True
            else:
                raise SignatureError(f"invalid character in hex signature: {ch!r}")
            if upper_case is None:
                upper_case = is_upper
            elif upper_case != is_upper:
                raise SignatureError("hex signature mixes upper and lower case")
        try:
            raw = bytes.fromhex(text)
        except ValueError as exc:
            raise SignatureError("invalid hex signature") from exc
        return cls(raw)

    def __str__(self) -> str:
        return self.data.hex().upper()

    def __repr__(self) -> str:
        return f"Signature({self})"

    def __format__(self, spec: str) -> str:
        if spec == "x":
            return self.data.hex()
        if spec == "X":
            return self.data.hex().upper()
        return format(str(self), spec)

    def serialize(self) -> bytes:
        """Serialize as a fixed 64-element byte tuple (the raw bytes)."""
        return self.data

    @classmethod
    def deserialize(cls, data: bytes) -> Signature:
        """Read a fixed 64-byte tuple from the start of `data`."""
        raw = bytes(data)
        if len(raw) < cls.BYTE_SIZE:
            raise SignatureError(
                f"expected bytestring of length {cls.BYTE_SIZE}, got {len(raw)} bytes"
            )
        return cls(raw[: cls.BYTE_SIZE])

    def serialize_bytes(self) -> bytes:
        """Serialize as a byte string with a little-endian u64 length prefix."""
        return _LENGTH_PREFIX.pack(len(self.data)) + self.data

    @classmethod
    def deserialize_bytes(cls, data: bytes) -> Signature:
        """Read a length-prefixed byte string holding exactly 64 bytes."""
        raw = bytes(data)
        if len(raw) < _LENGTH_PREFIX.size:
            raise SignatureError("missing length prefix")
        (length,) = _LENGTH_PREFIX.unpack_from(raw)
        body = raw[_LENGTH_PREFIX.size : _LENGTH_PREFIX.size + length]
        if len(body) != length:
            raise SignatureError("byte string is shorter than its length prefix")
        if length != cls.BYTE_SIZE:
            raise SignatureError(
                f"expected bytestring of length {cls.BYTE_SIZE}, got {length}"
            )
        return cls(body)