"""DSA signature container (r, s) with its DER encoding."""

from __future__ import annotations

from dataclasses import dataclass

from .asn1 import DerReader, SignatureError, encode_integer, encode_sequence


@dataclass(frozen=True, order=True, repr=False)
class Signature:
    """A DSA signature, ordered and compared by (r, s)."""

    r: int
    s: int

    def __post_init__(self) -> None:
        if self.r < 0 or self.s < 0:
            raise SignatureError("signature components cannot be negative")

    def __repr__(self) -> str:
        return "Signature { ... }"

    @classmethod
    def from_components(cls, r: int, s: int) -> Signature:
        """Build a signature from its r and s parts."""
        return cls(r, s)

    @classmethod
    def from_der(cls, data: bytes) -> Signature:
        """Decode the DER SEQUENCE { r INTEGER, s INTEGER }."""
        reader = DerReader(data)
        seq = reader.read_sequence()
        reader.finish()
        r = seq.read_integer()
        s = seq.read_integer()
        seq.finish()
        return cls(r, s)

    def to_der(self) -> bytes:
        """Encode as a DER SEQUENCE of two INTEGERs."""
        return encode_sequence(encode_integer(self.r), encode_integer(self.s))

    def is_valid_for(self, q: int) -> bool:
        """Check that r and s are non-zero and not above q."""
        return not (self.r == 0 or self.s == 0 or self.r > q or self.s > q)

    def __bytes__(self) -> bytes:
        return self.to_der()