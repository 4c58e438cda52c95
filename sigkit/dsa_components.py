"""DSA key sizes and the common domain parameters (p, q, g)."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import ClassVar

from .asn1 import DerError, DerReader, SignatureError, encode_integer, encode_sequence
from .dsa_generate import common_components


@dataclass(frozen=True)
class KeySize:
    """DSA parameter sizes: `l` is the bit size of p, `n` the bit size of q."""

    l: int  # noqa: E741
    n: int

    DSA_1024_160: ClassVar[KeySize]
    DSA_2048_224: ClassVar[KeySize]
    DSA_2048_256: ClassVar[KeySize]
    DSA_3072_256: ClassVar[KeySize]

    def __post_init__(self) -> None:
        if self.l < 2 or self.n < 2:
            raise ValueError("DSA key sizes must be at least 2 bits")


# Security strength under 112 bits (SP 800-57 Part 1 Rev. 5); kept for testing.
KeySize.DSA_1024_160 = KeySize(1024, 160)
KeySize.DSA_2048_224 = KeySize(2048, 224)
KeySize.DSA_2048_256 = KeySize(2048, 256)
KeySize.DSA_3072_256 = KeySize(3072, 256)


@dataclass(frozen=True, order=True, repr=False)
class Components:
    """The common components of a DSA keypair: prime p, quotient q, generator g."""

    p: int
    q: int
    g: int

    def __post_init__(self) -> None:
        if self.p < 2 or self.q < 2 or self.g <= 0 or self.g > self.p:
            raise SignatureError("invalid DSA components")

    def __repr__(self) -> str:
        return "Components { ... }"

    @classmethod
    def from_components(cls, p: int, q: int, g: int) -> Components:
        """Build the container from p, q and g, validating them."""
        return cls(p, q, g)

    @classmethod
    def generate(cls, key_size: KeySize, rng: random.Random | None = None) -> Components:
        """Generate a fresh set of common components of the given size."""
        p, q, g = common_components(key_size, rng)
        return cls(p, q, g)

    def to_der(self) -> bytes:
        """Encode as the DER SEQUENCE { p, q, g } (Dss-Parms)."""
        return encode_sequence(
            encode_integer(self.p),
            encode_integer(self.q),
            encode_integer(self.g),
        )

    @classmethod
    def from_der(cls, data: bytes) -> Components:
        """Decode from DER; invalid parameter values raise DerError."""
        reader = DerReader(data)
        seq = reader.read_sequence()
        reader.finish()
        p = seq.read_integer()
        q = seq.read_integer()
        g = seq.read_integer()
        seq.finish()
        try:
            return cls(p, q, g)
        except SignatureError as exc:
            raise DerError("invalid DSA parameter values") from exc