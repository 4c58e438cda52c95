"""ECDSA signatures over prime-order curves, fixed-size and ASN.1 DER forms."""

from __future__ import annotations

from dataclasses import dataclass

from .asn1 import DerError, DerReader, SignatureError, encode_integer, encode_sequence

# SEQUENCE tag and two-byte length, then two INTEGER headers of
# tag, length and a zero sign byte each.
MAX_DER_OVERHEAD = 9


@dataclass(frozen=True)
class Curve:
    """A prime-order elliptic curve, described by its scalar field order."""

    name: str
    order: int

    def byte_size(self) -> int:
        """Size in bytes of one serialized scalar."""
        return (self.order.bit_length() + 7) // 8

    def max_der_size(self) -> int:
        """Largest possible DER encoding of a signature over this curve."""
        return 2 * self.byte_size() + MAX_DER_OVERHEAD


P256 = Curve(
    "P-256",
    0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
)
SECP256K1 = Curve(
    "secp256k1",
    0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
)
P384 = Curve(
    "P-384",
    0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFC7634D81F4372DDF581A0DB248B0A77AECEC196ACCC52973,
)


def _scalar_bytes(curve: Curve, value: int | bytes) -> bytes:
    size = curve.byte_size()
    if isinstance(value, int):
        if value < 0 or value.bit_length() > size * 8:
            raise SignatureError("scalar does not fit the curve's scalar size")
        return value.to_bytes(size, "big")
    raw = bytes(value)
    if len(raw) != size:
        raise SignatureError(f"scalar must be {size} bytes, got {len(raw)}")
    return raw


@dataclass(frozen=True)
class Signature:
    """Fixed-size ECDSA signature: big-endian `r` followed by big-endian `s`.

    Both scalars must be non-zero and below the curve order.
    """

    curve: Curve
    data: bytes

    def __post_init__(self) -> None:
        raw = bytes(self.data)
        size = self.curve.byte_size()
        if len(raw) != 2 * size:
            raise SignatureError(
                f"signature must be {2 * size} bytes, got {len(raw)}"
            )
        for chunk in (raw[:size], raw[size:]):
            scalar = int.from_bytes(chunk, "big")
            if scalar >= self.curve.order:
                raise SignatureError("signature scalar is not below the curve order")
            if scalar == 0:
                raise SignatureError("signature scalar is zero")
        object.__setattr__(self, "data", raw)

    @classmethod
    def from_bytes(cls, curve: Curve, data: bytes) -> Signature:
        """Parse the fixed-size `r || s` encoding."""
        return cls(curve, bytes(data))

    @classmethod
    def from_scalars(cls, curve: Curve, r: int | bytes, s: int | bytes) -> Signature:
        """Build a signature from `r` and `s`, given as integers or field-size bytes."""
        return cls(curve, _scalar_bytes(curve, r) + _scalar_bytes(curve, s))

    @classmethod
    def from_der(cls, curve: Curve, data: bytes) -> Signature:
        """Parse an ASN.1 DER encoded signature."""
        return DerSignature.from_bytes(curve, data).to_signature()

    @classmethod
    def from_hex(cls, curve: Curve, text: str) -> Signature:
        """Decode `r || s` from hexadecimal."""
        size = curve.byte_size()
        if len(text) != size * 4 or not text.isascii():
            raise SignatureError("hex signature has the wrong length")
        if not text.isalnum():
            raise SignatureError("hex signature contains invalid characters")
        try:
            r = bytes.fromhex(text[: size * 2])
            s = bytes.fromhex(text[size * 2 :])
        except ValueError as exc:
            raise SignatureError("invalid hex signature") from exc
        return cls.from_scalars(curve, r, s)

    def to_der(self) -> DerSignature:
        """Serialize as ASN.1 DER."""
        r, s = self.split_bytes()
        return DerSignature.from_scalar_bytes(self.curve, r, s)

    def to_bytes(self) -> bytes:
        """The fixed-size `r || s` bytes."""
        return self.data

    def split_bytes(self) -> tuple[bytes, bytes]:
        """The `r` and `s` components as field-size bytes."""
        size = self.curve.byte_size()
        return self.data[:size], self.data[size:]

    def r(self) -> int:
        """The `r` scalar."""
        return int.from_bytes(self.split_bytes()[0], "big")

    def s(self) -> int:
        """The `s` scalar."""
        return int.from_bytes(self.split_bytes()[1], "big")

    def split_scalars(self) -> tuple[int, int]:
        """The `r` and `s` scalars."""
        return self.r(), self.s()

    def normalize_s(self) -> Signature | None:
        """Return the "low S" form if `s` is high, otherwise None."""
        s = self.s()
        if s <= self.curve.order // 2:
            return None
        return Signature.from_scalars(self.curve, self.split_bytes()[0], self.curve.order - s)

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return self.data.hex().upper()

    def __repr__(self) -> str:
        return f"Signature<{self.curve.name}>({self.data.hex()})"

    def __format__(self, spec: str) -> str:
        if spec == "x":
            return self.data.hex()
        if spec == "X":
            return self.data.hex().upper()
        return format(str(self), spec)


def _read_uint(reader: DerReader, raw: bytes) -> range:
    """Read an INTEGER and return where its magnitude (no sign byte) lies in `raw`."""
    value = reader.read_integer()
    end = reader.offset
    start = end - (value.bit_length() // 8 + 1)
    if end - start > 1 and raw[start] == 0:
        start += 1
    return range(start, end)


@dataclass(frozen=True)
class DerSignature:
    """ASN.1 DER encoded ECDSA signature, with the positions of `r` and `s`."""

    curve: Curve
    data: bytes
    r_range: range
    s_range: range

    @classmethod
    def from_bytes(cls, curve: Curve, data: bytes) -> DerSignature:
        """Parse and validate a DER encoded signature."""
        raw = bytes(data)
        try:
            reader = DerReader(raw)
            seq = reader.read_sequence()
            r_range = _read_uint(seq, raw)
            s_range = _read_uint(seq, raw)
            seq.finish()
            reader.finish()
        except DerError as exc:
            raise SignatureError(f"invalid DER signature: {exc}") from exc
        size = curve.byte_size()
        if len(r_range) > size or len(s_range) > size:
            raise SignatureError("DER signature scalar is too large for the curve")
        if s_range.stop != len(raw):
            raise SignatureError("trailing data in DER signature")
        return cls(curve, raw, r_range, s_range)

    @classmethod
    def from_scalar_bytes(cls, curve: Curve, r: bytes, s: bytes) -> DerSignature:
        """Encode big-endian `r` and `s` as a DER signature."""
        encoded = encode_sequence(
            encode_integer(int.from_bytes(bytes(r), "big")),
            encode_integer(int.from_bytes(bytes(s), "big")),
        )
        if len(encoded) > curve.max_der_size():
            raise SignatureError("DER signature exceeds the maximum size for the curve")
        return cls.from_bytes(curve, encoded)

    def as_bytes(self) -> bytes:
        """The DER bytes."""
        return self.data

    def r_bytes(self) -> bytes:
        """The `r` component with leading zeros removed."""
        return self.data[self.r_range.start : self.r_range.stop]

    def s_bytes(self) -> bytes:
        """The `s` component with leading zeros removed."""
        return self.data[self.s_range.start : self.s_range.stop]

    def to_signature(self) -> Signature:
        """Convert to the fixed-size form."""
        size = self.curve.byte_size()
        r = self.r_bytes().rjust(size, b"\x00")
        s = self.s_bytes().rjust(size, b"\x00")
        return Signature.from_bytes(self.curve, r + s)

    def __len__(self) -> int:
        return self.s_range.stop

    def __bytes__(self) -> bytes:
        return self.data

    def __repr__(self) -> str:
        return (
            f"DerSignature<{self.curve.name}>(r={self.r_bytes().hex()}, "
            f"s={self.s_bytes().hex()})"
        )