"""DER encoding and decoding, PEM armour, and the SubjectPublicKeyInfo and
PKCS#8 PrivateKeyInfo containers."""

from __future__ import annotations

import base64
import binascii
import re
import textwrap
from dataclasses import dataclass

DSA_OID = "1.2.840.10040.4.1"

INTEGER = 0x02
BIT_STRING = 0x03
OCTET_STRING = 0x04
NULL = 0x05
OBJECT_IDENTIFIER = 0x06
SEQUENCE = 0x30

SPKI_PEM_LABEL = "PUBLIC KEY"
PKCS8_PEM_LABEL = "PRIVATE KEY"

_ATTRIBUTES_TAG = 0xA0
_PUBLIC_KEY_TAG = 0x81
_MAX_LENGTH_OCTETS = 4

_ARC_RE = re.compile(r"[0-9]+")
_PEM_RE = re.compile(
    r"-----BEGIN ([^\r\n-]+)-----\r?\n(.*?)-----END ([^\r\n-]+)-----",
    re.DOTALL,
)


class SignatureError(ValueError):
    """A signature or key failed validation."""


class DerError(ValueError):
    """Malformed or non-canonical DER (or PEM) input."""


def encode_length(length: int) -> bytes:
    """Encode a DER length in its minimal form."""
    if length < 0:
        raise DerError("length cannot be negative")
    if length < 0x80:
        return bytes([length])
    body = length.to_bytes((length.bit_length() + 7) // 8, "big")
    if len(body) > _MAX_LENGTH_OCTETS:
        raise DerError("length too large")
    return bytes([0x80 | len(body)]) + body


def _tlv(tag: int, content: bytes) -> bytes:
    return bytes([tag]) + encode_length(len(content)) + content


def encode_integer(value: int) -> bytes:
    """Encode a non-negative integer as a DER INTEGER."""
    if value < 0:
        raise DerError("only non-negative integers are supported")
    return _tlv(INTEGER, value.to_bytes(value.bit_length() // 8 + 1, "big"))


def encode_sequence(*args: bytes) -> bytes:
    """Wrap already encoded elements in a DER SEQUENCE."""
    return _tlv(SEQUENCE, b"".join(args))


def encode_octet_string(data: bytes) -> bytes:
    """Encode bytes as a DER OCTET STRING."""
    return _tlv(OCTET_STRING, bytes(data))


def encode_bit_string(data: bytes) -> bytes:
    """Encode bytes as a DER BIT STRING with no unused bits."""
    return _tlv(BIT_STRING, b"\x00" + bytes(data))


def _base128(value: int) -> bytes:
    out = [value & 0x7F]
    value >>= 7
    while value:
        out.append(0x80 | (value & 0x7F))
        value >>= 7
    return bytes(reversed(out))


def encode_oid(oid: str) -> bytes:
    """Encode a dotted object identifier as a DER OBJECT IDENTIFIER."""
    parts = oid.split(".")
    if len(parts) < 2 or not all(_ARC_RE.fullmatch(part) for part in parts):
        raise DerError(f"malformed object identifier: {oid!r}")
    arcs = [int(part) for part in parts]
    first, second = arcs[0], arcs[1]
    if first > 2 or (first < 2 and second >= 40):
        raise DerError(f"malformed object identifier: {oid!r}")
    content = _base128(first * 40 + second) + b"".join(_base128(arc) for arc in arcs[2:])
    return _tlv(OBJECT_IDENTIFIER, content)


def decode_oid(data: bytes) -> str:
    """Decode the content octets of an OBJECT IDENTIFIER to dotted form."""
    if not data:
        raise DerError("empty object identifier")
    values: list[int] = []
    current = 0
    fresh = True
    for byte in data:
        if fresh and byte == 0x80:
            raise DerError("non-minimal object identifier arc")
        current = (current << 7) | (byte & 0x7F)
        fresh = not byte & 0x80
        if fresh:
            values.append(current)
            current = 0
    if not fresh:
        raise DerError("truncated object identifier")
    head, rest = values[0], values[1:]
    if head < 40:
        arcs = [0, head]
    elif head < 80:
        arcs = [1, head - 40]
    else:
        arcs = [2, head - 80]
    return ".".join(str(arc) for arc in arcs + rest)


class DerReader:
    """Sequential reader over DER data; offsets are absolute in the input."""

    def __init__(self, data: bytes, start: int = 0, end: int | None = None):
        self._data = bytes(data)
        self._end = len(self._data) if end is None else end
        if not 0 <= start <= self._end <= len(self._data):
            raise DerError("reader bounds out of range")
        self.offset = start

    def _read_byte(self) -> int:
        if self.offset >= self._end:
            raise DerError("unexpected end of input")
        byte = self._data[self.offset]
        self.offset += 1
        return byte

    def _take(self, count: int) -> bytes:
        if count > self._end - self.offset:
            raise DerError("unexpected end of input")
        chunk = self._data[self.offset : self.offset + count]
        self.offset += count
        return chunk

    def _read_header(self) -> tuple[int, int]:
        tag = self._read_byte()
        if tag & 0x1F == 0x1F:
            raise DerError("high tag numbers are not supported")
        first = self._read_byte()
        if first < 0x80:
            return tag, first
        if first == 0x80:
            raise DerError("indefinite length is not allowed in DER")
        count = first & 0x7F
        if count > _MAX_LENGTH_OCTETS:
            raise DerError("length too large")
        body = self._take(count)
        if body[0] == 0:
            raise DerError("non-minimal length encoding")
        length = int.from_bytes(body, "big")
        if length < 0x80:
            raise DerError("non-minimal length encoding")
        return tag, length

    def _peek_tag(self) -> int | None:
        return self._data[self.offset] if self.offset < self._end else None

    def _read_any(self) -> tuple[int, bytes]:
        start = self.offset
        tag, length = self._read_header()
        self._take(length)
        return tag, self._data[start : self.offset]

    def read_tlv(self, tag: int) -> bytes:
        """Read one element with the given tag and return its content octets."""
        actual, length = self._read_header()
        if actual != tag:
            raise DerError(f"expected tag 0x{tag:02x}, found 0x{actual:02x}")
        return self._take(length)

    def read_integer(self) -> int:
        """Read a canonical non-negative DER INTEGER."""
        content = self.read_tlv(INTEGER)
        if not content:
            raise DerError("empty integer")
        if content[0] & 0x80:
            raise DerError("negative integer")
        if len(content) > 1 and content[0] == 0 and not content[1] & 0x80:
            raise DerError("non-minimal integer encoding")
        return int.from_bytes(content, "big")

    def read_sequence(self) -> DerReader:
        """Read a SEQUENCE and return a reader over its contents."""
        tag, length = self._read_header()
        if tag != SEQUENCE:
            raise DerError(f"expected tag 0x{SEQUENCE:02x}, found 0x{tag:02x}")
        start = self.offset
        self._take(length)
        return DerReader(self._data, start, self.offset)

    def remaining(self) -> bytes:
        """The bytes not read yet."""
        return self._data[self.offset : self._end]

    def finish(self) -> None:
        """Raise if any input is left unread."""
        if self.offset != self._end:
            raise DerError("trailing data after DER element")


def pem_encode(label: str, der: bytes) -> str:
    """Armour DER bytes as PEM with 64-column lines and LF line endings."""
    lines = textwrap.wrap(base64.b64encode(der).decode("ascii"), 64)
    body = "".join(f"{line}\n" for line in lines)
    return f"-----BEGIN {label}-----\n{body}-----END {label}-----\n"


def pem_decode(text: str | bytes) -> tuple[str, bytes]:
    """Return the label and DER bytes of a PEM document."""
    if isinstance(text, bytes):
        try:
            text = text.decode("ascii")
        except UnicodeDecodeError as exc:
            raise DerError("PEM must be ASCII") from exc
    match = _PEM_RE.fullmatch(text.strip())
    if match is None:
        raise DerError("malformed PEM document")
    begin, body, end = match.groups()
    if begin != end:
        raise DerError("PEM labels do not match")
    try:
        der = base64.b64decode("".join(body.split()), validate=True)
    except binascii.Error as exc:
        raise DerError("invalid base64 in PEM body") from exc
    return begin, der


def _encode_algorithm(oid: str, parameters: bytes | None) -> bytes:
    extra = [parameters] if parameters is not None else []
    return encode_sequence(encode_oid(oid), *extra)


def _decode_algorithm(reader: DerReader) -> tuple[str, bytes | None]:
    seq = reader.read_sequence()
    oid = decode_oid(seq.read_tlv(OBJECT_IDENTIFIER))
    parameters = None if seq._peek_tag() is None else seq._read_any()[1]
    seq.finish()
    return oid, parameters


def _bit_string_bytes(content: bytes) -> bytes:
    if not content:
        raise DerError("empty bit string")
    if content[0] != 0:
        raise DerError("bit string has unused bits")
    return content[1:]


@dataclass(frozen=True)
class SubjectPublicKeyInfo:
    """X.509 SubjectPublicKeyInfo; parameters hold raw DER or None."""

    algorithm: str
    parameters: bytes | None
    subject_public_key: bytes

    def to_der(self) -> bytes:
        return encode_sequence(
            _encode_algorithm(self.algorithm, self.parameters),
            encode_bit_string(self.subject_public_key),
        )

    @classmethod
    def from_der(cls, data: bytes) -> SubjectPublicKeyInfo:
        reader = DerReader(data)
        seq = reader.read_sequence()
        reader.finish()
        algorithm, parameters = _decode_algorithm(seq)
        key = _bit_string_bytes(seq.read_tlv(BIT_STRING))
        seq.finish()
        return cls(algorithm, parameters, key)


@dataclass(frozen=True)
class PrivateKeyInfo:
    """PKCS#8 PrivateKeyInfo (v1), or OneAsymmetricKey (v2) with a public key."""

    algorithm: str
    parameters: bytes | None
    private_key: bytes
    public_key: bytes | None = None

    def to_der(self) -> bytes:
        version = 0 if self.public_key is None else 1
        parts = [
            encode_integer(version),
            _encode_algorithm(self.algorithm, self.parameters),
            encode_octet_string(self.private_key),
        ]
        if self.public_key is not None:
            parts.append(_tlv(_PUBLIC_KEY_TAG, b"\x00" + self.public_key))
        return encode_sequence(*parts)

    @classmethod
    def from_der(cls, data: bytes) -> PrivateKeyInfo:
        reader = DerReader(data)
        seq = reader.read_sequence()
        reader.finish()
        version = seq.read_integer()
        if version not in (0, 1):
            raise DerError(f"unsupported PKCS#8 version {version}")
        algorithm, parameters = _decode_algorithm(seq)
        private_key = seq.read_tlv(OCTET_STRING)
        if seq._peek_tag() == _ATTRIBUTES_TAG:
            seq._read_any()
        public_key = None
        if seq._peek_tag() == _PUBLIC_KEY_TAG:
            public_key = _bit_string_bytes(seq.read_tlv(_PUBLIC_KEY_TAG))
        seq.finish()
        if (version == 1) != (public_key is not None):
            raise DerError("PKCS#8 version does not match presence of public key")
        return cls(algorithm, parameters, private_key, public_key)