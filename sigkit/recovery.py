"""Public key recovery identifiers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .asn1 import SignatureError


@dataclass(frozen=True, order=True)
class RecoveryId:
    """Recovery id (0 to 3): bit 0 is y-odd, bit 1 is x-reduced."""

    value: int
    MAX: ClassVar[int] = 3

    def __post_init__(self) -> None:
        if not 0 <= self.value <= self.MAX:
            raise SignatureError(f"recovery id out of range: {self.value}")

    @classmethod
    def new(cls, is_y_odd: bool, is_x_reduced: bool) -> RecoveryId:
        """Build an id from the y-parity and x-reduction flags."""
        return cls((int(bool(is_x_reduced)) << 1) | int(bool(is_y_odd)))

    @classmethod
    def from_byte(cls, byte: int) -> RecoveryId:
        """Build an id from its byte value, rejecting values above MAX."""
        return cls(byte)

    def is_x_reduced(self) -> bool:
        """Did the x-coordinate of k*G overflow the curve order?"""
        return bool(self.value & 0b10)

    def is_y_odd(self) -> bool:
        """Is the y-coordinate of k*G odd?"""
        return bool(self.value & 0b01)

    def to_byte(self) -> int:
        return self.value

    def __int__(self) -> int:
        return self.value