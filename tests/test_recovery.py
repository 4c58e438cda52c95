import pytest

from sigkit.asn1 import SignatureError
from sigkit.recovery import RecoveryId


def test_new():
    assert RecoveryId.new(False, False).to_byte() == 0
    assert RecoveryId.new(True, False).to_byte() == 1
    assert RecoveryId.new(False, True).to_byte() == 2
    assert RecoveryId.new(True, True).to_byte() == 3


@pytest.mark.parametrize("n", range(4))
def test_from_byte_valid(n):
    assert RecoveryId.from_byte(n).to_byte() == n


@pytest.mark.parametrize("n", range(4, 256))
def test_from_byte_invalid(n):
    with pytest.raises(SignatureError):
        RecoveryId.from_byte(n)


def test_negative_rejected():
    with pytest.raises(SignatureError):
        RecoveryId(-1)


def test_is_x_reduced():
    assert RecoveryId.from_byte(0).is_x_reduced() is False
    assert RecoveryId.from_byte(1).is_x_reduced() is False
    assert RecoveryId.from_byte(2).is_x_reduced() is True
    assert RecoveryId.from_byte(3).is_x_reduced() is True


def test_is_y_odd():
    assert RecoveryId.from_byte(0).is_y_odd() is False
    assert RecoveryId.from_byte(1).is_y_odd() is True
    assert RecoveryId.from_byte(2).is_y_odd() is False
    assert RecoveryId.from_byte(3).is_y_odd() is True


def test_int_conversion_and_ordering():
    assert int(RecoveryId.from_byte(2)) == 2
    assert RecoveryId.from_byte(1) < RecoveryId.from_byte(3)
    assert sorted([RecoveryId(3), RecoveryId(0)]) == [RecoveryId(0), RecoveryId(3)]