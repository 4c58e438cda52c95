import hashlib

import pytest

from sigkit.rfc6979 import HmacDrbg, generate_k

P256_ORDER = 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551
P256_X = 0xC9AFA9D845BA75166B5C215767B1D6934E50C3DB36E89B127B8A622B120F6721


def test_p256_sha256_sample_vector():
    h = hashlib.sha256(b"sample").digest()
    k = generate_k("sha256", P256_X, P256_ORDER, h, b"")
    assert k == 0xA6E3C57DD01ABE90086538398355DD4C3B17AA873382B0F24D6129493D8AAD60


def test_generation_is_deterministic():
    h = hashlib.sha256(b"message").digest()
    first = generate_k("sha256", P256_X, P256_ORDER, h, b"")
    second = generate_k("sha256", P256_X, P256_ORDER, h, b"")
    assert first == second
    assert 0 < first < P256_ORDER


def test_additional_data_changes_k():
    h = hashlib.sha256(b"message").digest()
    plain = generate_k("sha256", P256_X, P256_ORDER, h, b"")
    extra = generate_k("sha256", P256_X, P256_ORDER, h, b"entropy")
    assert plain != extra
    assert 0 < extra < P256_ORDER


def test_digest_name_and_constructor_agree():
    h = hashlib.sha256(b"abc").digest()
    assert generate_k("sha256", 7, P256_ORDER, h, b"") == generate_k(hashlib.sha256, 7, P256_ORDER, h, b"")


@pytest.mark.parametrize("x", [0, 1, 12345, 2**63])
def test_k_in_range(x):
    n = 2**64 - 59
    k = generate_k("sha256", x, n, b"\x01" * 8, b"")
    assert 0 < k < n


def test_smallest_modulus_forces_one():
    assert generate_k("sha256", 1, 2, b"h", b"") == 1


def test_invalid_modulus_rejected():
    with pytest.raises(ValueError):
        generate_k("sha256", 1, 1, b"", b"")


def test_oversized_x_rejected():
    with pytest.raises(ValueError):
        generate_k("sha256", 2**16, 255, b"", b"")


def test_short_output_is_prefix_of_first_block():
    short = HmacDrbg("sha256", b"entropy", b"nonce", b"").fill_bytes(10)
    block = HmacDrbg("sha256", b"entropy", b"nonce", b"").fill_bytes(32)
    assert short == block[:10]


def test_multi_block_output():
    long_output = HmacDrbg("sha256", b"entropy", b"nonce", b"").fill_bytes(100)
    block = HmacDrbg("sha256", b"entropy", b"nonce", b"").fill_bytes(32)
    assert len(long_output) == 100
    assert long_output[:32] == block


def test_sha512_prefix():
    partial = HmacDrbg(hashlib.sha512, b"e", b"n", b"ad").fill_bytes(50)
    block = HmacDrbg(hashlib.sha512, b"e", b"n", b"ad").fill_bytes(64)
    assert partial == block[:50]


def test_state_advances_between_calls():
    drbg = HmacDrbg("sha256", b"entropy", b"nonce", b"")
    first = drbg.fill_bytes(32)
    second = drbg.fill_bytes(32)
    assert len(second) == 32
    assert first != second


def test_negative_length_rejected():
    with pytest.raises(ValueError):
        HmacDrbg("sha256", b"e", b"n", b"").fill_bytes(-1)