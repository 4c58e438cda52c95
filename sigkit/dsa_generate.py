"""Generation of DSA parameters, primes and per-message secret numbers."""

from __future__ import annotations

import random
import secrets
from typing import TYPE_CHECKING, Any, Protocol

from .asn1 import SignatureError
from .rfc6979 import HmacDrbg

if TYPE_CHECKING:
    from .dsa_components import KeySize

MR_ROUNDS = 64
_P_ATTEMPTS = 4096
_K_ATTEMPTS = 4096


class _Parameters(Protocol):
    p: int
    q: int
    g: int


def _sieve(limit: int) -> list[int]:
    flags = bytearray([1]) * limit
    flags[:2] = b"\x00\x00"
    for i in range(2, int(limit**0.5) + 1):
        if flags[i]:
            flags[i * i :: i] = bytes(len(range(i * i, limit, i)))
    return [i for i, flag in enumerate(flags) if flag]


_SMALL_PRIMES = _sieve(1000)


def _rng(rng: random.Random | None) -> random.Random:
    return rng if rng is not None else secrets.SystemRandom()


def calculate_bounds(size: int) -> tuple[int, int]:
    """Lower and upper bounds, 2**(size-1) and 2**size, for a `size`-bit value."""
    if size < 1:
        raise ValueError("size must be positive")
    return 1 << (size - 1), 1 << size


def is_probable_prime(n: int, rounds: int = MR_ROUNDS, rng: random.Random | None = None) -> bool:
    """Trial division followed by `rounds` Miller-Rabin rounds."""
    if n < 2:
        return False
    for prime in _SMALL_PRIMES:
        if n == prime:
            return True
        if n % prime == 0:
            return False
    source = _rng(rng)
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1
    for _ in range(rounds):
        x = pow(source.randrange(2, n - 1), d, n)
        if x in (1, n - 1):
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def generate_prime(bit_length: int, rng: random.Random | None = None) -> int:
    """A random probable prime of exactly `bit_length` bits."""
    if bit_length < 2:
        raise ValueError("prime bit length must be at least 2")
    source = _rng(rng)
    top = 0b11 << (bit_length - 2)
    while True:
        candidate = source.getrandbits(bit_length) | top | 1
        if is_probable_prime(candidate, MR_ROUNDS, source):
            return candidate


def common_components(key_size: KeySize, rng: random.Random | None = None) -> tuple[int, int, int]:
    """Generate the common components, returned as (p, q, g)."""
    source = _rng(rng)
    l, n = key_size.l, key_size.n  # noqa: E741
    p_min, p_max = calculate_bounds(l)
    q_min, q_max = calculate_bounds(n)

    p = q = 0
    found = False
    while not found:
        q = generate_prime(n, source)
        if q < q_min or q > q_max:
            continue
        # Search for a prime p with a subgroup of order q.
        for _ in range(_P_ATTEMPTS):
            while True:
                m = source.getrandbits(l)
                if p_min < m < p_max:
                    break
            p = m - m % (2 * q) + 1
            if is_probable_prime(p, MR_ROUNDS, source):
                found = True
                break

    # Unverifiable generation of g (FIPS 186-4, Appendix A.2.1).
    e = (p - 1) // q
    h = 1
    while True:
        g = pow(h, e, p)
        if g != 1:
            return p, q, g
        h += 1


def public_component(components: _Parameters, x: int) -> int:
    """The public component y = g**x mod p."""
    return pow(components.g, x, components.p)


def _to_bytes(value: int) -> bytes:
    return value.to_bytes(max(1, (value.bit_length() + 7) // 8), "big")


def reduce_hash(q: int, hash: bytes) -> bytes:
    """Truncate the hash to q's byte length, reduce it modulo q and left-pad it."""
    q_byte_len = q.bit_length() // 8
    value = int.from_bytes(bytes(hash)[:q_byte_len], "big") % q
    return _to_bytes(value).rjust(q_byte_len, b"\x00")


def secret_number_rfc6979(digest: Any, q: int, x: int, hash: bytes) -> tuple[int, int]:
    """Derive k and its inverse modulo q deterministically (RFC 6979)."""
    k_size = q.bit_length() // 8
    drbg = HmacDrbg(digest, _to_bytes(x), reduce_hash(q, hash), b"")
    while True:
        k = int.from_bytes(drbg.fill_bytes(k_size), "big")
        if not 0 < k < q:
            continue
        try:
            inv_k = pow(k, -1, q)
        except ValueError:
            continue
        return k, inv_k


def secret_number(components: _Parameters, rng: random.Random | None = None) -> tuple[int, int]:
    """Pick a random k and its inverse modulo q (FIPS 186-4, Appendix B.2.1).

    Raises SignatureError if no fitting number is found after 4096 tries.
    """
    source = _rng(rng)
    q = components.q
    n = q.bit_length()
    for _ in range(_K_ATTEMPTS):
        c = source.getrandbits(n + 64)
        k = c % (q - 1) + 1
        try:
            inv_k = pow(k, -1, q)
        except ValueError:
            continue
        if 0 < inv_k < q and 0 < k < q:
            return k, inv_k
    raise SignatureError("failed to generate a per-message secret number")