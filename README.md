# sigkit

Digital signature building blocks in plain Python, with no dependencies
beyond the standard library.

What it covers:

- **DSA** domain parameters: generation of `p`, `q` and `g`, validation,
  and DER encoding; random and RFC 6979 per-message secrets; and the DSA
  signature container with its DER encoding.
- **RFC 6979** HMAC-DRBG and the deterministic `k` generator it defines.
- **ECDSA** signature containers: fixed-size `r || s` encoding, ASN.1 DER
  encoding, hex parsing and formatting, low-S normalisation, and recovery
  IDs.
- **Ed25519** signature container: 64-byte validation, hex parsing and
  formatting, and fixed-length or length-prefixed byte serialisation.
- A small **DER/PEM toolkit**, including SubjectPublicKeyInfo and PKCS#8
  PrivateKeyInfo containers.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module                   | Contents                                                        |
|--------------------------|-----------------------------------------------------------------|
| `sigkit.asn1`            | DER encoders, `DerReader`, PEM helpers, `SubjectPublicKeyInfo`, `PrivateKeyInfo`, `SignatureError`, `DerError` |
| `sigkit.rfc6979`         | `HmacDrbg`, `generate_k`                                        |
| `sigkit.recovery`        | `RecoveryId`                                                    |
| `sigkit.ed25519`         | Ed25519 `Signature`                                             |
| `sigkit.ecdsa`           | `Curve`, `P256`, `SECP256K1`, `P384`, ECDSA `Signature`, `DerSignature` |
| `sigkit.dsa_components`  | `KeySize`, `Components` (p, q, g)                               |
| `sigkit.dsa_signature`   | DSA `Signature` (r, s)                                          |
| `sigkit.dsa_generate`    | Prime, parameter and per-message secret generation              |

Validation failures raise `sigkit.asn1.SignatureError`; malformed DER or
PEM raises `sigkit.asn1.DerError`. Both are subclasses of `ValueError`.

## DSA

```python
from sigkit.dsa_components import Components, KeySize

components = Components.from_components(p, q, g)
fresh = Components.generate(KeySize.DSA_2048_256)
der = fresh.to_der()                       # SEQUENCE { p, q, g }
assert Components.from_der(der) == fresh
```

`from_components` raises `SignatureError` unless `p` and `q` are at least 2
and `g` is in `1..p`. `KeySize` offers `DSA_1024_160`, `DSA_2048_224`,
`DSA_2048_256` and `DSA_3072_256`. `Components.generate` takes an optional
`random.Random`; without one it uses `secrets.SystemRandom`.

`sigkit.dsa_generate` holds the lower-level pieces:

- `generate_prime(bit_length, rng)` and `is_probable_prime(n, rounds, rng)`
  (trial division, then Miller-Rabin).
- `common_components(key_size, rng)` returns `(p, q, g)`.
- `public_component(components, x)` returns `g**x mod p`.
- `secret_number(components, rng)` draws a random `k` and its inverse
  modulo `q`, raising `SignatureError` after 4096 failed attempts.
- `secret_number_rfc6979(digest, q, x, hash)` derives `k` and its inverse
  deterministically, for example with `digest=hashlib.sha256`.

DSA signatures encode to and decode from `SEQUENCE { INTEGER r, INTEGER s }`
with `sigkit.dsa_signature.Signature.to_der` and `Signature.from_der`;
`is_valid_for(q)` checks that `r` and `s` are non-zero and not above `q`.

## ECDSA signatures

`sigkit.ecdsa.Signature` holds `r` and `s` as fixed-width big-endian
scalars for a given `Curve`. It rejects zero scalars and scalars not below
the curve order. `to_der` gives a `DerSignature`, and `from_der` accepts
strict DER only: non-minimal lengths, trailing bytes and oversized integers
are refused. `normalize_s` returns the low-S form of a signature, or `None`
when it is already low.

## Ed25519 signatures

```python
from sigkit.ed25519 import Signature

sig = Signature.from_hex("e5564300c360ac72...")  # 128 hex digits
print(sig)             # upper-case hex
print(f"{sig:x}")      # lower-case hex
raw = bytes(sig)       # 64 bytes
```

`from_hex` accepts upper- or lower-case hex but not a mix of both.
`from_bytes` rejects anything that is not 64 bytes, and signatures whose top
three bits of `s` are set. `serialize_bytes` prefixes the 64 bytes with a
little-endian 64-bit length; `deserialize_bytes` reads that form back.

## Recovery IDs

```python
from sigkit.recovery import RecoveryId

rid = RecoveryId.new(True, False)
rid.to_byte()       # 1
rid.is_y_odd()      # True
RecoveryId.from_byte(4)  # raises SignatureError
```

## What is not included

sigkit has no DSA key types: it does not sign messages, verify DSA
signatures, or read and write DSA keys as SubjectPublicKeyInfo or PKCS#8
documents. The pieces for doing so are here (`Components`,
`public_component`, the secret-number functions, the DSA `Signature`, and
the `SubjectPublicKeyInfo` and `PrivateKeyInfo` containers with
`pem_encode` and `pem_decode`), but assembling them is left to the caller.
It also installs no command-line tool.