"""DSA parameters and secret numbers, RFC 6979 nonces, DSA, ECDSA and Ed25519
signature containers, and DER/PEM encoding."""

__version__ = "0.1.0"