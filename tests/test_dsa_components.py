import random

import pytest

from sigkit.asn1 import (
    DerError,
    SignatureError,
    encode_integer,
    encode_sequence,
    pem_decode,
    pem_encode,
)
from sigkit.dsa_components import Components, KeySize

P = int(
    "86F5CA03DCFEB225063FF830A0C769B9DD9D6153AD91D7CE27F787C43278B447"
    "E6533B86B18BED6E8A48B784A14C252C5BE0DBF60B86D6385BD2F12FB763ED88"
    "73ABFD3F5BA2E0A8C0A59082EAC056935E529DAF7C610467899C77ADEDFC846C"
    "881870B7B19B2B58F9BE0521A17002E3BDD6B86685EE90B3D9A1B02B782B1779",
    16,
)
Q = int("996F967F6C8E388D9E28D01E205FBA957A5698B1", 16)
G = int(
    "07B0F92546150B62514BB771E2A0C0CE387F03BDA6C56B505209FF25FD3C133D"
    "89BBCD97E904E09114D9A7DEFDEADFC9078EA544D2E401AEECC40BB9FBBF78FD"
    "87995A10A1C27CB7789B594BA7EFB5C4326A9FE59A070E136DB77175464ADCA4"
    "17BE5DCE2F40D10A46A3A3943F26AB7FD9C0398FF8C76EE0A56826A8A88F1DBD",
    16,
)


@pytest.fixture
def components():
    return Components.from_components(P, Q, G)


def test_decode_encode_pem_components(components):
    pem = pem_encode("DSA PARAMETERS", components.to_der())
    label, raw = pem_decode(pem)
    assert label == "DSA PARAMETERS"
    decoded = Components.from_der(raw)
    assert decoded.to_der() == raw
    assert decoded == components


def test_der_layout(components):
    der = components.to_der()
    assert der[:4] == bytes([0x30, 0x82, 0x01, 0x1E])
    assert der[4:8] == bytes([0x02, 0x81, 0x81, 0x00])
    assert len(der) == 4 + 0x11E


def test_fields(components):
    assert (components.p, components.q, components.g) == (P, Q, G)


@pytest.mark.parametrize(
    "p, q, g",
    [(1, 5, 1), (11, 1, 2), (11, 5, 0), (11, 5, 12)],
)
def test_from_components_rejects_invalid(p, q, g):
    with pytest.raises(SignatureError):
        Components.from_components(p, q, g)


def test_generator_equal_to_p_is_accepted():
    assert Components.from_components(11, 5, 11).g == 11


def test_from_der_rejects_invalid_values():
    der = encode_sequence(encode_integer(1), encode_integer(5), encode_integer(1))
    with pytest.raises(DerError):
        Components.from_der(der)


def test_from_der_rejects_trailing_data(components):
    with pytest.raises(DerError):
        Components.from_der(components.to_der() + b"\x00")


def test_from_der_rejects_missing_field():
    der = encode_sequence(encode_integer(11), encode_integer(5))
    with pytest.raises(DerError):
        Components.from_der(der)


def test_ordering():
    assert Components(11, 5, 2) < Components(13, 5, 2)
    assert Components(11, 5, 2) < Components(11, 5, 3)


def test_key_size_rejects_tiny_sizes():
    with pytest.raises(ValueError):
        KeySize(1, 160)


def test_generate_1024_160_invariants():
    comps = Components.generate(KeySize.DSA_1024_160, random.Random(0x21031949))
    assert comps.p.bit_length() == 1024
    assert comps.q.bit_length() == 160
    assert (comps.p - 1) % comps.q == 0
    assert comps.g > 1
    assert pow(comps.g, comps.q, comps.p) == 1


def test_generate_is_deterministic_for_seeded_rng():
    size = KeySize(512, 160)
    first = Components.generate(size, random.Random(42))
    second = Components.generate(size, random.Random(42))
    assert first == second
    assert Components.from_der(first.to_der()) == first