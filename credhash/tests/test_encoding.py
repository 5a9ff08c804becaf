# tests/test_encoding.py
import pytest

from credhash.encoding import (
    algorithm_tag, b64decode, b64encode, format_argon2id, format_bcrypt,
    parse_argon2id, parse_bcrypt, parse_params,
)
from credhash.errors import FormatError

ARGON_VECTOR = "$argon2id$v=19,m=65536,t=6,p=2$gQc4ZccIqosKqCMKYUgP8A$x/xg/7uiPsBrRd11wC0mtiM2fjeqHzqTcjs2fLMsiGw"
BCRYPT_VECTOR = "$bcrypt$c=4$JDJhJDA0JDVWaEhScW5XTUtESmN6U3NyL3FMZHV5UnBsamsxV08wTjNINXNmdVdFd0tmdU5MZ1I4ck02"


def test_b64_is_unpadded():
    assert b64encode(b"\x00") == "AA"
    assert b64decode("salt", "AA") == b"\x00"


@pytest.mark.parametrize("text", ["AA==", "A", "AB", "A*", "A A", "AAé"])
def test_b64_strict(text):
    with pytest.raises(FormatError):
        b64decode("salt", text)


def test_b64_empty():
    with pytest.raises(FormatError) as ei:
        b64decode("hash", "")
    assert ei.value.field == "hash"


def test_algorithm_tag():
    assert algorithm_tag(ARGON_VECTOR) == "argon2id"
    assert algorithm_tag("$scrypt$ln=15") == "scrypt"


@pytest.mark.parametrize("encoded", ["not-a-valid-hash", "", "argon2id$v=19", "$$v=19", "$Argon2id$x", "$argon2id!v=19$x"])
def test_algorithm_tag_malformed(encoded):
    with pytest.raises(FormatError):
        algorithm_tag(encoded)


def test_parse_params():
    assert parse_params("v=19,m=65536,t=6,p=2", ("v", "m", "t", "p")) == {"v": 19, "m": 65536, "t": 6, "p": 2}


@pytest.mark.parametrize("text", [
    "v=19,m=65536,t=6",          # missing key
    "v=19,m=65536,p=2,t=6",      # wrong order
    "v=19,m=65536,t=6,p=2,x=1",  # extra key
    "v=19,m=,t=6,p=2",
    "v=19,m=-1,t=6,p=2",
    "v=19,m=0x10,t=6,p=2",
    "v=19,m=065536,t=6,p=2",
    "v=19;m=65536;t=6;p=2",
    "v19,m=65536,t=6,p=2",
])
def test_parse_params_malformed(text):
    with pytest.raises(FormatError):
        parse_params(text, ("v", "m", "t", "p"))


def test_parse_argon2id_vector():
    fmt = parse_argon2id(ARGON_VECTOR)
    assert (fmt.version, fmt.memory_cost, fmt.iterations, fmt.parallelism) == (19, 65536, 6, 2)
    assert len(fmt.salt) == 16
    assert len(fmt.hash) == 32


def test_format_argon2id_reproduces_input():
    fmt = parse_argon2id(ARGON_VECTOR)
    again = format_argon2id(fmt.version, fmt.memory_cost, fmt.iterations, fmt.parallelism, fmt.salt, fmt.hash)
    assert again == ARGON_VECTOR


@pytest.mark.parametrize("encoded", [
    "$argon2id$v=19,m=65536,t=6,p=2$gQc4ZccIqosKqCMKYUgP8A",
    "$argon2id$v=19,m=65536,t=6,p=2$gQc4ZccIqosKqCMKYUgP8A$x/xg$extra",
    "argon2id$v=19,m=65536,t=6,p=2$gQc4ZccIqosKqCMKYUgP8A$x/xg/7uiPsBrRd11wC0mtiM2fjeqHzqTcjs2fLMsiGw",
    "$argon2id$m=65536,t=6,p=2$gQc4ZccIqosKqCMKYUgP8A$x/xg/7uiPsBrRd11wC0mtiM2fjeqHzqTcjs2fLMsiGw",
    "$argon2id$v=19,m=65536,t=6,p=2$gQc4ZccIqosKqCMKYUgP8A==$x/xg/7uiPsBrRd11wC0mtiM2fjeqHzqTcjs2fLMsiGw",
])
def test_parse_argon2id_malformed(encoded):
    with pytest.raises(FormatError):
        parse_argon2id(encoded)


def test_parse_bcrypt_vector():
    fmt = parse_bcrypt(BCRYPT_VECTOR)
    assert fmt.cost == 4
    assert fmt.embedded_cost == 4
    assert fmt.hash.startswith(b"$2a$04$")
    assert format_bcrypt(fmt.cost, fmt.hash) == BCRYPT_VECTOR


def test_parse_bcrypt_cost_mismatch():
    with pytest.raises(FormatError) as ei:
        parse_bcrypt(BCRYPT_VECTOR.replace("$c=4$", "$c=12$"))
    assert ei.value.field == "c"


def test_parse_bcrypt_inner_not_bcrypt():
    with pytest.raises(FormatError):
        parse_bcrypt(format_bcrypt(4, b"plainly not a bcrypt hash"))


def test_parse_bcrypt_field_count():
    with pytest.raises(FormatError):
        parse_bcrypt("$bcrypt$c=4")


@pytest.mark.parametrize("prefix", [b"$2x$", b"$2$", b"$3b$"])
def test_parse_bcrypt_unsupported_prefix(prefix):
    inner = prefix + b"04$" + b"a" * 53
    with pytest.raises(FormatError):
        parse_bcrypt(format_bcrypt(4, inner))
