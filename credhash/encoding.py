# credhash/encoding.py
"""
The `$`-delimited encoded-hash grammar.

    $argon2id$v=<version>,m=<memory>,t=<iterations>,p=<parallelism>$<salt>$<hash>
    $bcrypt$c=<cost>$<hash>

Salt and hash fields are standard-alphabet base64 without padding. Decoding
is strict: padding, whitespace, foreign characters and non-zero trailing bits
are all rejected, so every accepted field has exactly one spelling.

parse_argon2id() and parse_bcrypt() return a tagged variant per algorithm
(Argon2idFormat or BcryptFormat); anything else is a FormatError. Range and
version checks are left to the hasher that owns the algorithm.
"""
from __future__ import annotations
import base64
import binascii
import re
from dataclasses import dataclass
from typing import Dict, Sequence

from .errors import FormatError
from .params import AlgorithmParameters

SEP = "$"
_TAG = re.compile(r"[a-z0-9-]{1,32}")
_NUMBER = re.compile(r"0|[1-9][0-9]{0,19}")
# $2b$12$ + 22 salt chars + 31 checksum chars
_BCRYPT_MCF = re.compile(rb"\$2[aby]\$([0-9]{2})\$[./A-Za-z0-9]{53}")


@dataclass(frozen=True)
class DecodedHash:
    algorithm: str
    parameters: AlgorithmParameters
    salt: bytes
    hash: bytes

    def __repr__(self) -> str:
        # keep raw bytes out of logs and tracebacks
        return (f"DecodedHash(algorithm={self.algorithm!r}, parameters={self.parameters!r}, "
                f"salt=<{len(self.salt)} bytes>, hash=<{len(self.hash)} bytes>)")


@dataclass(frozen=True)
class Argon2idFormat:
    version: int
    memory_cost: int
    iterations: int
    parallelism: int
    salt: bytes
    hash: bytes


@dataclass(frozen=True)
class BcryptFormat:
    cost: int
    hash: bytes      # the bcrypt modular-crypt string, e.g. b"$2b$12$..."

    @property
    def embedded_cost(self) -> int:
        return int(self.hash[4:6])


# -----------------------------
# base64
# -----------------------------
def b64encode(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii").rstrip("=")


def b64decode(field: str, text: str) -> bytes:
    if not text:
        raise FormatError(field, "empty")
    if "=" in text:
        raise FormatError(field, "padded base64")
    try:
        raw = base64.b64decode(text + "=" * (-len(text) % 4), validate=True)
    except (binascii.Error, ValueError):
        raise FormatError(field, "invalid base64") from None
    if b64encode(raw) != text:
        raise FormatError(field, "non-canonical base64")
    return raw


# -----------------------------
# fields
# -----------------------------
def split_fields(encoded: str) -> list:
    if not isinstance(encoded, str):
        raise FormatError("encoding", f"expected str, got {type(encoded).__name__}")
    return encoded.split(SEP)


def algorithm_tag(encoded: str) -> str:
    """Return the <algorithm> of `$<algorithm>$...`."""
    fields = split_fields(encoded)
    if len(fields) < 2 or fields[0] != "":
        raise FormatError("algorithm", "expected a leading $<algorithm>$ field")
    if not _TAG.fullmatch(fields[1]):
        raise FormatError("algorithm", "not an algorithm identifier")
    return fields[1]


def _expect_fields(encoded: str, algorithm: str, count: int) -> list:
    fields = split_fields(encoded)
    if len(fields) != count:
        raise FormatError("encoding", f"{algorithm} hashes have {count - 1} $-delimited fields, got {len(fields) - 1}")
    if fields[0] != "" or fields[1] != algorithm:
        raise FormatError("algorithm", f"expected ${algorithm}$ prefix")
    return fields


def parse_params(text: str, keys: Sequence[str]) -> Dict[str, int]:
    """Parse `k1=<n>,k2=<n>,...` with exactly `keys`, in order."""
    parts = text.split(",")
    if len(parts) != len(keys):
        raise FormatError("params", f"expected {','.join(keys)}")
    out: Dict[str, int] = {}
    for part, key in zip(parts, keys):
        name, eq, value = part.partition("=")
        if not eq or name != key:
            raise FormatError("params", f"expected {key}=<number>")
        if not _NUMBER.fullmatch(value):
            raise FormatError(key, "not a decimal number")
        out[key] = int(value)
    return out


# -----------------------------
# Argon2id
# -----------------------------
def parse_argon2id(encoded: str) -> Argon2idFormat:
    fields = _expect_fields(encoded, "argon2id", 5)
    p = parse_params(fields[2], ("v", "m", "t", "p"))
    return Argon2idFormat(
        version=p["v"],
        memory_cost=p["m"],
        iterations=p["t"],
        parallelism=p["p"],
        salt=b64decode("salt", fields[3]),
        hash=b64decode("hash", fields[4]),
    )


def format_argon2id(version: int, memory_cost: int, iterations: int, parallelism: int,
                    salt: bytes, hash: bytes) -> str:
    return (f"$argon2id$v={version},m={memory_cost},t={iterations},p={parallelism}"
            f"${b64encode(salt)}${b64encode(hash)}")


# -----------------------------
# bcrypt
# -----------------------------
def parse_bcrypt(encoded: str) -> BcryptFormat:
    fields = _expect_fields(encoded, "bcrypt", 4)
    p = parse_params(fields[2], ("c",))
    inner = b64decode("hash", fields[3])
    if not _BCRYPT_MCF.fullmatch(inner):
        raise FormatError("hash", "not a bcrypt hash")
    fmt = BcryptFormat(cost=p["c"], hash=inner)
    if fmt.embedded_cost != fmt.cost:
        raise FormatError("c", "cost does not match the embedded bcrypt cost")
    return fmt


def format_bcrypt(cost: int, hash: bytes) -> str:
    return f"$bcrypt$c={cost}${b64encode(hash)}"

