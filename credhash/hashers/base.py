# credhash/hashers/base.py
from __future__ import annotations
import secrets
from typing import Protocol, Type, Union, runtime_checkable

from pydantic_settings import BaseSettings

from ..encoding import DecodedHash
from ..errors import CryptoFailure
from ..params import AlgorithmParameters

Password = Union[str, bytes]


@runtime_checkable
class Hasher(Protocol):
    """What a registry entry provides for one algorithm."""

    name: str
    settings_cls: Type[BaseSettings]  # needs an `algorithm` ClassVar for error reports

    def parameters(self, settings: BaseSettings) -> AlgorithmParameters:
        """Build call parameters from a validated settings instance."""
        ...

    def encode(self, password: Password, params: AlgorithmParameters) -> str:
        """Hash `password` with `params` and return the encoded string."""
        ...

    def decode(self, encoded: str) -> DecodedHash:
        """Parse and validate an encoded string produced by encode()."""
        ...

    def verify(self, password: Password, encoded: str) -> bool:
        """True on match, False on mismatch; raises only for bad input."""
        ...


def to_bytes(password: Password) -> bytes:
    if isinstance(password, bytes):
        return password
    if isinstance(password, str):
        return password.encode("utf-8")
    raise TypeError(f"password must be str or bytes, not {type(password).__name__}")


def random_bytes(n: int) -> bytes:
    try:
        return secrets.token_bytes(n)
    except OSError as exc:
        raise CryptoFailure("random source unavailable") from exc
