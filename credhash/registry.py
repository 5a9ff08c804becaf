# credhash/registry.py
from __future__ import annotations
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

from .errors import UnsupportedAlgorithmError
from .hashers.argon2id import Argon2idHasher
from .hashers.base import Hasher
from .hashers.bcrypt_hasher import BcryptHasher


class Registry:
    """
    Read-only map of algorithm name -> hasher.
    Adding an algorithm means building a new registry with with_hasher();
    an existing one never changes after construction.
    """

    def __init__(self, hashers: Iterable[Hasher] = ()):
        entries = {}
        for h in hashers:
            if h.name in entries:
                raise ValueError(f"duplicate hasher for {h.name!r}")
            entries[h.name] = h
        self._hashers: Mapping[str, Hasher] = MappingProxyType(entries)

    def lookup(self, algorithm: str) -> Hasher:
        try:
            return self._hashers[algorithm]
        except KeyError:
            raise UnsupportedAlgorithmError(algorithm) from None

    def with_hasher(self, hasher: Hasher) -> "Registry":
        return Registry((*self._hashers.values(), hasher))

    @property
    def algorithms(self) -> Tuple[str, ...]:
        return tuple(self._hashers)

    def __contains__(self, algorithm: object) -> bool:
        return algorithm in self._hashers


def default_registry() -> Registry:
    return Registry([Argon2idHasher(), BcryptHasher()])
