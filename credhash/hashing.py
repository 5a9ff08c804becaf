# credhash/hashing.py
from __future__ import annotations
from functools import lru_cache
from typing import Optional

from .encoding import DecodedHash, algorithm_tag
from .errors import FormatError, IncompatibilityError
from .hashers.base import Password
from .params import ParameterStore
from .registry import Registry, default_registry
from .utils.logging import logger

DEFAULT_ALGORITHM = "argon2id"


class CredentialHasher:
    """
    Entry point for callers: encode a password under a named algorithm,
    verify a password against any encoded string the registry understands.
    Holds no per-call state, so one instance can be shared across threads.
    """

    def __init__(self, registry: Optional[Registry] = None, store: Optional[ParameterStore] = None):
        self.registry = registry or default_registry()
        self.store = store or ParameterStore(registry=self.registry)

    def encode(self, algorithm: str, password: Password) -> str:
        hasher = self.registry.lookup(algorithm)
        params = self.store.resolve(algorithm)
        return hasher.encode(password, params)

    def decode(self, encoded: str) -> DecodedHash:
        return self.registry.lookup(algorithm_tag(encoded)).decode(encoded)

    def verify(self, password: Password, encoded: str) -> bool:
        """
        Returns (match). A wrong password is False; malformed or
        incompatible input raises.
        """
        tag = algorithm_tag(encoded)
        hasher = self.registry.lookup(tag)
        try:
            match = hasher.verify(password, encoded)
        except (FormatError, IncompatibilityError) as exc:
            logger.warning("Rejected %s hash: %s", tag, exc)
            raise
        if not match:
            logger.debug("%s password mismatch", tag)
        return match

    def needs_rehash(self, encoded: str, algorithm: Optional[str] = None) -> bool:
        """
        True when `encoded` was made with another algorithm than `algorithm`
        (default: its own) or with parameters other than the configured ones.
        """
        decoded = self.decode(encoded)
        target = algorithm or decoded.algorithm
        self.registry.lookup(target)
        if target != decoded.algorithm:
            return True
        return decoded.parameters != self.store.resolve(target)


@lru_cache(maxsize=1)
def default_hasher() -> CredentialHasher:
    return CredentialHasher()


def hash_password(password: Password, algorithm: str = DEFAULT_ALGORITHM) -> str:
    return default_hasher().encode(algorithm, password)


def verify_password(password: Password, encoded: str) -> bool:
    return default_hasher().verify(password, encoded)


def decode_hash(encoded: str) -> DecodedHash:
    return default_hasher().decode(encoded)


def needs_rehash(encoded: str, algorithm: Optional[str] = None) -> bool:
    return default_hasher().needs_rehash(encoded, algorithm)
