# credhash/errors.py
"""
Exception types raised by the hashing core.

A wrong password is never an error: verify() returns False for it.
Messages carry the algorithm and the offending field name only, never the
password, salt or hash bytes.
"""
from __future__ import annotations
from typing import Iterable


class PasswordHashError(Exception):
    """Base class for every error raised by credhash."""


class ConfigurationError(PasswordHashError, ValueError):
    def __init__(self, algorithm: str, fields: Iterable[str], reason: str = "missing or invalid"):
        self.algorithm = algorithm
        self.fields = tuple(fields)
        self.reason = reason
        super().__init__(f"{algorithm}: {reason} configuration for {', '.join(self.fields) or '<unknown>'}")


class UnsupportedAlgorithmError(PasswordHashError, LookupError):
    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(f"Algorithm {algorithm!r} is not supported")


class FormatError(PasswordHashError, ValueError):
    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Malformed encoded hash ({field}): {reason}")


class IncompatibilityError(PasswordHashError):
    def __init__(self, algorithm: str, version: int, supported: int):
        self.algorithm = algorithm
        self.version = version
        self.supported = supported
        super().__init__(f"{algorithm} version {version} is not supported (expected {supported})")


class CryptoFailure(PasswordHashError):
    """Random source or derivation primitive failed."""


class PasswordTooLongError(PasswordHashError, ValueError):
    def __init__(self, algorithm: str, limit: int):
        self.algorithm = algorithm
        self.limit = limit
        super().__init__(f"{algorithm} accepts at most {limit} password bytes")
