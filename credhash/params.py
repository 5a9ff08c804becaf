# credhash/params.py
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

from .config import ENV_FILE, load_settings
from .errors import UnsupportedAlgorithmError

if TYPE_CHECKING:
    from .registry import Registry


@dataclass(frozen=True)
class Argon2idParameters:
    memory_cost: int      # KiB
    iterations: int
    parallelism: int
    salt_length: int = 16
    key_length: int = 32


@dataclass(frozen=True)
class BcryptParameters:
    cost: int


AlgorithmParameters = Union[Argon2idParameters, BcryptParameters]


class ParameterStore:
    """
    Resolves an algorithm name to its tunables through the registry entry
    for that name: the entry names its settings class and builds parameters
    from it. Nothing is cached: every resolve() re-reads the environment.
    """

    def __init__(self, env_file: Optional[str] = ENV_FILE, registry: Optional["Registry"] = None):
        if registry is None:
            from .registry import default_registry
            registry = default_registry()
        self.env_file = env_file
        self.registry = registry

    def resolve(self, algorithm: str) -> AlgorithmParameters:
        hasher = self.registry.lookup(algorithm)
        return hasher.parameters(load_settings(hasher.settings_cls, self.env_file))


class StaticParameterStore(ParameterStore):
    """Fixed parameters, for callers that configure in code rather than the environment."""

    def __init__(self, **params: AlgorithmParameters):
        self.env_file = None
        self._params = dict(params)

    def resolve(self, algorithm: str) -> AlgorithmParameters:
        try:
            return self._params[algorithm]
        except KeyError:
            raise UnsupportedAlgorithmError(algorithm) from None
