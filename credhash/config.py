# credhash/config.py
from typing import ClassVar, Optional, Type, TypeVar

from pydantic import Field, ValidationError, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

ENV_FILE = ".env"

# Upper bounds for both configuration and stored hashes, so a crafted hash
# cannot pin a verify call for hours.
ARGON2ID_MAX_MEMORY = 4 * 1024 * 1024   # KiB, 4 GiB
ARGON2ID_MAX_ITERATIONS = 1024


class Argon2idSettings(BaseSettings):
    """ARGON2ID_* tunables. Every value is required."""
    algorithm: ClassVar[str] = "argon2id"

    PARALLELISM: int = Field(ge=1, le=255)
    MEMORY: int = Field(ge=1, le=ARGON2ID_MAX_MEMORY)  # KiB
    ITERATIONS: int = Field(ge=1, le=ARGON2ID_MAX_ITERATIONS)
    SALT_LENGTH: int = Field(ge=8, lt=2**32)
    KEY_LENGTH: int = Field(ge=4, lt=2**32)

    model_config = SettingsConfigDict(env_prefix="ARGON2ID_", env_file=ENV_FILE, extra="ignore")

    @field_validator("MEMORY")
    @classmethod
    def _memory_covers_lanes(cls, v: int, info: ValidationInfo) -> int:
        # argon2 needs at least 8 KiB per lane
        lanes = info.data.get("PARALLELISM")
        if lanes is not None and v < 8 * lanes:
            raise ValueError("memory must be at least 8 KiB per lane")
        return v


class BcryptSettings(BaseSettings):
    algorithm: ClassVar[str] = "bcrypt"

    COST: int = Field(ge=4, le=31)

    model_config = SettingsConfigDict(env_prefix="BCRYPT_", env_file=ENV_FILE, extra="ignore")


S = TypeVar("S", bound=BaseSettings)


def load_settings(cls: Type[S], env_file: Optional[str] = ENV_FILE) -> S:
    """
    Read a settings class from the environment (and env_file, if present).
    Called per hash/verify so a changed environment applies on the next call.
    Validation failures become ConfigurationError naming the variables only.
    """
    try:
        return cls(_env_file=env_file)
    except ValidationError as exc:
        prefix = cls.model_config.get("env_prefix", "")
        errors = exc.errors(include_input=False, include_url=False)
        fields = [f"{prefix}{e['loc'][0]}" if e["loc"] else prefix.rstrip("_") for e in errors]
        reason = "missing" if all(e["type"] == "missing" for e in errors) else "invalid"
        raise ConfigurationError(cls.algorithm, fields, reason) from exc
