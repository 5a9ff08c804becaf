# credhash/hashers/argon2id.py
import hmac

from argon2.exceptions import HashingError
from argon2.low_level import ARGON2_VERSION, Type, hash_secret_raw

from ..config import ARGON2ID_MAX_ITERATIONS, ARGON2ID_MAX_MEMORY, Argon2idSettings
from ..encoding import DecodedHash, format_argon2id, parse_argon2id
from ..errors import CryptoFailure, FormatError, IncompatibilityError
from ..params import Argon2idParameters
from ..utils.logging import logger
from .base import Password, random_bytes, to_bytes


class Argon2idHasher:
    """
    Argon2id over argon2-cffi's raw primitive. The encoded string carries
    version, m, t, p, salt and hash; salt and key lengths on verify come from
    the decoded bytes.
    """
    name = "argon2id"
    version = ARGON2_VERSION  # 0x13 == 19
    settings_cls = Argon2idSettings

    def parameters(self, settings: Argon2idSettings) -> Argon2idParameters:
        return Argon2idParameters(
            memory_cost=settings.MEMORY,
            iterations=settings.ITERATIONS,
            parallelism=settings.PARALLELISM,
            salt_length=settings.SALT_LENGTH,
            key_length=settings.KEY_LENGTH,
        )

    def encode(self, password: Password, params: Argon2idParameters) -> str:
        salt = random_bytes(params.salt_length)
        key = self._derive(to_bytes(password), salt, params)
        logger.debug("argon2id hash created m=%d t=%d p=%d",
                     params.memory_cost, params.iterations, params.parallelism)
        return format_argon2id(self.version, params.memory_cost, params.iterations,
                               params.parallelism, salt, key)

    def decode(self, encoded: str) -> DecodedHash:
        fmt = parse_argon2id(encoded)
        if fmt.version != self.version:
            raise IncompatibilityError(self.name, fmt.version, self.version)

        if not 1 <= fmt.parallelism <= 255:
            raise FormatError("p", "out of range")
        if not 8 * fmt.parallelism <= fmt.memory_cost <= ARGON2ID_MAX_MEMORY:
            raise FormatError("m", "out of range")
        if not 1 <= fmt.iterations <= ARGON2ID_MAX_ITERATIONS:
            raise FormatError("t", "out of range")
        if len(fmt.salt) < 8:
            raise FormatError("salt", "shorter than 8 bytes")
        if len(fmt.hash) < 4:
            raise FormatError("hash", "shorter than 4 bytes")

        params = Argon2idParameters(
            memory_cost=fmt.memory_cost,
            iterations=fmt.iterations,
            parallelism=fmt.parallelism,
            salt_length=len(fmt.salt),
            key_length=len(fmt.hash),
        )
        return DecodedHash(self.name, params, fmt.salt, fmt.hash)

    def verify(self, password: Password, encoded: str) -> bool:
        decoded = self.decode(encoded)
        candidate = self._derive(to_bytes(password), decoded.salt, decoded.parameters)
        # Timing-safe compare
        return hmac.compare_digest(candidate, decoded.hash)

    def _derive(self, secret: bytes, salt: bytes, params: Argon2idParameters) -> bytes:
        try:
            return hash_secret_raw(
                secret=secret,
                salt=salt,
                time_cost=params.iterations,
                memory_cost=params.memory_cost,
                parallelism=params.parallelism,
                hash_len=params.key_length,
                type=Type.ID,
                version=self.version,
            )
        except HashingError as exc:
            raise CryptoFailure("argon2id derivation failed") from exc
