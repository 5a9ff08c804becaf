# credhash/hashers/bcrypt_hasher.py
import bcrypt

from ..config import BcryptSettings
from ..encoding import DecodedHash, format_bcrypt, parse_bcrypt
from ..errors import CryptoFailure, FormatError, PasswordTooLongError
from ..params import BcryptParameters
from ..utils.logging import logger
from .base import Password, to_bytes

MIN_COST = 4
MAX_COST = 31
MAX_PASSWORD_BYTES = 72


class BcryptHasher:
    """
    bcrypt manages its own salt inside its modular-crypt string, so the whole
    string is stored base64-encoded in the hash field and verification is
    delegated to bcrypt.checkpw.
    """
    name = "bcrypt"
    settings_cls = BcryptSettings

    def parameters(self, settings: BcryptSettings) -> BcryptParameters:
        return BcryptParameters(cost=settings.COST)

    def encode(self, password: Password, params: BcryptParameters) -> str:
        secret = to_bytes(password)
        if len(secret) > MAX_PASSWORD_BYTES:
            raise PasswordTooLongError(self.name, MAX_PASSWORD_BYTES)
        try:
            hashed = bcrypt.hashpw(secret, bcrypt.gensalt(rounds=params.cost))
        except OSError as exc:
            raise CryptoFailure("random source unavailable") from exc
        except ValueError as exc:
            raise CryptoFailure("bcrypt hashing failed") from exc
        logger.debug("bcrypt hash created c=%d", params.cost)
        return format_bcrypt(params.cost, hashed)

    def decode(self, encoded: str) -> DecodedHash:
        fmt = parse_bcrypt(encoded)
        if not MIN_COST <= fmt.cost <= MAX_COST:
            raise FormatError("c", "out of range")
        return DecodedHash(self.name, BcryptParameters(cost=fmt.cost), b"", fmt.hash)

    def verify(self, password: Password, encoded: str) -> bool:
        decoded = self.decode(encoded)
        secret = to_bytes(password)
        if len(secret) > MAX_PASSWORD_BYTES:
            # never produced by encode(); cannot match
            return False
        try:
            return bcrypt.checkpw(secret, decoded.hash)
        except ValueError:
            raise FormatError("hash", "rejected by bcrypt") from None
