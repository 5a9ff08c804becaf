# tests/conftest.py
import pytest

from credhash.hashing import CredentialHasher
from credhash.params import ParameterStore

# cheap but legal parameters so the suite stays fast
ARGON2ID_ENV = {
    "ARGON2ID_MEMORY": "1024",
    "ARGON2ID_ITERATIONS": "1",
    "ARGON2ID_PARALLELISM": "1",
    "ARGON2ID_SALT_LENGTH": "16",
    "ARGON2ID_KEY_LENGTH": "32",
}
BCRYPT_ENV = {"BCRYPT_COST": "4"}


@pytest.fixture
def clean_env(monkeypatch):
    for name in (*ARGON2ID_ENV, *BCRYPT_ENV):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def hash_env(clean_env):
    for name, value in {**ARGON2ID_ENV, **BCRYPT_ENV}.items():
        clean_env.setenv(name, value)
    return clean_env


@pytest.fixture
def store():
    return ParameterStore(env_file=None)


@pytest.fixture
def hasher(hash_env, store):
    return CredentialHasher(store=store)
