"""Shared pytest fixtures for clipsync tests."""

import base64
from typing import Generator

import keyring
import pytest
from keyring.backend import KeyringBackend
from keyring.errors import KeyringError, PasswordDeleteError


PASSPHRASE = "correct horse battery staple"


class InMemoryKeyring(KeyringBackend):
    """Keyring backend that keeps passwords in a dict."""

    priority = 1

    def __init__(self):
        super().__init__()
        self.passwords: dict[tuple[str, str], str] = {}

    def get_password(self, service, username):
        return self.passwords.get((service, username))

    def set_password(self, service, username, password):
        self.passwords[(service, username)] = password

    def delete_password(self, service, username):
        if (service, username) not in self.passwords:
            raise PasswordDeleteError("Password not found")
        del self.passwords[(service, username)]


class BrokenKeyring(KeyringBackend):
    """Keyring backend whose every operation fails."""

    priority = 1

    def get_password(self, service, username):
        raise KeyringError("backend locked")

    def set_password(self, service, username, password):
        raise KeyringError("backend locked")

    def delete_password(self, service, username):
        raise KeyringError("backend locked")


@pytest.fixture(autouse=True)
def isolated_state() -> Generator[None, None, None]:
    """Reset global config and secret store around each test."""
    from clipsync.config.settings import configure
    from clipsync.vault.session import SecretStore

    configure(None)
    SecretStore.reset_instance()
    yield
    SecretStore.reset_instance()
    configure(None)


@pytest.fixture(autouse=True)
def memory_keyring() -> Generator[InMemoryKeyring, None, None]:
    """Replace the OS keyring with an in-memory backend."""
    previous = keyring.get_keyring()
    backend = InMemoryKeyring()
    keyring.set_keyring(backend)
    yield backend
    keyring.set_keyring(previous)


@pytest.fixture
def broken_keyring(memory_keyring) -> BrokenKeyring:
    """Install a keyring backend that always fails."""
    backend = BrokenKeyring()
    keyring.set_keyring(backend)
    return backend


@pytest.fixture
def store():
    """Provide a fresh secret store holding the test passphrase."""
    from clipsync.vault.session import SecretStore

    store = SecretStore(lock_timeout=1.0)
    store.set(PASSPHRASE)
    return store


@pytest.fixture
def codec(store):
    """Provide an envelope codec bound to the test store."""
    from clipsync.vault.envelope import EnvelopeCodec

    return EnvelopeCodec(store)


def _flip_bit(encoded: str, byte_index: int = 0, bit: int = 0) -> str:
    raw = bytearray(base64.b64decode(encoded))
    raw[byte_index] ^= 1 << bit
    return base64.b64encode(bytes(raw)).decode("ascii")


@pytest.fixture
def flip_bit():
    """Provide a helper that flips one bit of a base64 field and re-encodes it."""
    return _flip_bit
