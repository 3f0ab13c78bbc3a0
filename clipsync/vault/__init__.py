"""Vault encryption module for clipsync.

Provides passphrase-based envelope encryption of clipboard payloads
(Argon2id key derivation, AES-256-GCM) and the session secret store.

Usage:
    from clipsync.vault import set_secret, encrypt_message, decrypt_message

    set_secret("correct horse battery staple")
    envelope = encrypt_message("hello")
    assert decrypt_message(envelope) == "hello"
"""

# Exceptions
from .exceptions import (
    DecryptionError,
    EncryptionError,
    InvalidEncodingError,
    InvalidNonceError,
    InvalidUtf8Error,
    KeyDerivationError,
    KeyringError,
    LockFailedError,
    SecretNotSetError,
    VaultError,
)

# Primitives
from .crypto import (
    AeadCipher,
    KeyDerivation,
    generate_nonce,
    scrub,
)

# Session management
from .session import (
    SecretStore,
    get_secret_store,
)

# Envelopes
from .envelope import (
    Envelope,
    EnvelopeCodec,
)

# Keyring persistence
from .keystore import KeyringStore

# Boundary commands
from .commands import (
    CommandError,
    clear_secret,
    decrypt_message,
    delete_saved_secret,
    encrypt_message,
    save_secret,
    set_secret,
    unlock_from_keyring,
)

__all__ = [
    # Exceptions
    "VaultError",
    "SecretNotSetError",
    "LockFailedError",
    "InvalidEncodingError",
    "InvalidNonceError",
    "KeyDerivationError",
    "EncryptionError",
    "DecryptionError",
    "InvalidUtf8Error",
    "KeyringError",
    # Primitives
    "KeyDerivation",
    "AeadCipher",
    "generate_nonce",
    "scrub",
    # Session
    "SecretStore",
    "get_secret_store",
    # Envelopes
    "Envelope",
    "EnvelopeCodec",
    # Keyring
    "KeyringStore",
    # Commands
    "CommandError",
    "set_secret",
    "clear_secret",
    "encrypt_message",
    "decrypt_message",
    "save_secret",
    "delete_saved_secret",
    "unlock_from_keyring",
]
