"""Vault exceptions for the clipsync encryption core."""


class VaultError(Exception):
    """Base exception for vault operations."""

    pass


class SecretNotSetError(VaultError):
    """Raised when no passphrase is loaded for the session."""

    def __init__(self, message: str = "Secret not set. Set a passphrase first."):
        super().__init__(message)


class LockFailedError(VaultError):
    """Raised when the secret store lock cannot be acquired."""

    def __init__(self, message: str = "Lock acquisition failed."):
        super().__init__(message)


class InvalidEncodingError(VaultError):
    """Raised when an incoming envelope field is malformed."""

    def __init__(self, field: str = ""):
        self.field = field
        message = f"Invalid encoding: {field}" if field else "Invalid encoding."
        super().__init__(message)


class InvalidNonceError(VaultError):
    """Raised when a nonce is not exactly 12 bytes."""

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"Invalid nonce length: expected 12 bytes, got {length}")


class KeyDerivationError(VaultError):
    """Raised when the key derivation primitive rejects its parameters."""

    def __init__(self, message: str = "Key derivation failed."):
        super().__init__(message)


class EncryptionError(VaultError):
    """Raised when encryption fails."""

    def __init__(self, message: str = "Failed to encrypt message."):
        super().__init__(message)


class DecryptionError(VaultError):
    """Raised when decryption or authentication fails."""

    def __init__(self, message: str = "Failed to decrypt message."):
        super().__init__(message)


class InvalidUtf8Error(VaultError):
    """Raised when decrypted bytes are not valid UTF-8."""

    def __init__(self, message: str = "Decrypted data is not valid UTF-8."):
        super().__init__(message)


class KeyringError(VaultError):
    """Raised when the OS keyring cannot save, load or delete the passphrase."""

    def __init__(self, message: str = "Keyring operation failed."):
        super().__init__(message)
