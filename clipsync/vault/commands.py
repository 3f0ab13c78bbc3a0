"""Commands exposed to the untrusted front end.

Each command runs the core operation and converts any VaultError into a
CommandError carrying a stable code and a generic message. Internal error
text never reaches the caller; it stays on the exception chain for
in-process diagnostics only.
"""

from functools import wraps
from typing import Any, Callable, Optional, TypeVar, Union

from ..utils.logging import get_logger
from .envelope import Envelope, EnvelopeCodec
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
from .keystore import KeyringStore
from .session import SecretStore, get_secret_store

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Error code -> message shown to the caller
ERROR_MESSAGES = {
    "secret_not_set": "Secret not set",
    "lock_failed": "Secret store unavailable",
    "invalid_input": "Invalid message",
    "decryption_failed": "Failed to decrypt message",
    "internal_error": "Internal error",
    "keyring_error": "Keyring unavailable",
}

_ERROR_CODES: list[tuple[type, str]] = [
    (SecretNotSetError, "secret_not_set"),
    (LockFailedError, "lock_failed"),
    (InvalidEncodingError, "invalid_input"),
    (InvalidNonceError, "invalid_input"),
    (InvalidUtf8Error, "invalid_input"),
    (DecryptionError, "decryption_failed"),
    (KeyDerivationError, "internal_error"),
    (EncryptionError, "internal_error"),
    (KeyringError, "keyring_error"),
]


class CommandError(Exception):
    """Generic, non-distinguishing failure returned across the trust boundary."""

    def __init__(self, code: str):
        self.code = code
        self.message = ERROR_MESSAGES[code]
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for the caller."""
        return {"code": self.code, "message": self.message}


def error_code(error: VaultError) -> str:
    """Map an internal vault error to its boundary error code."""
    for error_type, code in _ERROR_CODES:
        if isinstance(error, error_type):
            return code
    return "internal_error"


def _command(func: F) -> F:
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except VaultError as e:
            code = error_code(e)
            logger.warning(f"Command {func.__name__} failed: {code}")
            raise CommandError(code) from e

    return wrapper  # type: ignore[return-value]


@_command
def set_secret(passphrase: str, store: Optional[SecretStore] = None) -> None:
    """Load a passphrase into the session, replacing any previous one."""
    (store or get_secret_store()).set(passphrase)


@_command
def clear_secret(store: Optional[SecretStore] = None) -> None:
    """Remove the session passphrase."""
    (store or get_secret_store()).clear()


@_command
def encrypt_message(plaintext: str, store: Optional[SecretStore] = None) -> dict[str, str]:
    """Seal clipboard text and return the envelope as a dict."""
    return EnvelopeCodec(store).seal(plaintext).to_dict()


@_command
def decrypt_message(
    envelope: Union[Envelope, dict[str, Any]],
    store: Optional[SecretStore] = None,
) -> str:
    """Open an envelope (Envelope or dict) and return the plaintext."""
    if not isinstance(envelope, Envelope):
        envelope = Envelope.from_dict(envelope)
    return EnvelopeCodec(store).open(envelope)


@_command
def save_secret(passphrase: str, keystore: Optional[KeyringStore] = None) -> None:
    """Persist a passphrase in the OS keyring."""
    (keystore or KeyringStore()).save(passphrase)


@_command
def delete_saved_secret(keystore: Optional[KeyringStore] = None) -> bool:
    """Delete the passphrase saved in the OS keyring."""
    return (keystore or KeyringStore()).delete()


@_command
def unlock_from_keyring(
    keystore: Optional[KeyringStore] = None,
    store: Optional[SecretStore] = None,
) -> bool:
    """
    Load the saved passphrase into the session store.

    Returns:
        True if a saved passphrase was found and loaded
    """
    passphrase = (keystore or KeyringStore()).load()
    if passphrase is None:
        return False
    (store or get_secret_store()).set(passphrase)
    return True
