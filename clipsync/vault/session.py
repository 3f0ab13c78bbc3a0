"""Session secret management for envelope encryption.

Holds the user's passphrase for the lifetime of a session so it only has to
be entered once. Only the passphrase is kept; keys are derived per message.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from ..config.settings import get_config
from ..utils.logging import get_logger
from .crypto import encode_utf8, scrub
from .exceptions import LockFailedError, SecretNotSetError

logger = get_logger(__name__)


class SecretStore:
    """
    Thread-safe holder for the single session passphrase.

    The passphrase is stored as a bytearray so it can be zeroed on
    replacement or clear. The lock is held only while copying the value in
    or out, never during key derivation.
    """

    _instance: Optional["SecretStore"] = None
    _instance_lock = threading.Lock()

    def __init__(self, lock_timeout: Optional[float] = None):
        """
        Initialize an empty store (use get_instance() for the process-wide one).

        Args:
            lock_timeout: Seconds to wait for the lock (None = use config default)
        """
        if lock_timeout is None:
            lock_timeout = get_config().lock_timeout_seconds
        self._lock_timeout = lock_timeout
        self._secret: Optional[bytearray] = None
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> "SecretStore":
        """Get singleton secret store instance."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset singleton (for testing)."""
        with cls._instance_lock:
            if cls._instance is not None:
                cls._instance.clear()
            cls._instance = None

    @contextmanager
    def _locked(self) -> Iterator[None]:
        if not self._lock.acquire(timeout=self._lock_timeout):
            logger.error("Secret store lock acquisition timed out")
            raise LockFailedError()
        try:
            yield
        finally:
            self._lock.release()

    def set(self, passphrase: str) -> None:
        """
        Replace the session passphrase.

        Args:
            passphrase: New passphrase; any previous one is scrubbed

        Raises:
            InvalidEncodingError: If the passphrase cannot be encoded as UTF-8
            LockFailedError: If the lock cannot be acquired
        """
        fresh = bytearray(encode_utf8(passphrase, "passphrase"))
        with self._locked():
            previous = self._secret
            self._secret = fresh
        if previous is not None:
            scrub(previous)
        logger.debug("Session secret set")

    def get(self) -> bytearray:
        """
        Copy the session passphrase out of the store.

        The caller owns the returned buffer and should scrub it when done.

        Returns:
            UTF-8 passphrase bytes

        Raises:
            SecretNotSetError: If no passphrase is held
            LockFailedError: If the lock cannot be acquired
        """
        with self._locked():
            if self._secret is None:
                raise SecretNotSetError()
            return bytearray(self._secret)

    def clear(self) -> None:
        """Remove the session passphrase. Clearing an empty store is a no-op."""
        with self._locked():
            previous = self._secret
            self._secret = None
        if previous is not None:
            scrub(previous)
            logger.debug("Session secret cleared")

    def is_set(self) -> bool:
        """Check whether a passphrase is currently held."""
        with self._locked():
            return self._secret is not None


# Module-level convenience functions


def get_secret_store() -> SecretStore:
    """Get the global secret store instance."""
    return SecretStore.get_instance()
