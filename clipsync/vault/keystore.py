"""Optional persistence of the passphrase in the OS keyring.

This path is separate from per-message cryptography: it only saves, loads
and deletes the raw passphrase under a fixed service/account pair.
"""

from typing import Optional

import keyring
from keyring.errors import KeyringError as BackendError
from keyring.errors import PasswordDeleteError

from ..config.settings import get_config
from ..utils.logging import get_logger
from .exceptions import KeyringError

logger = get_logger(__name__)


class KeyringStore:
    """Saves the session passphrase in the platform keyring."""

    def __init__(self, service: Optional[str] = None, account: Optional[str] = None):
        """
        Args:
            service: Keyring service name (None = config default)
            account: Keyring account name (None = config default)
        """
        config = get_config()
        self.service = service or config.keyring_service
        self.account = account or config.keyring_account

    def save(self, passphrase: str) -> None:
        """Store the passphrase, replacing any saved value."""
        try:
            keyring.set_password(self.service, self.account, passphrase)
        except BackendError as e:
            raise KeyringError(f"Failed to save secret: {e}") from e
        logger.info(f"Saved secret to keyring service '{self.service}'")

    def load(self) -> Optional[str]:
        """
        Load the saved passphrase.

        Returns:
            The passphrase, or None if nothing is saved
        """
        try:
            return keyring.get_password(self.service, self.account)
        except BackendError as e:
            raise KeyringError(f"Failed to load secret: {e}") from e

    def delete(self) -> bool:
        """
        Delete the saved passphrase.

        Returns:
            True if a value was deleted, False if none was saved
        """
        try:
            keyring.delete_password(self.service, self.account)
        except PasswordDeleteError:
            return False
        except BackendError as e:
            raise KeyringError(f"Failed to delete secret: {e}") from e
        logger.info(f"Deleted secret from keyring service '{self.service}'")
        return True
