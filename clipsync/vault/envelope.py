"""Envelope sealing and opening for clipboard payloads.

An envelope is the transport-safe bundle of one encrypted message:

    {"salt": b64(16 bytes), "iv": b64(12 bytes), "ciphertext": b64(len + 16 bytes)}

Every seal draws a fresh salt and a fresh nonce, so each message is encrypted
under its own derived key.
"""

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Any, Optional

from ..utils.logging import get_logger
from .crypto import (
    NONCE_SIZE,
    SALT_SIZE,
    AeadCipher,
    KeyDerivation,
    encode_utf8,
    generate_nonce,
    scrub,
)
from .exceptions import InvalidEncodingError, InvalidNonceError, InvalidUtf8Error
from .session import SecretStore, get_secret_store

logger = get_logger(__name__)

ENVELOPE_FIELDS = ("salt", "iv", "ciphertext")


def _encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _decode(field: str, value: Any) -> bytes:
    if not isinstance(value, str):
        raise InvalidEncodingError(field)
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        raise InvalidEncodingError(field) from None


@dataclass(frozen=True)
class Envelope:
    """Base64-encoded salt, nonce and ciphertext of one sealed message."""

    salt: str
    iv: str
    ciphertext: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {
            "salt": self.salt,
            "iv": self.iv,
            "ciphertext": self.ciphertext,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Envelope":
        """
        Build an envelope from a decoded JSON object.

        Raises:
            InvalidEncodingError: If a field is missing or not a string
        """
        if not isinstance(data, dict):
            raise InvalidEncodingError("envelope")
        for name in ENVELOPE_FIELDS:
            if not isinstance(data.get(name), str):
                raise InvalidEncodingError(name)
        return cls(salt=data["salt"], iv=data["iv"], ciphertext=data["ciphertext"])

    def to_json(self) -> str:
        """Serialize to a JSON string."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> "Envelope":
        """Parse an envelope from a JSON string."""
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, TypeError):
            raise InvalidEncodingError("envelope") from None
        return cls.from_dict(data)


class EnvelopeCodec:
    """
    Seals and opens envelopes with the passphrase held in a SecretStore.

    Stateless apart from the store reference; safe to share between threads.
    """

    def __init__(self, store: Optional[SecretStore] = None):
        """
        Args:
            store: Secret store to read the passphrase from (None = global store)
        """
        self._store = store if store is not None else get_secret_store()

    def seal(self, plaintext: str) -> Envelope:
        """
        Encrypt a plaintext string into a fresh envelope.

        Args:
            plaintext: Clipboard text to encrypt

        Returns:
            Envelope with a new salt, nonce and ciphertext

        Raises:
            InvalidEncodingError: If the plaintext cannot be encoded as UTF-8
            SecretNotSetError: If no passphrase is loaded
            LockFailedError: If the secret store lock cannot be acquired
            KeyDerivationError: If Argon2 fails
            EncryptionError: If AES-GCM fails
        """
        data = encode_utf8(plaintext, "plaintext")
        secret = self._store.get()
        key: Optional[bytearray] = None
        try:
            salt = KeyDerivation.generate_salt()
            key = KeyDerivation.derive_key(secret, salt)
            nonce = generate_nonce()
            ciphertext = AeadCipher.encrypt(key, nonce, data)
        finally:
            scrub(secret)
            if key is not None:
                scrub(key)

        logger.debug(f"Sealed envelope ({len(ciphertext)} byte ciphertext)")
        return Envelope(salt=_encode(salt), iv=_encode(nonce), ciphertext=_encode(ciphertext))

    def open(self, envelope: Envelope) -> str:
        """
        Decrypt an envelope back to its plaintext string.

        Args:
            envelope: Envelope produced by seal() under the same passphrase

        Returns:
            Original plaintext

        Raises:
            SecretNotSetError: If no passphrase is loaded
            LockFailedError: If the secret store lock cannot be acquired
            InvalidEncodingError: If a field is not valid base64 or the salt is not 16 bytes
            InvalidNonceError: If the nonce is not 12 bytes
            DecryptionError: If the envelope was tampered with or the passphrase is wrong
            InvalidUtf8Error: If the decrypted bytes are not UTF-8
        """
        secret = self._store.get()
        key: Optional[bytearray] = None
        try:
            salt = _decode("salt", envelope.salt)
            nonce = _decode("iv", envelope.iv)
            ciphertext = _decode("ciphertext", envelope.ciphertext)

            # Reject bad sizes before spending time on derivation
            if len(nonce) != NONCE_SIZE:
                raise InvalidNonceError(len(nonce))
            if len(salt) != SALT_SIZE:
                raise InvalidEncodingError("salt")

            key = KeyDerivation.derive_key(secret, salt)
            plaintext = AeadCipher.decrypt(key, nonce, ciphertext)
        finally:
            scrub(secret)
            if key is not None:
                scrub(key)

        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError:
            raise InvalidUtf8Error() from None
