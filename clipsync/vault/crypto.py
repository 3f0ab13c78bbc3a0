"""Core cryptographic primitives for envelope encryption.

Uses:
- argon2-cffi for Argon2id key derivation (passphrase + per-message salt)
- the cryptography library for AES-256-GCM authenticated encryption

Key derivation parameters match the Argon2 defaults used by the other
clipboard-sync peers, so envelopes sealed here open there and vice versa.
They are fixed constants and are not read from configuration.
"""

import os
from typing import Union

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .exceptions import (
    DecryptionError,
    EncryptionError,
    InvalidEncodingError,
    InvalidNonceError,
    KeyDerivationError,
)

# Argon2id parameters (v0x13, m=19 MiB, t=2, p=1)
ARGON2_TIME_COST = 2
ARGON2_MEMORY_COST = 19 * 1024  # KiB
ARGON2_PARALLELISM = 1
ARGON2_TYPE = Type.ID

SALT_SIZE = 16  # 128 bits
KEY_SIZE = 32  # 256 bits for AES-256
NONCE_SIZE = 12  # 96 bits for AES-GCM
TAG_SIZE = 16  # 128-bit authentication tag

Passphrase = Union[str, bytes, bytearray]


def scrub(buffer: bytearray) -> None:
    """Overwrite a mutable buffer with zeros.

    Python gives no guarantee that no other copy exists, so this is
    best effort: it clears the buffers this package owns.
    """
    for i in range(len(buffer)):
        buffer[i] = 0


def encode_utf8(text: str, field: str) -> bytes:
    """
    Encode caller text as UTF-8.

    Text holding lone surrogates raises InvalidEncodingError naming the
    field. The UnicodeEncodeError is not kept as context, since it carries
    the whole input string.
    """
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        pass
    raise InvalidEncodingError(field)


def generate_nonce() -> bytes:
    """Generate a random 96-bit AES-GCM nonce."""
    return os.urandom(NONCE_SIZE)


class KeyDerivation:
    """Derives encryption keys from a passphrase using Argon2id."""

    @staticmethod
    def generate_salt() -> bytes:
        """Generate cryptographically secure random salt."""
        return os.urandom(SALT_SIZE)

    @staticmethod
    def derive_key(passphrase: Passphrase, salt: bytes) -> bytearray:
        """
        Derive a 256-bit key from a passphrase using Argon2id.

        The same passphrase and salt always produce the same key, which is
        what lets the opening side rebuild the key from the envelope salt.

        Args:
            passphrase: Session passphrase (str is encoded as UTF-8)
            salt: Per-message random salt

        Returns:
            32-byte derived key in a scrubbable buffer

        Raises:
            KeyDerivationError: If Argon2 rejects the inputs
        """
        if isinstance(passphrase, str):
            secret = encode_utf8(passphrase, "passphrase")
        else:
            secret = bytes(passphrase)

        try:
            raw = hash_secret_raw(
                secret=secret,
                salt=bytes(salt),
                time_cost=ARGON2_TIME_COST,
                memory_cost=ARGON2_MEMORY_COST,
                parallelism=ARGON2_PARALLELISM,
                hash_len=KEY_SIZE,
                type=ARGON2_TYPE,
            )
        except HashingError as e:
            raise KeyDerivationError(f"Argon2id derivation failed: {e}") from e

        return bytearray(raw)


class AeadCipher:
    """
    AES-256-GCM authenticated encryption of byte payloads.

    Ciphertext format: [encrypted payload][tag (16 bytes)]
    The nonce is not embedded; callers carry it alongside the ciphertext.
    """

    @staticmethod
    def _check_inputs(key: Union[bytes, bytearray], nonce: bytes) -> None:
        # Nonce length is caller input; key length is a programming error.
        if len(nonce) != NONCE_SIZE:
            raise InvalidNonceError(len(nonce))
        if len(key) != KEY_SIZE:
            raise ValueError(f"Key must be {KEY_SIZE} bytes, got {len(key)}")

    @staticmethod
    def encrypt(key: Union[bytes, bytearray], nonce: bytes, plaintext: bytes) -> bytes:
        """
        Encrypt a payload.

        Args:
            key: 32-byte AES key
            nonce: 12-byte nonce, never reused with the same key
            plaintext: Data to encrypt

        Returns:
            Ciphertext with the 16-byte tag appended
        """
        AeadCipher._check_inputs(key, nonce)
        try:
            return AESGCM(key).encrypt(nonce, plaintext, None)
        except Exception as e:
            raise EncryptionError(f"AES-GCM encryption failed: {e}") from e

    @staticmethod
    def decrypt(key: Union[bytes, bytearray], nonce: bytes, ciphertext: bytes) -> bytes:
        """
        Decrypt and authenticate a payload.

        Any failure means the ciphertext was tampered with or the key is
        wrong. The raised error carries no detail about which.

        Args:
            key: 32-byte AES key
            nonce: 12-byte nonce used at encryption time
            ciphertext: Encrypted payload with tag appended

        Returns:
            Decrypted plaintext
        """
        AeadCipher._check_inputs(key, nonce)
        try:
            return AESGCM(key).decrypt(nonce, ciphertext, None)
        except (InvalidTag, ValueError, OverflowError):
            raise DecryptionError() from None
