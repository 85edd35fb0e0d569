"""Symmetric encryption: AES in CBC mode with PKCS#7 padding."""

from __future__ import annotations

import abc
import logging
import os
from typing import Optional, Union

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

_log = logging.getLogger(__name__)

BytesLike = Union[str, bytes, bytearray, memoryview]

AES_BLOCK_SIZE = 16
AES_DEFAULT_KEY_LENGTH = 16
_AES_KEY_LENGTHS = (16, 24, 32)


class CryptError(Exception):
    """Raised when data cannot be encrypted or decrypted."""


class Crypt(abc.ABC):
    """A reversible transformation of bytes."""

    @abc.abstractmethod
    def encrypt(self, plaintext: BytesLike) -> bytes:
        """Return the ciphertext of ``plaintext``."""

    @abc.abstractmethod
    def decrypt(self, ciphertext: BytesLike) -> bytes:
        """Return the plaintext of ``ciphertext``."""


def _as_bytes(data: BytesLike) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


class AESCrypt(Crypt):
    """AES-CBC with PKCS#7 padding; key and IV are random unless given."""

    def __init__(self, key: Optional[bytes] = None, iv: Optional[bytes] = None) -> None:
        key_bytes = os.urandom(AES_DEFAULT_KEY_LENGTH) if key is None else bytes(key)
        iv_bytes = os.urandom(AES_BLOCK_SIZE) if iv is None else bytes(iv)
        if len(key_bytes) not in _AES_KEY_LENGTHS:
            raise ValueError(f"AES key must be 16, 24 or 32 bytes, got {len(key_bytes)}")
        if len(iv_bytes) != AES_BLOCK_SIZE:
            raise ValueError(f"AES IV must be {AES_BLOCK_SIZE} bytes, got {len(iv_bytes)}")
        self._key = key_bytes
        self._iv = iv_bytes

    def _cipher(self) -> Cipher:
        return Cipher(algorithms.AES(self._key), modes.CBC(self._iv))

    def encrypt(self, plaintext: BytesLike) -> bytes:
        data = _as_bytes(plaintext)
        try:
            padder = padding.PKCS7(AES_BLOCK_SIZE * 8).padder()
            padded = padder.update(data) + padder.finalize()
            encryptor = self._cipher().encryptor()
            return encryptor.update(padded) + encryptor.finalize()
        except ValueError as exc:
            _log.error("AES Encryption error: %s", exc)
            raise CryptError(str(exc)) from exc

    def decrypt(self, ciphertext: BytesLike) -> bytes:
        data = _as_bytes(ciphertext)
        try:
            decryptor = self._cipher().decryptor()
            padded = decryptor.update(data) + decryptor.finalize()
            unpadder = padding.PKCS7(AES_BLOCK_SIZE * 8).unpadder()
            return unpadder.update(padded) + unpadder.finalize()
        except ValueError as exc:
            _log.error("AES Decryption error: %s", exc)
            raise CryptError(str(exc)) from exc