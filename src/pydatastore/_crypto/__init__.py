"""Cryptographic primitives for encrypted store files."""

from __future__ import annotations

from pydatastore._crypto.aes import aes_decrypt_utf8, aes_encrypt_hex
from pydatastore._crypto.keys import KEY_SIZE, EncryptionKey, has_encryption_key, normalize_key

__all__ = [
    "KEY_SIZE",
    "EncryptionKey",
    "aes_decrypt_utf8",
    "aes_encrypt_hex",
    "has_encryption_key",
    "normalize_key",
]
