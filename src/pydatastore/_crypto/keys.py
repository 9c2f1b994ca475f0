"""Encryption key normalization.

String keys are hashed to the AES-256 key size with SHA-256. Binary keys are
used directly when they already have the right size, otherwise they are
truncated or zero-padded to it.
"""

from __future__ import annotations

import hashlib
from typing import TypeAlias

from pydatastore.exceptions import DataStoreKeyError

#: AES-256 key size in bytes.
KEY_SIZE = 32

EncryptionKey: TypeAlias = str | bytes | bytearray | memoryview


def has_encryption_key(key: EncryptionKey | None) -> bool:
    """Return ``True`` when *key* is present and non-empty."""
    if key is None:
        return False
    if isinstance(key, memoryview):
        return key.nbytes > 0
    return len(key) > 0


def normalize_key(key: EncryptionKey | None) -> bytes:
    """Derive the fixed-size AES key from user supplied key material.

    Parameters
    ----------
    key : str, bytes, bytearray or memoryview
        Key material. Strings are hashed with SHA-256; binary keys are
        truncated or zero-padded to :data:`KEY_SIZE` bytes.

    Returns
    -------
    bytes
        A :data:`KEY_SIZE` byte key.

    Raises
    ------
    DataStoreKeyError
        If *key* is missing, empty, or of an unsupported type.
    """
    if not has_encryption_key(key):
        raise DataStoreKeyError("No encryption key provided")
    if isinstance(key, str):
        return hashlib.sha256(key.encode("utf-8")).digest()
    if isinstance(key, (bytes, bytearray, memoryview)):
        raw = bytes(key)
        if len(raw) >= KEY_SIZE:
            return raw[:KEY_SIZE]
        return raw.ljust(KEY_SIZE, b"\x00")
    raise DataStoreKeyError(f"Invalid encryption key type: {type(key).__name__}")
