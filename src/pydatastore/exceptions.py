"""Custom exception hierarchy for pydatastore."""

from __future__ import annotations


class DataStoreError(Exception):
    """Base exception for all pydatastore errors."""


class DataStoreConfigError(DataStoreError):
    """Invalid or missing store options."""


class DataStoreCryptoError(DataStoreError):
    """Encryption or decryption failure."""


class DataStoreKeyError(DataStoreCryptoError):
    """Encryption was requested but no usable key is configured.

    This indicates a misconfiguration and is always raised to the caller,
    unlike decryption failures during load which fall back to the template.
    """
