"""Redaction of store values before they reach DEBUG logs.

Configuration files routinely hold credentials next to harmless settings
(``account.password`` beside ``theme.primary``). Values whose key names a
credential are replaced with ``<redacted>``; long strings and binary blobs
are shortened so a single ``set`` cannot flood the log.
"""

from __future__ import annotations

from typing import Any

REDACTED = "<redacted>"

# Compared after lower-casing and dropping "_" and "-", so "apiKey",
# "api_key" and "API-KEY" all match "apikey".
_CREDENTIAL_NAMES: frozenset[str] = frozenset(
    {
        "password",
        "passwd",
        "passphrase",
        "pin",
        "secret",
        "clientsecret",
        "token",
        "accesstoken",
        "refreshtoken",
        "idtoken",
        "apikey",
        "privatekey",
        "licensekey",
        "encryptionkey",
        "credentials",
        "authorization",
        "cookie",
    }
)

_MAX_DEPTH = 20


def _normalize(name: str) -> str:
    return name.lower().replace("_", "").replace("-", "")


def is_sensitive_key(key: str) -> bool:
    """Return ``True`` when the last segment of dot path *key* names a credential."""
    return _normalize(key.rsplit(".", 1)[-1]) in _CREDENTIAL_NAMES


def _shorten(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return f"{text[:limit]}…<truncated>"


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a copy of the JSON-like *value* safe to put in a log line."""
    if isinstance(value, str):
        return _shorten(value, max_string)
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return f"<bytes:{len(bytes(value))}b>"
    if _depth >= _MAX_DEPTH:
        return "<max-depth>"
    if isinstance(value, dict):
        return {
            str(k): REDACTED if is_sensitive_key(str(k)) else redact_for_log(v, max_string=max_string, _depth=_depth + 1)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple, set, frozenset)):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]
    return repr(value)


def redact_entry(key: str, value: Any) -> Any:
    """Redact *value* stored under *key* for logging."""
    if is_sensitive_key(key):
        return REDACTED
    return redact_for_log(value)
