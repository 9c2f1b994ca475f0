"""File-backed store with a fixed template.

:class:`DataStore` owns one JSON file and an in-memory tree mirrored to it.
Every mutation rewrites the whole file synchronously. Loading never fails:
an absent, unreadable, undecryptable or unparsable file yields the template.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydatastore._crypto import EncryptionKey, aes_decrypt_utf8, aes_encrypt_hex, has_encryption_key, normalize_key
from pydatastore._io import atomic_write_text, read_text
from pydatastore._redact import redact_entry, redact_for_log
from pydatastore.config import StoreOptions
from pydatastore.exceptions import DataStoreConfigError, DataStoreCryptoError
from pydatastore.paths import MISSING, SEPARATOR, AssignOutcome, assign, resolve
from pydatastore.reconcile import deep_copy, reconcile

_logger = logging.getLogger(__name__)


class DataStore:
    """Template-backed key/value store persisted to ``<cwd>/<name>.json``.

    Parameters
    ----------
    name : str
        Base file name, without extension.
    template : dict
        Canonical default tree. Copied at construction and never mutated.
    cwd : str, Path or None
        Directory holding the file. Defaults to the per-user data directory.
    encryption_key : str, bytes or None
        When non-empty, the file is AES-256-CBC encrypted and hex-encoded.
    access_properties_by_dot_notation : bool
        Resolve keys containing ``"."`` as nested paths.
    auto_reconcile : bool
        Merge loaded data with the template so every template field exists.
    random_iv : bool
        Encrypt with a random IV stored in the file instead of a zero IV.
    options : StoreOptions or None
        Already validated options. Replaces every other argument.

    Raises
    ------
    DataStoreConfigError
        If the options are invalid, or *options* is combined with
        *name*/*template*.

    Examples
    --------
    .. code-block:: python

        store = DataStore("config", {"theme": {"primary": "#000000", "dark": False}})
        store.set("theme.dark", True)
        store.get("theme.dark")  # True
        store.delete("theme")  # back to the template value
    """

    def __init__(
        self,
        name: str | None = None,
        template: dict[str, Any] | None = None,
        *,
        cwd: str | Path | None = None,
        encryption_key: EncryptionKey | None = None,
        access_properties_by_dot_notation: bool = True,
        auto_reconcile: bool = True,
        random_iv: bool = False,
        options: StoreOptions | None = None,
    ) -> None:
        if options is None:
            options = StoreOptions.build(
                name=name,
                template=template,
                cwd=cwd,
                encryption_key=encryption_key,
                access_properties_by_dot_notation=access_properties_by_dot_notation,
                auto_reconcile=auto_reconcile,
                random_iv=random_iv,
            )
        elif name is not None or template is not None:
            raise DataStoreConfigError("Pass either options or name/template, not both")
        self._options = options
        self._template: dict[str, Any] = deep_copy(options.template)
        self._file_path = options.file_path
        self._key: bytes | None = None
        if has_encryption_key(options.encryption_key):
            self._key = normalize_key(options.encryption_key)
        self._data: dict[str, Any] = self.read()

    @classmethod
    def from_options(cls, options: StoreOptions) -> DataStore:
        """Create a store from already validated :class:`StoreOptions`."""
        return cls(options=options)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._options.name!r}, path={str(self._file_path)!r})"

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def store(self) -> dict[str, Any]:
        """A deep copy of the current data.

        Mutating the returned tree does not affect the store; use
        :meth:`set` or :meth:`set_all` to persist changes.
        """
        return deep_copy(self._data)

    @property
    def path(self) -> Path:
        """Absolute path of the store file."""
        return self._file_path

    @property
    def template(self) -> dict[str, Any]:
        """A deep copy of the template."""
        return deep_copy(self._template)

    @property
    def options(self) -> StoreOptions:
        return self._options

    @property
    def encrypted(self) -> bool:
        """Whether the file is encrypted."""
        return self._key is not None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def _is_path(self, key: str) -> bool:
        return self._options.access_properties_by_dot_notation and SEPARATOR in key

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value at a top-level *key* or dot path.

        Returns *default* when nothing lives there, including when the path
        runs through a value that is not a dict. Containers are returned as
        copies.
        """
        if self._is_path(key):
            value = resolve(self._data, key)
        else:
            value = self._data.get(key, MISSING)
        if value is MISSING:
            return default
        return deep_copy(value)

    def set(self, key: str, value: Any) -> AssignOutcome:
        """Set *value* at a top-level *key* or dot path and persist.

        Missing or non-dict intermediate values along a dot path are replaced
        with empty dicts. The returned :class:`AssignOutcome` tells which case
        applied. If the value cannot be serialized, the error propagates and
        the store keeps its previous data.
        """
        value = deep_copy(value)
        data = deep_copy(self._data)
        if self._is_path(key):
            outcome = assign(data, key, value)
        else:
            data[key] = value
            outcome = AssignOutcome.ASSIGNED
        if outcome is AssignOutcome.OVERWRITTEN:
            _logger.debug("Overwrote non-dict intermediate value while setting %s", key)
        _logger.debug("Set %s=%r", key, redact_entry(key, value))
        self._commit(data)
        return outcome

    def set_all(self, data: Mapping[str, Any]) -> None:
        """Replace several top-level keys at once and persist.

        Each top-level key in *data* replaces the current value wholesale;
        nested fields missing from the supplied value are then filled from
        the template default, not from the previous value.
        """
        merged = reconcile(self._template, {**self._data, **data})
        _logger.debug("Set %d keys: %r", len(data), redact_for_log(dict(data)))
        self._commit(merged)

    def delete(self, key: str) -> None:
        """Reset a top-level *key* or dot path to its template value and persist.

        A key the template does not define is removed instead.
        """
        data = deep_copy(self._data)
        default = resolve(self._template, key) if self._is_path(key) else self._template.get(key, MISSING)
        if default is not MISSING:
            if self._is_path(key):
                assign(data, key, deep_copy(default))
            else:
                data[key] = deep_copy(default)
        else:
            self._discard(data, key)
        _logger.debug("Reset %s to template value", key)
        self._commit(data)

    def _discard(self, data: dict[str, Any], key: str) -> None:
        if not self._is_path(key):
            data.pop(key, None)
            return
        parent_path, _, leaf = key.rpartition(SEPARATOR)
        parent = resolve(data, parent_path)
        if isinstance(parent, dict):
            parent.pop(leaf, None)

    def clear(self) -> None:
        """Reset the whole store to the template and persist."""
        _logger.debug("Cleared %s", self._file_path)
        self._commit(deep_copy(self._template))

    def reconcile(self) -> None:
        """Merge the current data with the template and persist.

        Fields missing from the current data are filled with template
        defaults. Existing values are kept.
        """
        self._commit(reconcile(self._template, self._data))

    def has(self, key: str) -> bool:
        """Return ``True`` when a value exists at *key*."""
        if self._is_path(key):
            return resolve(self._data, key) is not MISSING
        return key in self._data

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def read(self) -> dict[str, Any]:
        """Load the file, falling back to a copy of the template.

        The file is decrypted when a key is configured and reconciled with
        the template when ``auto_reconcile`` is enabled. Errors never
        propagate: any failure yields the template.
        """
        try:
            text = read_text(self._file_path)
            if text is None:
                return deep_copy(self._template)
            if self._key is not None:
                text = aes_decrypt_utf8(text, self._key, random_iv=self._options.random_iv)
            parsed = json.loads(text)
            if not isinstance(parsed, dict):
                _logger.debug("Store file %s does not hold an object, using template", self._file_path)
                return deep_copy(self._template)
            if self._options.auto_reconcile:
                return reconcile(self._template, parsed)
            return parsed
        except (OSError, ValueError, RecursionError, DataStoreCryptoError) as exc:
            _logger.debug("Store file %s unreadable, using template: %s", self._file_path, exc)
            return deep_copy(self._template)

    def _commit(self, data: dict[str, Any]) -> None:
        # The file is written before the new tree replaces the current one,
        # so a failed write leaves memory and disk unchanged.
        self._persist(data)
        self._data = data

    def _persist(self, data: dict[str, Any]) -> None:
        text = json.dumps(data, indent=2, ensure_ascii=False)
        if self._key is not None:
            text = aes_encrypt_hex(text, self._key, random_iv=self._options.random_iv)
        atomic_write_text(self._file_path, text)
        _logger.debug("Wrote %s (%d chars, encrypted=%s)", self._file_path, len(text), self.encrypted)

    def write(self) -> None:
        """Serialize the current data and replace the file's content.

        Raises
        ------
        DataStoreCryptoError
            If encryption fails.
        OSError
            If the file cannot be written.
        TypeError
            If the data holds a value JSON cannot represent.
        """
        self._persist(self._data)
