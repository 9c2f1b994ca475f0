"""Store options for pydatastore."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated, Any

from platformdirs import user_data_dir
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, field_validator

from pydatastore.exceptions import DataStoreConfigError

#: Application name used to derive the default per-user data directory.
DEFAULT_APP_NAME = "pydatastore"

#: Extension of every store file.
FILE_EXTENSION = ".json"


def default_directory(app_name: str = DEFAULT_APP_NAME) -> Path:
    """Return the platform-specific per-user data directory."""
    return Path(user_data_dir(app_name, appauthor=False))


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _coerce_binary_key(value: Any) -> Any:
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    return value


class StoreOptions(BaseModel):
    """Construction options for :class:`pydatastore.DataStore`.

    Parameters
    ----------
    name : str
        Base file name. The file is ``<cwd>/<name>.json``.
    template : dict
        Canonical default tree. Defines the shape of the store, its default
        values, and what ``delete`` resets a path to.
    cwd : Path or None
        Directory holding the file. Defaults to :func:`default_directory`.
    encryption_key : str, bytes or None
        Enables AES encryption of the file when non-empty. ``bytearray`` and
        ``memoryview`` keys are accepted and converted to ``bytes``.
    access_properties_by_dot_notation : bool
        Treat keys containing ``"."`` as nested paths on get/set/delete.
    auto_reconcile : bool
        Merge loaded data with the template on load.
    random_iv : bool
        Encrypt with a random per-write IV stored alongside the ciphertext
        instead of the constant zero IV. Files written this way cannot be
        read with ``random_iv=False`` and vice versa.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    template: dict[str, Any]
    cwd: Path | None = None
    encryption_key: Annotated[str | bytes | None, BeforeValidator(_coerce_binary_key)] = Field(
        default=None,
        repr=False,
    )
    access_properties_by_dot_notation: bool = True
    auto_reconcile: bool = True
    random_iv: bool = False

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        if not value:
            raise ValueError("name must be non-empty")
        if "/" in value or "\\" in value:
            raise ValueError("name must not contain path separators")
        return value

    @property
    def directory(self) -> Path:
        """Directory the store file lives in."""
        return self.cwd if self.cwd is not None else default_directory()

    @property
    def file_path(self) -> Path:
        """Absolute path of the store file."""
        return (self.directory / f"{self.name}{FILE_EXTENSION}").absolute()

    @classmethod
    def build(cls, **kwargs: Any) -> StoreOptions:
        """Validate *kwargs*, raising :class:`DataStoreConfigError` on failure."""
        try:
            return cls(**kwargs)
        except ValidationError as exc:
            raise DataStoreConfigError(f"Invalid store options: {exc}") from exc

    @classmethod
    def from_env(cls, **overrides: Any) -> StoreOptions:
        """Create options from environment variables.

        Reads ``PYDATASTORE_DIR``, ``PYDATASTORE_ENCRYPTION_KEY``,
        ``PYDATASTORE_DOT_NOTATION``, ``PYDATASTORE_AUTO_RECONCILE`` and
        ``PYDATASTORE_RANDOM_IV``. ``name`` and ``template`` have no
        environment counterpart and must be passed as overrides. Explicit
        keyword arguments take precedence over environment values.
        """
        env = os.environ
        kwargs: dict[str, Any] = {}

        directory = env.get("PYDATASTORE_DIR")
        if directory:
            kwargs["cwd"] = Path(directory).expanduser()

        key = env.get("PYDATASTORE_ENCRYPTION_KEY")
        if key:
            kwargs["encryption_key"] = key

        kwargs["access_properties_by_dot_notation"] = _env_bool(env.get("PYDATASTORE_DOT_NOTATION"), True)
        kwargs["auto_reconcile"] = _env_bool(env.get("PYDATASTORE_AUTO_RECONCILE"), True)
        kwargs["random_iv"] = _env_bool(env.get("PYDATASTORE_RANDOM_IV"), False)

        kwargs.update(overrides)
        return cls.build(**kwargs)
