from __future__ import annotations

from pathlib import Path

import pytest

from pydatastore.config import StoreOptions, default_directory
from pydatastore.exceptions import DataStoreConfigError

TEMPLATE = {"theme": {"primary": "#000000"}}


def test_defaults() -> None:
    options = StoreOptions(name="config", template=TEMPLATE)

    assert options.cwd is None
    assert options.encryption_key is None
    assert options.access_properties_by_dot_notation is True
    assert options.auto_reconcile is True
    assert options.random_iv is False
    assert options.directory == default_directory()
    assert options.file_path == (default_directory() / "config.json").absolute()


def test_file_path_uses_cwd(tmp_path: Path) -> None:
    options = StoreOptions(name="settings", template=TEMPLATE, cwd=tmp_path)
    assert options.file_path == tmp_path / "settings.json"


def test_cwd_string_is_coerced_to_path(tmp_path: Path) -> None:
    options = StoreOptions(name="settings", template=TEMPLATE, cwd=str(tmp_path))  # type: ignore[arg-type]
    assert options.cwd == tmp_path


def test_binary_keys_are_normalized_to_bytes() -> None:
    assert StoreOptions(name="c", template=TEMPLATE, encryption_key=bytearray(b"k")).encryption_key == b"k"  # type: ignore[arg-type]
    assert StoreOptions(name="c", template=TEMPLATE, encryption_key=memoryview(b"k")).encryption_key == b"k"  # type: ignore[arg-type]


def test_encryption_key_is_hidden_from_repr() -> None:
    options = StoreOptions(name="c", template=TEMPLATE, encryption_key="hunter2")
    assert "hunter2" not in repr(options)


@pytest.mark.parametrize("name", ["", "a/b", "a\\b"])
def test_invalid_names_are_rejected(name: str) -> None:
    with pytest.raises(DataStoreConfigError, match="Invalid store options"):
        StoreOptions.build(name=name, template=TEMPLATE)


def test_template_must_be_a_dict() -> None:
    with pytest.raises(DataStoreConfigError):
        StoreOptions.build(name="c", template=["not", "a", "dict"])


def test_unknown_options_are_rejected() -> None:
    with pytest.raises(DataStoreConfigError):
        StoreOptions.build(name="c", template=TEMPLATE, compress=True)


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PYDATASTORE_DIR", str(tmp_path))
    monkeypatch.setenv("PYDATASTORE_ENCRYPTION_KEY", "from-env")
    monkeypatch.setenv("PYDATASTORE_DOT_NOTATION", "off")
    monkeypatch.setenv("PYDATASTORE_AUTO_RECONCILE", "0")
    monkeypatch.setenv("PYDATASTORE_RANDOM_IV", "yes")

    options = StoreOptions.from_env(name="c", template=TEMPLATE)

    assert options.cwd == tmp_path
    assert options.encryption_key == "from-env"
    assert options.access_properties_by_dot_notation is False
    assert options.auto_reconcile is False
    assert options.random_iv is True


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PYDATASTORE_ENCRYPTION_KEY", "from-env")
    monkeypatch.setenv("PYDATASTORE_DOT_NOTATION", "false")

    options = StoreOptions.from_env(
        name="c",
        template=TEMPLATE,
        cwd=tmp_path,
        encryption_key="explicit",
        access_properties_by_dot_notation=True,
    )

    assert options.encryption_key == "explicit"
    assert options.access_properties_by_dot_notation is True


def test_from_env_ignores_unrecognized_booleans(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("PYDATASTORE_DIR", "PYDATASTORE_ENCRYPTION_KEY", "PYDATASTORE_RANDOM_IV"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("PYDATASTORE_AUTO_RECONCILE", "maybe")

    options = StoreOptions.from_env(name="c", template=TEMPLATE)

    assert options.auto_reconcile is True
    assert options.encryption_key is None
    assert options.cwd is None


def test_from_env_requires_name_and_template() -> None:
    with pytest.raises(DataStoreConfigError):
        StoreOptions.from_env()
