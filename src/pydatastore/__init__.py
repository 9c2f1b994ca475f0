"""pydatastore - Template-backed JSON file store with optional encryption."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pydatastore")
except PackageNotFoundError:
    __version__ = "0+local"
from pydatastore.config import StoreOptions, default_directory
from pydatastore.exceptions import (
    DataStoreConfigError,
    DataStoreCryptoError,
    DataStoreError,
    DataStoreKeyError,
)
from pydatastore.paths import MISSING, AssignOutcome, leaf_paths
from pydatastore.reconcile import reconcile
from pydatastore.store import DataStore

__all__ = [
    "__version__",
    "MISSING",
    "AssignOutcome",
    "DataStore",
    "DataStoreConfigError",
    "DataStoreCryptoError",
    "DataStoreError",
    "DataStoreKeyError",
    "StoreOptions",
    "default_directory",
    "leaf_paths",
    "reconcile",
]
