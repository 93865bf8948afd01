# securestore_core/keystore/__init__.py

from .models import KeyGenParameters, KeyHandle, KEY_GEN_PARAMETERS
from .provider import (
    KeyStoreProvider,
    KeyStoreProviderError,
    KeyStoreUnavailable,
    UnsupportedKeyParameters,
)
from .providers.memory_provider import InMemoryKeyStore
from .providers.sqlite_provider import SQLiteKeyStore
from .providers.unavailable_provider import UnavailableKeyStore
import os


def load_keystore_provider(config: dict | None = None) -> KeyStoreProvider:
    """
    Build the keystore provider named by `config`, falling back to the environment.

    Keys (config dict / environment variable):
        provider     / SECURESTORE_KEYSTORE_PROVIDER  "sqlite" (default) or "memory"
        sqlite_path  / SECURESTORE_DB_PATH            SQLite file, default "db/keystore.db"

    Provider names are case-insensitive; anything else raises ValueError.
    """
    config = config or {}
    name = (config.get("provider") or os.getenv("SECURESTORE_KEYSTORE_PROVIDER") or "sqlite").lower()

    if name == "memory":
        return InMemoryKeyStore()
    if name == "sqlite":
        return SQLiteKeyStore(config.get("sqlite_path") or os.getenv("SECURESTORE_DB_PATH") or "db/keystore.db")

    raise ValueError(f"Unknown keystore provider: {name}")


__all__ = [
    "KeyGenParameters",
    "KeyHandle",
    "KEY_GEN_PARAMETERS",
    "KeyStoreProvider",
    "KeyStoreProviderError",
    "KeyStoreUnavailable",
    "UnsupportedKeyParameters",
    "InMemoryKeyStore",
    "SQLiteKeyStore",
    "UnavailableKeyStore",
    "load_keystore_provider",
]
