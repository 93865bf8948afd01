"""
Secure Store Core
=================
Keystore-backed cipher storage for small secret values.

Provides:
- AES-256/CBC/PKCS7 envelope codec (IV prefix + ciphertext)
- Per-alias key provisioning against a pluggable keystore
- Software keystore providers (in-memory, SQLite)
"""

from securestore_core.cipher_storage import (
    BaseCipherStorage,
    CipherStorageKeystoreAESCBC,
    resolve_alias,
)
from securestore_core.constants import CIPHER_STORAGE_NAME, DEFAULT_ALIAS
from securestore_core.errors import (
    CipherStorageError,
    DecryptionFailedError,
    EncryptionFailedError,
    ErrorKind,
    KeyGenerationError,
    KeyStoreAccessError,
)
from securestore_core.results import DecryptionResult, EncryptionResult

__all__ = [
    "BaseCipherStorage",
    "CipherStorageKeystoreAESCBC",
    "resolve_alias",
    "CIPHER_STORAGE_NAME",
    "DEFAULT_ALIAS",
    "CipherStorageError",
    "DecryptionFailedError",
    "EncryptionFailedError",
    "ErrorKind",
    "KeyGenerationError",
    "KeyStoreAccessError",
    "DecryptionResult",
    "EncryptionResult",
]
