# securestore_core/errors.py
"""
securestore_core.errors
-----------------------
Error taxonomy for cipher storage operations.

Every failure surfaced by the public operations is exactly one of:

- KeyStoreAccessError:    keystore could not be opened or queried
- KeyGenerationError:     key creation rejected, or key could not be materialized
- EncryptionFailedError:  encrypt path failed after a key was obtained
- DecryptionFailedError:  decrypt path failed after a key was obtained

The four kinds are siblings under CipherStorageError and are tagged with an
ErrorKind so callers can dispatch on `err.kind` as well as on type.
"""

from __future__ import annotations
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    KEYSTORE_ACCESS = "keystore_access"
    KEY_GENERATION = "key_generation"
    ENCRYPTION_FAILED = "encryption_failed"
    DECRYPTION_FAILED = "decryption_failed"


class CipherStorageError(Exception):
    kind: ErrorKind

    def __init__(self, message: str, alias: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.alias = alias
        self.cause = cause

    def __str__(self):
        if self.alias is not None:
            return f"{self.message} (alias={self.alias})"
        return self.message


class KeyStoreAccessError(CipherStorageError):
    kind = ErrorKind.KEYSTORE_ACCESS


class KeyGenerationError(CipherStorageError):
    kind = ErrorKind.KEY_GENERATION


class EncryptionFailedError(CipherStorageError):
    kind = ErrorKind.ENCRYPTION_FAILED


class DecryptionFailedError(CipherStorageError):
    kind = ErrorKind.DECRYPTION_FAILED
