"""
securestore_core.cipher_storage
-------------------------------
Keystore-backed cipher storage (AES-256 / CBC / PKCS7).

    encrypt(service, item_key, value)       -> EncryptionResult
    decrypt(service, item_key, value_bytes) -> DecryptionResult

`service` names the key alias; an empty service maps to DEFAULT_ALIAS on both
paths so empty-alias pairs always share one key. Keys are generated on the
first encrypt for an alias and never rotated or deleted here.
"""

from __future__ import annotations
from typing import Optional
from securestore_core.constants import CIPHER_STORAGE_NAME, DEFAULT_ALIAS, MIN_SUPPORTED_API_LEVEL
from securestore_core.envelope import decrypt_bytes, encrypt_string
from securestore_core.errors import CipherStorageError
from securestore_core.keystore import KeyStoreProvider, load_keystore_provider
from securestore_core.logger import get_logger
from securestore_core.provisioner import KeyProvisioner
from securestore_core.results import DecryptionResult, EncryptionResult

log = get_logger("securestore.cipher")


def resolve_alias(service: str) -> str:
    return DEFAULT_ALIAS if not service else service


class BaseCipherStorage:
    """
    Contract shared by cipher storage backends.

    A host supporting several backends uses the name and minimum API level to
    pick one; neither is enforced by the backend itself.
    """
    name: str = "base"

    def encrypt(self, service: str, item_key: str, value: str) -> EncryptionResult:
        raise NotImplementedError

    def decrypt(self, service: str, item_key: str, value_bytes: bytes) -> DecryptionResult:
        raise NotImplementedError

    def get_cipher_storage_name(self) -> str:
        return self.name

    def get_min_supported_api_level(self) -> int:
        raise NotImplementedError


class CipherStorageKeystoreAESCBC(BaseCipherStorage):
    name = CIPHER_STORAGE_NAME

    def __init__(self, keystore: Optional[KeyStoreProvider] = None):
        self.keystore = keystore if keystore is not None else load_keystore_provider()
        self.provisioner = KeyProvisioner(self.keystore)

    def encrypt(self, service: str, item_key: str, value: str) -> EncryptionResult:
        service = resolve_alias(service)
        try:
            key = self.provisioner.ensure_key(service)
            encrypted = encrypt_string(key, value, service)
        except CipherStorageError as e:
            log.warning(f"[ENCRYPT] {e.kind.value} service={service}: {e.message}")
            raise
        log.debug(f"[ENCRYPT] service={service} bytes={len(encrypted)}")
        return EncryptionResult(item_key, encrypted, self)

    def decrypt(self, service: str, item_key: str, value_bytes: bytes) -> DecryptionResult:
        service = resolve_alias(service)
        try:
            key = self.provisioner.get_key(service)
            decrypted = decrypt_bytes(key, value_bytes, service)
        except CipherStorageError as e:
            log.warning(f"[DECRYPT] {e.kind.value} service={service}: {e.message}")
            raise
        log.debug(f"[DECRYPT] service={service}")
        return DecryptionResult(item_key, decrypted)

    def get_min_supported_api_level(self) -> int:
        return MIN_SUPPORTED_API_LEVEL
