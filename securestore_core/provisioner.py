"""
securestore_core.provisioner
----------------------------
Ensures a per-alias symmetric key exists in the keystore and hands out key
handles for the envelope codec.

Failures are classified at this boundary:
- opening or querying the keystore   -> KeyStoreAccessError
- creating or materializing the key  -> KeyGenerationError
"""

from __future__ import annotations
from securestore_core.errors import CipherStorageError, KeyGenerationError, KeyStoreAccessError
from securestore_core.keystore.models import KEY_GEN_PARAMETERS, KeyGenParameters, KeyHandle
from securestore_core.keystore.provider import KeyStoreProvider
from securestore_core.logger import get_logger

log = get_logger("securestore.provisioner")


class KeyProvisioner:
    def __init__(self, keystore: KeyStoreProvider, params: KeyGenParameters = KEY_GEN_PARAMETERS):
        self.keystore = keystore
        self.params = params

    def ensure_key(self, alias: str) -> KeyHandle:
        """Return the key for `alias`, generating it on first use."""
        self._load(alias)

        try:
            exists = self.keystore.has_entry(alias)
        except CipherStorageError:
            raise
        except Exception as e:
            raise KeyStoreAccessError("Could not access Keystore", alias=alias, cause=e) from e

        if not exists:
            # keys are never bound to user authentication
            try:
                self.keystore.create_entry(alias, self.params)
            except CipherStorageError:
                raise
            except Exception as e:
                log.warning(f"[PROVISION] key generation failed alias={alias}: {e}")
                raise KeyGenerationError(f"Could not generate key: {e}", alias=alias, cause=e) from e
            log.info(f"[PROVISION] key provisioned alias={alias} keystore={self.keystore.name}")

        return self._fetch(alias)

    def get_key(self, alias: str) -> KeyHandle:
        """Return the existing key for `alias` without creating one."""
        self._load(alias, create=False)
        return self._fetch(alias)

    def _load(self, alias: str, create: bool = True) -> None:
        try:
            self.keystore.load(create=create)
        except CipherStorageError:
            raise
        except Exception as e:
            log.warning(f"[PROVISION] keystore load failed keystore={self.keystore.name}: {e}")
            raise KeyStoreAccessError("Could not access Keystore", alias=alias, cause=e) from e

    def _fetch(self, alias: str) -> KeyHandle:
        try:
            key = self.keystore.get_key_handle(alias)
        except CipherStorageError:
            raise
        except Exception as e:
            raise KeyGenerationError(f"Could not get key from Keystore: {e}", alias=alias, cause=e) from e
        if key is None:
            raise KeyGenerationError("No key in Keystore", alias=alias)
        log.debug(f"[PROVISION] key resolved alias={alias}")
        return key
