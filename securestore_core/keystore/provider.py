# securestore_core/keystore/provider.py
from __future__ import annotations
from typing import List, Optional
from securestore_core.constants import ENCRYPTION_ALGORITHM, PURPOSE_ENCRYPT, PURPOSE_DECRYPT
from securestore_core.keystore.models import KeyGenParameters, KeyHandle


class KeyStoreProviderError(Exception):
    pass


class KeyStoreUnavailable(KeyStoreProviderError):
    pass


class UnsupportedKeyParameters(KeyStoreProviderError):
    pass


class KeyStoreProvider:
    """
    Keystore capability consumed by the key provisioner.

    Providers own key material. `create_entry` is create-if-absent: it must
    never replace an existing key, so concurrent creators for one alias end
    up sharing whichever key was stored first.
    """
    name: str = "base"
    supported_block_modes = ("CBC",)
    supported_paddings = ("PKCS7",)
    supported_key_sizes = (128, 192, 256)
    # software providers have no biometric / lock-screen factor to bind keys to
    supports_user_authentication: bool = False

    def load(self, create: bool = True) -> None:
        """Open the store; with create=False a missing store is left uncreated."""
        raise NotImplementedError

    def is_available(self) -> bool:
        return True

    def has_entry(self, alias: str) -> bool:
        raise NotImplementedError

    def create_entry(self, alias: str, params: KeyGenParameters) -> None:
        raise NotImplementedError

    def get_key_handle(self, alias: str) -> Optional[KeyHandle]:
        raise NotImplementedError

    def delete_entry(self, alias: str) -> None:
        raise NotImplementedError

    def aliases(self) -> List[str]:
        raise NotImplementedError

    def close(self) -> None:
        return

    def check_parameters(self, params: KeyGenParameters) -> None:
        if params.algorithm != ENCRYPTION_ALGORITHM:
            raise UnsupportedKeyParameters(f"Unsupported algorithm: {params.algorithm}")
        if params.key_size not in self.supported_key_sizes:
            raise UnsupportedKeyParameters(f"Unsupported key size: {params.key_size}")
        for mode in params.block_modes:
            if mode not in self.supported_block_modes:
                raise UnsupportedKeyParameters(f"Unsupported block mode: {mode}")
        for padding in params.encryption_paddings:
            if padding not in self.supported_paddings:
                raise UnsupportedKeyParameters(f"Unsupported padding: {padding}")
        missing = {PURPOSE_ENCRYPT, PURPOSE_DECRYPT} - set(params.purposes)
        if missing:
            raise UnsupportedKeyParameters(f"Key must allow encrypt and decrypt, missing: {sorted(missing)}")
        if params.user_authentication_required and not self.supports_user_authentication:
            raise UnsupportedKeyParameters(
                f"User authentication required but not configured for keystore '{self.name}'"
            )
