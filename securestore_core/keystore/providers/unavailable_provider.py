from typing import List, Optional
from securestore_core.keystore.models import KeyGenParameters, KeyHandle
from securestore_core.keystore.provider import KeyStoreProvider, KeyStoreUnavailable


class UnavailableKeyStore(KeyStoreProvider):
    """Stands in for a platform without a usable secure keystore."""

    name = "unavailable"

    def __init__(self, reason: str = "No secure keystore available on this platform"):
        self.reason = reason

    def is_available(self) -> bool:
        return False

    def load(self, create: bool = True) -> None:
        raise KeyStoreUnavailable(self.reason)

    def has_entry(self, alias: str) -> bool:
        raise KeyStoreUnavailable(self.reason)

    def create_entry(self, alias: str, params: KeyGenParameters) -> None:
        raise KeyStoreUnavailable(self.reason)

    def get_key_handle(self, alias: str) -> Optional[KeyHandle]:
        raise KeyStoreUnavailable(self.reason)

    def delete_entry(self, alias: str) -> None:
        raise KeyStoreUnavailable(self.reason)

    def aliases(self) -> List[str]:
        raise KeyStoreUnavailable(self.reason)
