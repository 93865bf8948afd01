import os, threading
from typing import Dict, List, Optional
from securestore_core.logger import get_logger
from securestore_core.keystore.models import KeyGenParameters, KeyHandle
from securestore_core.keystore.provider import KeyStoreProvider

log = get_logger("securestore.keystore.memory")


class InMemoryKeyStore(KeyStoreProvider):
    name = "memory"

    def __init__(self):
        self.entries: Dict[str, KeyHandle] = {}
        self._lock = threading.Lock()

    def load(self, create: bool = True) -> None:
        return

    def has_entry(self, alias: str) -> bool:
        return alias in self.entries

    def create_entry(self, alias: str, params: KeyGenParameters) -> None:
        self.check_parameters(params)
        with self._lock:
            if alias in self.entries:
                return
            self.entries[alias] = KeyHandle(alias, os.urandom(params.key_size // 8), params)
        log.info(f"[MEMORY KEYSTORE] created key alias={alias} size={params.key_size}")

    def get_key_handle(self, alias: str) -> Optional[KeyHandle]:
        return self.entries.get(alias)

    def delete_entry(self, alias: str) -> None:
        with self._lock:
            self.entries.pop(alias, None)

    def aliases(self) -> List[str]:
        return sorted(self.entries)
