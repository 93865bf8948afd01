# securestore_core/results.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, TYPE_CHECKING
from securestore_core.utils import b64e

if TYPE_CHECKING:
    from securestore_core.cipher_storage import BaseCipherStorage


@dataclass(frozen=True)
class EncryptionResult:
    """Ciphertext for one stored item, tagged with the backend that produced it."""
    item_key: str
    ciphertext: bytes
    cipher_storage: "BaseCipherStorage"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item_key": self.item_key,
            "ciphertext": b64e(self.ciphertext),
            "cipher_storage": self.cipher_storage.get_cipher_storage_name(),
        }


@dataclass(frozen=True)
class DecryptionResult:
    item_key: str
    plaintext: str

    def to_dict(self) -> Dict[str, Any]:
        return {"item_key": self.item_key, "plaintext": self.plaintext}
