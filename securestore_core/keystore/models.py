# securestore_core/keystore/models.py
from __future__ import annotations
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Tuple
from securestore_core.constants import (
    ENCRYPTION_ALGORITHM,
    ENCRYPTION_BLOCK_MODE,
    ENCRYPTION_PADDING,
    ENCRYPTION_KEY_SIZE,
    PURPOSE_ENCRYPT,
    PURPOSE_DECRYPT,
)


@dataclass(frozen=True)
class KeyGenParameters:
    """
    Parameters a keystore must honour when generating a symmetric key.

    Provider-agnostic: a hardware keystore maps these onto its native
    key parameters, software providers validate and record them next to the material.
    """
    algorithm: str = ENCRYPTION_ALGORITHM
    block_modes: Tuple[str, ...] = (ENCRYPTION_BLOCK_MODE,)
    encryption_paddings: Tuple[str, ...] = (ENCRYPTION_PADDING,)
    randomized_encryption_required: bool = True
    key_size: int = ENCRYPTION_KEY_SIZE
    purposes: Tuple[str, ...] = (PURPOSE_ENCRYPT, PURPOSE_DECRYPT)
    user_authentication_required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        for k in ("block_modes", "encryption_paddings", "purposes"):
            d[k] = list(d[k])
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeyGenParameters":
        return cls(
            algorithm=data.get("algorithm", ENCRYPTION_ALGORITHM),
            block_modes=tuple(data.get("block_modes", (ENCRYPTION_BLOCK_MODE,))),
            encryption_paddings=tuple(data.get("encryption_paddings", (ENCRYPTION_PADDING,))),
            randomized_encryption_required=bool(data.get("randomized_encryption_required", True)),
            key_size=int(data.get("key_size", ENCRYPTION_KEY_SIZE)),
            purposes=tuple(data.get("purposes", (PURPOSE_ENCRYPT, PURPOSE_DECRYPT))),
            user_authentication_required=bool(data.get("user_authentication_required", False)),
        )


@dataclass(frozen=True)
class KeyHandle:
    """
    Opaque handle to a keystore-owned symmetric key.

    Handles are derived per operation; callers must not persist `material`.
    """
    alias: str
    material: bytes = field(repr=False)
    params: KeyGenParameters = field(default_factory=KeyGenParameters)


KEY_GEN_PARAMETERS = KeyGenParameters()
