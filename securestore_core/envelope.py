"""
securestore_core.envelope
-------------------------
Envelope codec for keystore-backed values.

Layout (no version byte, no length prefix, no tag):

    [ IV (16 bytes) ][ AES-CBC ciphertext, PKCS7 padded ]

The IV is random per call, so identical plaintexts never share ciphertext.
Data is fed through the cipher in BUFFER_SIZE chunks; the output is
byte-identical to a single-shot encryption with the same IV.
"""

from __future__ import annotations
import io, os
from typing import BinaryIO, Optional
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives import padding
from securestore_core.constants import (
    BLOCK_SIZE_BITS,
    BUFFER_SIZE,
    ENCRYPTION_ALGORITHM,
    ENCRYPTION_BLOCK_MODE,
    ENCRYPTION_KEY_SIZE,
    ENCRYPTION_PADDING,
    ENCRYPTION_TRANSFORMATION,
    IV_LENGTH,
    PURPOSE_DECRYPT,
    PURPOSE_ENCRYPT,
)
from securestore_core.errors import DecryptionFailedError, EncryptionFailedError
from securestore_core.keystore.models import KeyHandle


def _check_key(key: KeyHandle, purpose: str) -> None:
    params = key.params
    if purpose not in params.purposes:
        raise ValueError(f"Key is not usable for {purpose}")
    if params.algorithm != ENCRYPTION_ALGORITHM:
        raise ValueError(f"Key algorithm {params.algorithm} cannot be used for {ENCRYPTION_TRANSFORMATION}")
    if ENCRYPTION_BLOCK_MODE not in params.block_modes:
        raise ValueError(f"Key does not permit block mode {ENCRYPTION_BLOCK_MODE} ({ENCRYPTION_TRANSFORMATION})")
    if ENCRYPTION_PADDING not in params.encryption_paddings:
        raise ValueError(f"Key does not permit padding {ENCRYPTION_PADDING} ({ENCRYPTION_TRANSFORMATION})")
    if params.key_size != ENCRYPTION_KEY_SIZE:
        raise ValueError(f"{ENCRYPTION_TRANSFORMATION} requires a {ENCRYPTION_KEY_SIZE}-bit key, got {params.key_size}")
    if len(key.material) * 8 != params.key_size:
        raise ValueError(f"Key material is {len(key.material) * 8} bits, expected {params.key_size}")


def _cipher(key: KeyHandle, iv: bytes, purpose: str) -> Cipher:
    _check_key(key, purpose)
    return Cipher(algorithms.AES(key.material), modes.CBC(iv))


def encrypt_string(key: KeyHandle, value: str, alias: Optional[str] = None) -> bytes:
    """Encrypt `value` into an IV-prefixed envelope."""
    alias = key.alias if alias is None else alias
    try:
        iv = os.urandom(IV_LENGTH)
        encryptor = _cipher(key, iv, PURPOSE_ENCRYPT).encryptor()
        padder = padding.PKCS7(BLOCK_SIZE_BITS).padder()

        out = io.BytesIO()
        # initialization vector goes first
        out.write(iv)

        data = value.encode("utf-8")
        for offset in range(0, len(data), BUFFER_SIZE):
            chunk = data[offset:offset + BUFFER_SIZE]
            out.write(encryptor.update(padder.update(chunk)))
        out.write(encryptor.update(padder.finalize()))
        out.write(encryptor.finalize())
        return out.getvalue()
    except Exception as e:
        raise EncryptionFailedError(f"Could not encrypt value: {e}", alias=alias, cause=e) from e


def read_iv(stream: BinaryIO) -> bytes:
    iv = stream.read(IV_LENGTH)
    if len(iv) != IV_LENGTH:
        raise ValueError(f"Envelope too short: expected {IV_LENGTH}-byte IV, got {len(iv)} bytes")
    return iv


def decrypt_bytes(key: KeyHandle, envelope: bytes, alias: Optional[str] = None) -> str:
    """Decrypt an IV-prefixed envelope back into its UTF-8 string."""
    alias = key.alias if alias is None else alias
    try:
        if not isinstance(envelope, (bytes, bytearray, memoryview)):
            raise TypeError(f"Envelope must be bytes, got {type(envelope).__name__}")
        source = io.BytesIO(bytes(envelope))
        iv = read_iv(source)
        decryptor = _cipher(key, iv, PURPOSE_DECRYPT).decryptor()
        unpadder = padding.PKCS7(BLOCK_SIZE_BITS).unpadder()

        out = io.BytesIO()
        while True:
            chunk = source.read(BUFFER_SIZE)
            if not chunk:
                break
            out.write(unpadder.update(decryptor.update(chunk)))
        out.write(unpadder.update(decryptor.finalize()))
        out.write(unpadder.finalize())
        return out.getvalue().decode("utf-8")
    except Exception as e:
        raise DecryptionFailedError(f"Could not decrypt bytes: {e}", alias=alias, cause=e) from e
