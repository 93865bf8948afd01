import pytest
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives import padding
from securestore_core import (
    CipherStorageKeystoreAESCBC,
    DecryptionFailedError,
    EncryptionFailedError,
    ErrorKind,
    KeyGenerationError,
    DEFAULT_ALIAS,
    resolve_alias,
)
from securestore_core.envelope import encrypt_string, decrypt_bytes
from securestore_core.keystore import InMemoryKeyStore, SQLiteKeyStore


def single_shot_encrypt(material, iv, plaintext):
    padder = padding.PKCS7(128).padder()
    data = padder.update(plaintext.encode("utf-8")) + padder.finalize()
    enc = Cipher(algorithms.AES(material), modes.CBC(iv)).encryptor()
    return enc.update(data) + enc.finalize()


@pytest.fixture
def storage():
    return CipherStorageKeystoreAESCBC(InMemoryKeyStore())


def test_encrypt_decrypt_roundtrip(storage):
    res = storage.encrypt("svc1", "token", "hello world")
    assert res.item_key == "token"
    assert res.cipher_storage is storage

    ct = res.ciphertext
    assert len(ct) >= 16
    assert (len(ct) - 16) % 16 == 0
    assert len(ct) - 16 >= 16

    dec = storage.decrypt("svc1", "token", ct)
    assert dec.item_key == "token"
    assert dec.plaintext == "hello world"


def test_empty_plaintext_is_one_padding_block(storage):
    ct = storage.encrypt("svc2", "k", "").ciphertext
    assert len(ct) == 32
    assert storage.decrypt("svc2", "k", ct).plaintext == ""


def test_encryption_is_not_deterministic(storage):
    a = storage.encrypt("svc1", "k", "same value").ciphertext
    b = storage.encrypt("svc1", "k", "same value").ciphertext
    assert a != b
    assert a[:16] != b[:16]


def test_envelope_iv_prefix_matches_single_shot(storage):
    value = "héllo wörld ✓ " * 200  # spans several 1024-byte chunks
    ct = storage.encrypt("svc1", "k", value).ciphertext
    key = storage.keystore.get_key_handle("svc1")
    assert ct[16:] == single_shot_encrypt(key.material, ct[:16], value)
    assert storage.decrypt("svc1", "k", ct).plaintext == value


def test_chunk_boundary_lengths_roundtrip():
    storage = CipherStorageKeystoreAESCBC(InMemoryKeyStore())
    for n in (1023, 1024, 1025, 2048, 4097):
        value = "x" * n
        ct = storage.encrypt("svc", "k", value).ciphertext
        assert storage.decrypt("svc", "k", ct).plaintext == value


def test_default_alias_substitution(storage):
    assert resolve_alias("") == DEFAULT_ALIAS
    assert resolve_alias("svc") == "svc"

    ct = storage.encrypt(DEFAULT_ALIAS, "k", "secret").ciphertext
    assert storage.decrypt("", "k", ct).plaintext == "secret"

    ct = storage.encrypt("", "k", "secret2").ciphertext
    assert storage.decrypt(DEFAULT_ALIAS, "k", ct).plaintext == "secret2"
    assert storage.keystore.aliases() == [DEFAULT_ALIAS]


def test_short_envelope_fails_with_decryption_error(storage):
    storage.encrypt("svc1", "k", "v")
    for bad in (b"", b"\x00" * 5, b"\x00" * 15):
        with pytest.raises(DecryptionFailedError) as exc:
            storage.decrypt("svc1", "k", bad)
        assert exc.value.kind is ErrorKind.DECRYPTION_FAILED
        assert exc.value.alias == "svc1"


def test_iv_only_envelope_fails(storage):
    ct = storage.encrypt("svc1", "k", "v").ciphertext
    with pytest.raises(DecryptionFailedError):
        storage.decrypt("svc1", "k", ct[:16])


def test_corrupted_ciphertext_fails(storage):
    ct = storage.encrypt("svc1", "k", "value").ciphertext
    with pytest.raises(DecryptionFailedError):
        storage.decrypt("svc1", "k", ct[:-3])


def test_wrong_alias_key_fails(storage):
    ct = storage.encrypt("svc1", "k", "value").ciphertext
    storage.encrypt("svc2", "k", "other")
    # wrong key almost always breaks PKCS7 or UTF-8; a lucky decode would still differ
    try:
        out = storage.decrypt("svc2", "k", ct).plaintext
    except DecryptionFailedError:
        return
    assert out != "value"


def test_decrypt_unknown_alias(storage):
    with pytest.raises(KeyGenerationError):
        storage.decrypt("never-used", "k", b"\x00" * 32)
    assert storage.keystore.aliases() == []


def test_decrypt_rejects_non_bytes(storage):
    storage.encrypt("svc1", "k", "v")
    with pytest.raises(DecryptionFailedError):
        storage.decrypt("svc1", "k", "not bytes")


def test_encrypt_rejects_non_string(storage):
    with pytest.raises(EncryptionFailedError) as exc:
        storage.encrypt("svc1", "k", None)
    assert exc.value.alias == "svc1"


def test_encrypt_unencodable_string(storage):
    with pytest.raises(EncryptionFailedError):
        storage.encrypt("svc1", "k", "\ud800")


def test_codec_direct(storage):
    storage.encrypt("svc1", "k", "warmup")
    key = storage.keystore.get_key_handle("svc1")
    env = encrypt_string(key, "direct")
    assert decrypt_bytes(key, env) == "direct"
    assert decrypt_bytes(key, bytearray(env)) == "direct"


def test_backend_identity(storage):
    assert storage.get_cipher_storage_name() == "KeystoreAESCBC"
    assert storage.get_min_supported_api_level() == 23
    res = storage.encrypt("svc1", "item", "v")
    d = res.to_dict()
    assert d["cipher_storage"] == "KeystoreAESCBC"
    assert d["item_key"] == "item"
    assert storage.decrypt("svc1", "item", res.ciphertext).to_dict() == {"item_key": "item", "plaintext": "v"}


def test_sqlite_storage_roundtrip_across_instances(tmp_path):
    db_path = str(tmp_path / "keystore.db")
    s1 = CipherStorageKeystoreAESCBC(SQLiteKeyStore(db_path))
    ct = s1.encrypt("svc1", "k", "persisted").ciphertext
    s1.keystore.close()

    s2 = CipherStorageKeystoreAESCBC(SQLiteKeyStore(db_path))
    assert s2.decrypt("svc1", "k", ct).plaintext == "persisted"


@pytest.mark.parametrize("change, material_len", [
    ({"key_size": 128}, 16),
    ({}, 16),
    ({"purposes": ("decrypt",)}, 32),
])
def test_encrypt_rejects_mismatched_key(change, material_len):
    from dataclasses import replace
    from securestore_core.keystore import KeyHandle, KEY_GEN_PARAMETERS

    key = KeyHandle("svc", b"\x01" * material_len, replace(KEY_GEN_PARAMETERS, **change))
    with pytest.raises(EncryptionFailedError) as exc:
        encrypt_string(key, "v")
    assert exc.value.alias == "svc"


def test_decrypt_requires_decrypt_purpose(storage):
    from dataclasses import replace

    ct = storage.encrypt("svc1", "k", "v").ciphertext
    key = storage.keystore.get_key_handle("svc1")
    encrypt_only = replace(key, params=replace(key.params, purposes=("encrypt",)))
    with pytest.raises(DecryptionFailedError) as exc:
        decrypt_bytes(encrypt_only, ct)
    assert "decrypt" in str(exc.value)
    assert decrypt_bytes(key, ct) == "v"


def test_short_key_error_names_transformation():
    from dataclasses import replace
    from securestore_core.keystore import KeyHandle, KEY_GEN_PARAMETERS

    key = KeyHandle("svc", b"\x01" * 16, replace(KEY_GEN_PARAMETERS, key_size=128))
    with pytest.raises(EncryptionFailedError) as exc:
        encrypt_string(key, "v")
    assert "AES/CBC/PKCS7" in str(exc.value)
