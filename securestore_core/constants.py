# securestore_core/constants.py

CIPHER_STORAGE_NAME = "KeystoreAESCBC"
DEFAULT_ALIAS = "RN_SECURE_STORAGE_DEFAULT_ALIAS"

ENCRYPTION_ALGORITHM = "AES"
ENCRYPTION_BLOCK_MODE = "CBC"
ENCRYPTION_PADDING = "PKCS7"
ENCRYPTION_TRANSFORMATION = f"{ENCRYPTION_ALGORITHM}/{ENCRYPTION_BLOCK_MODE}/{ENCRYPTION_PADDING}"
ENCRYPTION_KEY_SIZE = 256

PURPOSE_ENCRYPT = "encrypt"
PURPOSE_DECRYPT = "decrypt"

# AES block size; the IV prefix is always exactly one block
IV_LENGTH = 16
BLOCK_SIZE_BITS = 128
BUFFER_SIZE = 1024

# Android M (API 23) introduced AndroidKeyStore symmetric keys
MIN_SUPPORTED_API_LEVEL = 23
