import base64
import hashlib

from cryptography.fernet import Fernet

from scheddo.config.settings import settings


class AccessTokenCipher:
    """Fernet encryption for Yammer access tokens stored at rest.

    The configured secret is hashed with SHA-256 so any string makes a valid
    32-byte Fernet key.
    """

    def __init__(self, secret_key: str):
        key_bytes = secret_key.encode("utf-8")
        h = hashlib.sha256(key_bytes).digest()
        self._fernet = Fernet(base64.urlsafe_b64encode(h))

    def encrypt(self, plaintext: str) -> str:
        if not plaintext:
            return plaintext
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("utf-8")

    def decrypt(self, ciphertext: str) -> str:
        if not ciphertext:
            return ciphertext
        return self._fernet.decrypt(ciphertext.encode("utf-8")).decode("utf-8")


access_token_cipher = AccessTokenCipher(settings.access_token_encryption_key)
