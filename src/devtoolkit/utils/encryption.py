"""
Symmetric encryption for secrets stored on disk (provider API keys).
"""

import logging
from pathlib import Path

from cryptography.fernet import Fernet, InvalidToken

from ..config.settings import get_config_directory

logger = logging.getLogger(__name__)


def get_key_file_path() -> Path:
    return get_config_directory() / "encryption" / "key.txt"


def _get_key() -> bytes:
    """Get or generate encryption key."""
    key_file = get_key_file_path()
    if key_file.exists():
        with open(key_file, "rb") as f:
            return f.read()

    key = Fernet.generate_key()
    key_file.parent.mkdir(parents=True, exist_ok=True)
    with open(key_file, "wb") as f:
        f.write(key)
    key_file.chmod(0o600)
    logger.info("Generated new encryption key at %s", key_file)
    return key


def encrypt_data(data: bytes) -> bytes:
    """Encrypt data using Fernet."""
    return Fernet(_get_key()).encrypt(data)


def decrypt_data(data: bytes) -> bytes:
    """Decrypt data using Fernet."""
    return Fernet(_get_key()).decrypt(data)


def encrypt_text(text: str) -> str:
    """Encrypt a string and return the token as text."""
    return encrypt_data(text.encode('utf-8')).decode('ascii')


def decrypt_text(token: str) -> str:
    """Decrypt a token produced by encrypt_text."""
    try:
        return decrypt_data(token.encode('ascii')).decode('utf-8')
    except InvalidToken:
        raise ValueError("Stored secret could not be decrypted with the current key")
