"""
Travel API Backend — Password Hashing
======================================

What:  Salted password hashing and verification with bcrypt.
Why:   Users sign up with a plaintext password; only its bcrypt hash is
       stored, and login compares with bcrypt.checkpw (constant-time).
Who:   Called by UserService during signup and login.

Password length:
    bcrypt only reads 72 bytes (bcrypt 5 refuses anything longer). Every
    password is first reduced to base64(SHA-256(password)), 44 ASCII bytes,
    on both the hash and the verify side, so long passphrases work and
    differ past byte 72.
"""

import base64
import hashlib
from typing import Optional, Union

import bcrypt

from travel_api.config import settings


def _bcrypt_input(password: str) -> bytes:
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest)


def hash_password(password: str) -> str:
    """Hash a plaintext password with a fresh salt; returns the ASCII hash."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_bcrypt_input(password), salt).decode("ascii")


def verify_password(password: Optional[str], hashed: Optional[Union[str, bytes]]) -> bool:
    """
    Check a plaintext password against a stored bcrypt hash.

    Returns False (never raises) for missing values or a malformed hash,
    so a corrupt row looks exactly like a wrong password.
    """
    if not password or not hashed:
        return False
    try:
        if isinstance(hashed, str):
            hashed = hashed.encode("ascii")
        return bcrypt.checkpw(_bcrypt_input(password), hashed)
    except ValueError:
        # Invalid salt: the stored value is not a bcrypt hash
        return False
