"""
Password hashing and JWT access tokens.

Passwords are stored as ``pbkdf2_sha256$<iterations>$<salt>$<hash>``.
Tokens are HS256 JWTs whose ``sub`` claim is the user email.
"""

import datetime
import hashlib
import hmac
import secrets
from typing import Optional

import jwt
from fastapi.security import OAuth2PasswordBearer

from app.core.config import settings

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)

_HASH_ALGORITHM = "pbkdf2_sha256"
_HASH_ITERATIONS = 480_000


def get_password_hash(password: str) -> str:
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), bytes.fromhex(salt), _HASH_ITERATIONS)
    return f"{_HASH_ALGORITHM}${_HASH_ITERATIONS}${salt}${digest.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        algorithm, iterations, salt, expected = hashed_password.split("$")
    except ValueError:
        return False
    if algorithm != _HASH_ALGORITHM:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", plain_password.encode(), bytes.fromhex(salt), int(iterations))
    return hmac.compare_digest(digest.hex(), expected)


def create_access_token(data: dict, expires_delta: Optional[datetime.timedelta] = None) -> str:
    """Encode *data* into a signed JWT with an ``exp`` claim."""
    to_encode = dict(data)
    if expires_delta is None:
        expires_delta = datetime.timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode["exp"] = datetime.datetime.now(datetime.timezone.utc) + expires_delta
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: Optional[str]) -> Optional[str]:
    """Return the token subject (email), or ``None`` if invalid or expired."""
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.PyJWTError:
        return None
    return payload.get("sub")
