# store_rating/core/security.py
"""
Credential primitives: Argon2 password hashes, the password policy
and the HS256 bearer tokens handed out by login and registration.
"""
import datetime as dt
import jwt  # PyJWT
from passlib.context import CryptContext

from store_rating.config import settings

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

JWT_SECRET = settings.jwt_secret
ACCESS_TOKEN_EXPIRE_MINUTES = settings.access_token_expire_minutes  # 24h by default
JWT_ALG = "HS256"

# Password policy
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 16
PASSWORD_SPECIAL_CHARS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"


def hash_password(plain: str) -> str:
    """Return the salted Argon2 hash stored in users.password_hash."""
    return pwd_context.hash(plain)

def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)

def password_policy_errors(password: str) -> list[str]:
    """
    Check a candidate password against the password policy.

    Returns:
        A list of human-readable violations; empty when the password is acceptable.
    """
    errors = []
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        errors.append(f"Password must be between {PASSWORD_MIN_LENGTH} and {PASSWORD_MAX_LENGTH} characters")
    if not any(ch.isupper() for ch in password):
        errors.append("Password must contain at least one uppercase letter")
    if not any(ch in PASSWORD_SPECIAL_CHARS for ch in password):
        errors.append("Password must contain at least one special character")
    return errors

def create_access_token(user_id: int, email: str, role: str) -> str:
    """
    Create a JWT access token for user authentication.

    The token carries the identity claims the access gate needs
    (userId, email, role) plus issue and expiry timestamps.

    Args:
        user_id: User primary key
        email: User email at issue time
        role: User role ("ADMIN", "USER" or "STORE_OWNER")

    Returns:
        Encoded JWT token string
    """
    now = dt.datetime.now(dt.timezone.utc)
    payload = {
        "userId": user_id,
        "email": email,
        "role": role,
        "iat": now,
        "exp": now + dt.timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)

def decode_access_token(token: str) -> dict:
    """
    Decode and validate a JWT access token.

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid or malformed
    """
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG])
