from datetime import datetime, timedelta
from typing import Optional, Tuple
import hashlib
import logging
import uuid

from jose import JWTError, jwt
import bcrypt
from lab_access.core.config import settings

logger = logging.getLogger(__name__)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a bcrypt hash."""
    if not plain_password or not hashed_password:
        return False
    if isinstance(hashed_password, bytes):
        hash_bytes = hashed_password
    else:
        hash_bytes = hashed_password.encode('utf-8')
    try:
        return bcrypt.checkpw(plain_password.encode('utf-8'), hash_bytes)
    except ValueError as e:
        # Malformed hash in storage
        logger.error("[SECURITY] Password verification error: %s", e)
        return False

def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.
    Returns the hash as a string for database storage.
    """
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> Tuple[str, datetime]:
    """Create a JWT access token. Returns the token and its expiry (naive UTC)."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    # jti keeps two tokens issued in the same second distinct
    to_encode.update({"exp": expire, "jti": uuid.uuid4().hex})
    encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return encoded_jwt, expire

def decode_access_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        logger.info("[SECURITY] Token decode failed: %s", e)
        return None

def hash_token(token: str) -> str:
    """Digest stored in the sessions table instead of the raw token."""
    return hashlib.sha256(token.encode('utf-8')).hexdigest()
