"""Password hashing and signed access tokens."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

from app.config import settings
from app.errors import AuthRequired

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return generate_password_hash(password, method="pbkdf2:sha256")


def verify_password(password_hash: str, password: str) -> bool:
    return check_password_hash(password_hash, password)


def create_access_token(
    user_id: str,
    secret_key: Optional[str] = None,
    algorithm: Optional[str] = None,
    expires_minutes: Optional[int] = None,
    now: Optional[datetime] = None,
) -> str:
    """Create a signed JWT carrying the user id and an absolute expiry."""
    issued_at = now or datetime.now(timezone.utc)
    if expires_minutes is None:
        expires_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
    claims = {
        "sub": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(
        claims,
        secret_key or settings.SECRET_KEY,
        algorithm=algorithm or settings.ALGORITHM,
    )


def decode_access_token(
    token: str,
    secret_key: Optional[str] = None,
    algorithm: Optional[str] = None,
) -> str:
    """
    Verify signature and expiry and return the user id.
    Raises AuthRequired for anything that is not a valid token.
    """
    try:
        payload = jwt.decode(
            token,
            secret_key or settings.SECRET_KEY,
            algorithms=[algorithm or settings.ALGORITHM],
        )
    except JWTError as e:
        logger.warning("Rejected access token: %s", e)
        raise AuthRequired("Invalid authentication token")

    user_id = payload.get("sub")
    if not user_id or not isinstance(user_id, str):
        raise AuthRequired("Invalid authentication token")
    return user_id
