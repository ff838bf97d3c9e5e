# storefront/services/credential_service.py
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from storefront.domain.schemas import Principal
from storefront.utils.settings import (
    JWT_SECRET_KEY,
    JWT_ALGORITHM,
    ACCESS_TOKEN_EXPIRE_MINUTES,
)


def create_access_token(user_id: str, role: str = "user", expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {"id": user_id, "role": role, "exp": expire}
    return jwt.encode(to_encode, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Principal:
    """Raises JWTError for bad signatures, expired or malformed tokens."""
    payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    user_id = payload.get("id")
    if not user_id:
        raise JWTError("Token has no subject")
    return Principal(id=str(user_id), role=payload.get("role") or "user")
