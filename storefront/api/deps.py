# storefront/api/deps.py
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import Principal
from storefront.services.credential_service import decode_access_token
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

bearer = HTTPBearer(auto_error=False)


def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> Principal:
    if credentials is None:
        logger.info("Auth failed: no bearer token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token, authorization denied",
        )
    try:
        return decode_access_token(credentials.credentials)
    except JWTError as e:
        logger.info(f"Auth failed: invalid token ({e})")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is not valid",
        )


def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    if not principal.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return principal


def http_error(e: StorefrontError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)
