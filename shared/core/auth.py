import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError
from shared.utils.app_status_code import AppStatusCode
from shared.core.config import settings
from shared.helpers.json_response_helper import error_response
from shared.core.schemas import UserToken

logger = logging.getLogger(__name__)

# Missing credentials are reported as 401 by get_current_token itself
security = HTTPBearer(auto_error=False)

BEARER_HEADERS = {"WWW-Authenticate": "Bearer"}


def create_access_token(data: dict, expires_minutes: Optional[int] = None):
    payload = data.copy()

    minutes = expires_minutes or settings.JWT_EXPIRE_MINUTES
    payload['exp'] = datetime.now(timezone.utc) + timedelta(minutes=minutes)

    return jwt.encode(payload, settings.JWT_SECRET,
                      algorithm=settings.JWT_ALGORITHM)


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the credential part of an ``Authorization`` header value.

    ``"Bearer abc"`` gives ``"abc"``; an absent header or one without a
    second part gives ``""``. The value is forwarded as-is, never verified.
    """
    if not authorization:
        return ""
    parts = authorization.split(" ")
    return parts[1] if len(parts) > 1 else ""


def verify_token(token: str) -> UserToken:
    """Verify signature and expiry of a JWT token and decode its claims."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
        return UserToken(**payload)
    except ExpiredSignatureError:
        return error_response(
            message="Token has expired",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_EXPIRED,
            http_status=status.HTTP_401_UNAUTHORIZED,
            headers=BEARER_HEADERS
        )
    except (JWTError, ValidationError):
        return error_response(
            message="Invalid token",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED,
            headers=BEARER_HEADERS
        )


def get_current_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> UserToken:
    if credentials is None or not credentials.credentials:
        logger.info("Rejected request without bearer token")
        return error_response(
            message="Missing bearer token",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_MISSING,
            http_status=status.HTTP_401_UNAUTHORIZED,
            headers=BEARER_HEADERS
        )
    return verify_token(credentials.credentials)
