import logging

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.helpers.jwt_handler import JWT
from src.models.enums import UserRoleEnum

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> dict:
    """Возвращает payload токена: sub (id пользователя), role, name, email"""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=401, detail="Unauthorized")
    try:
        payload = JWT.decode(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError:
        logger.info("Rejected invalid bearer token")
        raise HTTPException(status_code=401, detail="Invalid token")
    if not payload.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid token")
    return payload


async def require_admin(token: dict = Depends(get_current_user)) -> dict:
    if token.get("role") != UserRoleEnum.ADMIN.value:
        raise HTTPException(status_code=403, detail="Admin access required")
    return token
