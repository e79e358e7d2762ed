from datetime import datetime, timedelta, timezone

import jwt

from src.core.config import get_settings


class JWT:
    """Подписанные токены доступа, в payload всегда есть ``sub`` (id пользователя) и ``role``"""

    @staticmethod
    def encode(payload: dict, expires_minutes: int = None) -> str:
        settings = get_settings()
        minutes = expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
        now = datetime.now(timezone.utc)
        claims = {**payload, "iat": now, "exp": now + timedelta(minutes=minutes)}
        return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

    @staticmethod
    def decode(token: str) -> dict:
        """Бросает ``jwt.InvalidTokenError`` (или наследника) на битый или просроченный токен"""
        settings = get_settings()
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
