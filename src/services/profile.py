import logging

from fastapi import Depends, HTTPException

from src.core.exceptions import DuplicateRecordError
from src.helpers.password import PasswordHandler
from src.models.user import User
from src.repositories import UserRepository, get_user_repository
from src.schemas.req.profile import UserProfileUpdateReq
from src.schemas.res.user import UserResponse

logger = logging.getLogger(__name__)


class ProfileService:

    def __init__(self, users: UserRepository = Depends(get_user_repository)):
        self.users = users

    async def _get_user(self, user_id: str) -> User:
        user = await self.users.get(user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return user

    async def get_user_by_id(self, user_id: str) -> UserResponse:
        return UserResponse.from_user(await self._get_user(user_id))

    async def update_profile(self, user_id: str, profile_data: UserProfileUpdateReq) -> UserResponse:
        """Меняет имя, email и/или пароль; статистику не трогает"""
        user = await self._get_user(user_id)

        changes = {}
        if profile_data.name is not None:
            changes["name"] = profile_data.name
        if profile_data.email is not None:
            email = profile_data.email.lower()
            other = await self.users.get_by_email(email)
            if other and other.id != user.id:
                raise HTTPException(status_code=400, detail="User with this email already exists")
            changes["email"] = email
        if profile_data.password is not None:
            changes["password"] = PasswordHandler.hash(profile_data.password)

        if not changes:
            return UserResponse.from_user(user)
        try:
            updated = await self.users.set_fields(user_id, changes)
        except DuplicateRecordError:
            raise HTTPException(status_code=400, detail="User with this email already exists")
        if not updated:
            raise HTTPException(status_code=404, detail="User not found")
        logger.info("Updated profile of user %s: %s", user_id, ", ".join(sorted(changes)))
        return UserResponse.from_user(updated)
