import logging

from fastapi import Depends, HTTPException

from src.core.exceptions import DuplicateRecordError
from src.helpers.dates import utcnow
from src.helpers.jwt_handler import JWT
from src.helpers.password import PasswordHandler
from src.models.enums import UserRoleEnum
from src.models.user import User, UserBase
from src.repositories import UserRepository, get_user_repository
from src.schemas.req.user import UserCreateReq, UserLoginReq
from src.schemas.res.user import LoginResponse, UserResponse

logger = logging.getLogger(__name__)


def issue_token(user: User) -> str:
    return JWT.encode({
        "sub": user.id,
        "role": user.role.value,
        "name": user.name,
        "email": user.email,
    })


class AuthService:

    def __init__(self, users: UserRepository = Depends(get_user_repository)):
        self.users = users

    async def signup(self, req: UserCreateReq) -> LoginResponse:
        """Регистрация нового студента"""
        email = req.email.lower()
        if await self.users.get_by_email(email):
            raise HTTPException(status_code=400, detail="User with this email already exists")
        try:
            user = await self.users.create(UserBase(
                name=req.name,
                email=email,
                password=PasswordHandler.hash(req.password),
                role=UserRoleEnum.STUDENT,
            ))
        except DuplicateRecordError:
            # email заняли параллельной регистрацией между проверкой и вставкой
            raise HTTPException(status_code=400, detail="User with this email already exists")
        logger.info("Registered user %s", user.id)
        return LoginResponse(token=issue_token(user), user=UserResponse.from_user(user))

    async def login(self, req: UserLoginReq) -> LoginResponse:
        """Вход: проверка пароля и типа учетной записи, выдача JWT"""
        user = await self.users.get_by_email(req.email.lower())
        if not user or not PasswordHandler.verify(req.password, user.password):
            logger.info("Failed login for %s", req.email)
            raise HTTPException(status_code=401, detail="Invalid credentials")

        if req.user_type == UserRoleEnum.ADMIN and not user.is_admin:
            raise HTTPException(status_code=403, detail="Access denied. Admin credentials required.")
        if req.user_type == UserRoleEnum.STUDENT and user.is_admin:
            raise HTTPException(status_code=403, detail="Please use admin login for administrative access.")

        user = await self.users.set_fields(user.id, {"last_login": utcnow()})
        if not user:
            raise HTTPException(status_code=401, detail="Invalid credentials")
        logger.info("User %s logged in as %s", user.id, req.user_type.value)
        return LoginResponse(token=issue_token(user), user=UserResponse.from_user(user))
