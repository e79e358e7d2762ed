from fastapi import APIRouter, Depends

from src.schemas.req.user import UserCreateReq, UserLoginReq
from src.services.auth import AuthService

auth_router = APIRouter()


@auth_router.post("/signup")
async def signup(req: UserCreateReq, auth_service: AuthService = Depends(AuthService)):
    return await auth_service.signup(req)


@auth_router.post("/login")
async def login(req: UserLoginReq, auth_service: AuthService = Depends(AuthService)):
    """Вход студента или админа, возвращает JWT"""
    return await auth_service.login(req)
