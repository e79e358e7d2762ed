from pydantic import BaseModel, EmailStr, Field

from src.models.enums import UserRoleEnum


class UserCreateReq(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)


class UserLoginReq(BaseModel):
    email: EmailStr
    password: str
    user_type: UserRoleEnum = UserRoleEnum.STUDENT
