from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.models.enums import UserRoleEnum
from src.models.user import User


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: UserRoleEnum
    total_quizzes: int
    average_score: int
    created_at: datetime
    last_login: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(**user.model_dump(exclude={"password"}))


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


class UserProgressResponse(BaseModel):
    id: str
    name: str
    email: str
    attempts: int
    avg_score: int
    last_login: Optional[datetime] = None
