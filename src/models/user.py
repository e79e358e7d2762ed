from datetime import datetime
from typing import Optional

from beanie import Document
from pydantic import BaseModel, Field
from pymongo import ASCENDING, IndexModel

from src.helpers.dates import utcnow
from src.models.enums import UserRoleEnum


class UserBase(BaseModel):
    name: str
    email: str
    password: str
    role: UserRoleEnum = UserRoleEnum.STUDENT
    created_at: datetime = Field(default_factory=utcnow)
    last_login: Optional[datetime] = None
    # Считаются по результатам пользователя, пишутся только через set_stats
    total_quizzes: int = 0
    average_score: int = 0

    @property
    def is_admin(self) -> bool:
        return self.role == UserRoleEnum.ADMIN


class User(UserBase):
    id: str


class UserDocument(Document, UserBase):

    class Settings:
        name = "users"
        indexes = [IndexModel([("email", ASCENDING)], unique=True)]
