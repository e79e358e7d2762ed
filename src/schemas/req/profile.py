from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserProfileUpdateReq(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)
