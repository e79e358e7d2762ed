from typing import Optional

from pydantic import BaseModel, Field


class SubjectCreateReq(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""


class SubjectUpdateReq(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None


class ChapterCreateReq(BaseModel):
    subject_id: str
    name: str = Field(min_length=1)
    description: str = ""


class ChapterUpdateReq(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
