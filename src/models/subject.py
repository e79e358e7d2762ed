from datetime import datetime

from beanie import Document
from pydantic import BaseModel, Field

from src.helpers.dates import utcnow


class SubjectBase(BaseModel):
    name: str
    description: str = ""
    created_at: datetime = Field(default_factory=utcnow)


class Subject(SubjectBase):
    id: str


class SubjectDocument(Document, SubjectBase):

    class Settings:
        name = "subjects"


class ChapterBase(BaseModel):
    subject_id: str
    name: str
    description: str = ""
    created_at: datetime = Field(default_factory=utcnow)


class Chapter(ChapterBase):
    id: str


class ChapterDocument(Document, ChapterBase):

    class Settings:
        name = "chapters"
