from typing import List, Optional

from pydantic import BaseModel, Field

from src.models.quiz import Question


class QuizCreateDTO(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    duration: int = Field(default=30, gt=0)  # минуты
    chapter_id: Optional[str] = None
    sections: List[str] = []
    # вопросам без id он генерируется
    questions: List[Question] = []
    negative_marking: bool = True
    negative_mark_value: Optional[float] = Field(default=None, ge=0)


class QuizUpdateDTO(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    duration: Optional[int] = Field(default=None, gt=0)
    chapter_id: Optional[str] = None
    sections: Optional[List[str]] = None
    questions: Optional[List[Question]] = None
    negative_marking: Optional[bool] = None
    negative_mark_value: Optional[float] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
