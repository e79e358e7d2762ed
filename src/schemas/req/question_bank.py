from typing import List

from pydantic import BaseModel, Field

from src.models.enums import DifficultyEnum
from src.models.quiz import QuestionContent


class QuestionBankItemReq(QuestionContent):
    section: str = Field(min_length=1)
    question: str = Field(min_length=1)
    difficulty: DifficultyEnum = DifficultyEnum.MEDIUM
    tags: List[str] = []


class QuestionImportReq(BaseModel):
    """id вопросов банка, которые нужно скопировать в квиз"""
    question_ids: List[str] = Field(min_length=1)
