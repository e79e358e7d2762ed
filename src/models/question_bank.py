from datetime import datetime
from typing import List

from beanie import Document
from pydantic import Field, field_validator
from pymongo import ASCENDING, DESCENDING, IndexModel

from src.helpers.dates import utcnow
from src.helpers.json_fields import parse_json_field
from src.models.enums import DifficultyEnum
from src.models.quiz import Question, QuestionContent


class QuestionBankItemBase(QuestionContent):
    """Вопрос из общего банка, который админ может импортировать в любой квиз"""
    difficulty: DifficultyEnum = DifficultyEnum.MEDIUM
    tags: List[str] = []
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("tags", mode="before")
    @classmethod
    def decode_tags(cls, value):
        decoded = parse_json_field(value)
        return [str(tag) for tag in decoded] if isinstance(decoded, list) else []

    def to_question(self) -> Question:
        """Копия для квиза, с новым id"""
        return Question(
            section=self.section,
            question=self.question,
            options=list(self.options),
            correct_answer=self.correct_answer,
            explanation=self.explanation,
        )


class QuestionBankItem(QuestionBankItemBase):
    id: str


class QuestionBankDocument(Document, QuestionBankItemBase):

    class Settings:
        name = "question_bank"
        indexes = [
            IndexModel([("section", ASCENDING), ("difficulty", ASCENDING)]),
            IndexModel([("tags", ASCENDING)]),
            IndexModel([("created_at", DESCENDING)]),
        ]
