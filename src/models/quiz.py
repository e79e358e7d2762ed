import logging
from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from beanie import Document
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from src.helpers.dates import utcnow
from src.helpers.json_fields import apply_aliases, parse_json_field

logger = logging.getLogger(__name__)

OPTIONS_PER_QUESTION = 4

# старый формат хранил вопросы в camelCase
QUESTION_ALIASES = {
    "correct_answer": ("correctAnswer",),
}


def new_question_id() -> str:
    return uuid4().hex


class QuestionContent(BaseModel):
    """Текст вопроса, четыре варианта и индекс правильного"""
    section: str
    question: str
    options: List[str]
    correct_answer: int  # индекс в options, с нуля
    explanation: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def accept_stored_shape(cls, data):
        data = apply_aliases(data, QUESTION_ALIASES)
        if isinstance(data, dict) and isinstance(data.get("options"), str):
            data["options"] = parse_json_field(data["options"])
        return data

    @field_validator("options")
    @classmethod
    def check_options(cls, options: List[str]) -> List[str]:
        if len(options) != OPTIONS_PER_QUESTION:
            raise ValueError(f"a question needs exactly {OPTIONS_PER_QUESTION} options")
        return options

    @field_validator("correct_answer")
    @classmethod
    def check_correct_answer(cls, value: int) -> int:
        if not 0 <= value < OPTIONS_PER_QUESTION:
            raise ValueError(f"correct_answer must be between 0 and {OPTIONS_PER_QUESTION - 1}")
        return value


# Вопрос квиза с четырьмя вариантами ответа
class Question(QuestionContent):
    id: str = Field(default_factory=new_question_id)


def decode_questions(value) -> List[Question]:
    """Вопросы из хранилища; битые элементы пропускаются, а не ломают весь квиз"""
    decoded = parse_json_field(value)
    if not isinstance(decoded, list):
        return []
    questions = []
    for item in decoded:
        try:
            questions.append(Question.model_validate(item))
        except ValidationError as exc:
            logger.warning("Skipping stored question that does not validate: %s", exc.errors()[0]["msg"])
    return questions


class QuizBase(BaseModel):
    title: str
    description: str = ""
    chapter_id: Optional[str] = None
    sections: List[str] = []
    questions: List[Question] = []
    time_limit: int = 30  # минуты
    negative_marking: bool = True
    negative_mark_value: float = Field(default=0.25, ge=0)
    is_active: bool = True
    created_by: str = "admin"
    created_at: datetime = Field(default_factory=utcnow)

    @field_validator("sections", mode="before")
    @classmethod
    def decode_sections(cls, value):
        decoded = parse_json_field(value)
        return decoded if isinstance(decoded, list) else []

    @field_validator("questions", mode="before")
    @classmethod
    def decode_question_list(cls, value):
        return decode_questions(value)


class Quiz(QuizBase):
    id: str

    def section_labels(self) -> List[str]:
        """Сначала объявленные секции, затем любые другие, найденные в вопросах"""
        labels = list(dict.fromkeys(self.sections))
        for question in self.questions:
            if question.section not in labels:
                labels.append(question.section)
        return labels


class QuizDocument(Document, QuizBase):

    class Settings:
        name = "quizzes"
