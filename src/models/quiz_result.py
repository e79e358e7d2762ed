import logging
from datetime import datetime
from typing import Dict, List, Optional

from beanie import Document
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pymongo import ASCENDING, DESCENDING, IndexModel

from src.helpers.dates import utcnow
from src.helpers.json_fields import apply_aliases, parse_json_field
from src.models.enums import AnswerOutcome

logger = logging.getLogger(__name__)

# ключи ответов в старых записях
ANSWER_ALIASES = {
    "question_id": ("questionId", "id"),
    "selected_answer": ("selectedAnswer", "userAnswer"),
    "correct_answer": ("correctAnswer",),
    "is_correct": ("isCorrect",),
}


class Answer(BaseModel):
    """Ответ пользователя на один вопрос, зафиксированный при сдаче"""
    question_id: str = ""
    section: str = ""
    selected_answer: int = -1  # -1 = не отвечен
    correct_answer: int
    is_correct: bool = False
    outcome: AnswerOutcome = AnswerOutcome.UNANSWERED
    marks: float = 0

    @model_validator(mode="before")
    @classmethod
    def accept_stored_shape(cls, data):
        data = apply_aliases(data, ANSWER_ALIASES)
        if not isinstance(data, dict):
            return data
        if data.get("selected_answer") is None:
            data["selected_answer"] = -1
        if data.get("is_correct") is None:
            data["is_correct"] = False
        if "outcome" not in data:
            # в старых записях исход не хранился, восстанавливаем его
            if data.get("isUnanswered") or data["selected_answer"] == -1:
                data["outcome"] = AnswerOutcome.UNANSWERED
            elif data["is_correct"]:
                data["outcome"] = AnswerOutcome.CORRECT
            else:
                data["outcome"] = AnswerOutcome.WRONG
        return data


class QuizResultBase(BaseModel):
    user_id: str
    user_name: str = "Unknown User"
    user_email: str = ""
    quiz_id: str
    quiz_title: str = ""
    date: datetime = Field(default_factory=utcnow)
    total_score: int = 0
    raw_score: float = 0
    positive_marks: float = 0
    negative_marks: float = 0
    correct_answers: int = 0
    wrong_answers: int = 0
    unanswered: int = 0
    sections: Dict[str, int] = {}
    time_spent: int = 0  # секунды
    answers: List[Answer] = []
    # Политика штрафов, действовавшая в момент сдачи
    negative_marking: bool = True
    negative_mark_value: float = 0.25
    idempotency_key: Optional[str] = None

    @field_validator("answers", mode="before")
    @classmethod
    def decode_answers(cls, value):
        decoded = parse_json_field(value)
        if not isinstance(decoded, list):
            return []
        answers = []
        for item in decoded:
            try:
                answers.append(Answer.model_validate(item))
            except ValidationError as exc:
                logger.warning("Skipping stored answer that does not validate: %s", exc.errors()[0]["msg"])
        return answers

    @field_validator("sections", mode="before")
    @classmethod
    def decode_sections(cls, value):
        decoded = parse_json_field(value, default_factory=dict)
        if not isinstance(decoded, dict):
            return {}
        sections = {}
        for label, score in decoded.items():
            # старые записи хранили счётчики рядом с процентами секций
            if label in _COUNTER_KEYS or isinstance(score, bool) or not isinstance(score, (int, float)):
                continue
            sections[label] = int(round(score))
        return sections


_COUNTER_KEYS = {
    "rawScore", "positiveMarks", "negativeMarks", "correctAnswers",
    "wrongAnswers", "unanswered", "negativeMarking", "negativeMarkValue",
}


class QuizResult(QuizResultBase):
    id: str


class QuizResultDocument(Document, QuizResultBase):

    class Settings:
        name = "quiz_results"
        indexes = [
            IndexModel([("user_id", ASCENDING), ("date", DESCENDING)]),
            IndexModel([("quiz_id", ASCENDING)]),
            # один результат на ключ идемпотентности у пользователя
            IndexModel(
                [("user_id", ASCENDING), ("idempotency_key", ASCENDING)],
                name="user_idempotency_key",
                unique=True,
                partialFilterExpression={"idempotency_key": {"$type": "string"}},
            ),
        ]
