from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel

from src.models.quiz_result import Answer, QuizResult


class ResultResponse(BaseModel):
    """Плоская запись результата для отображения"""
    id: str
    date: datetime
    quiz_id: str
    quiz_name: str
    user_id: str
    total_score: int
    raw_score: float
    positive_marks: float
    negative_marks: float
    correct_answers: int
    wrong_answers: int
    unanswered: int
    sections: Dict[str, int]
    time_spent: int
    negative_marking: bool
    negative_mark_value: float
    answers: List[Answer] = []

    @classmethod
    def from_result(cls, result: QuizResult, with_answers: bool = True) -> "ResultResponse":
        return cls(
            id=result.id,
            date=result.date,
            quiz_id=result.quiz_id,
            quiz_name=result.quiz_title or "Unknown Quiz",
            user_id=result.user_id,
            total_score=result.total_score,
            raw_score=result.raw_score,
            positive_marks=result.positive_marks,
            negative_marks=result.negative_marks,
            correct_answers=result.correct_answers,
            wrong_answers=result.wrong_answers,
            unanswered=result.unanswered,
            sections=result.sections,
            time_spent=result.time_spent,
            negative_marking=result.negative_marking,
            negative_mark_value=result.negative_mark_value,
            answers=result.answers if with_answers else [],
        )
