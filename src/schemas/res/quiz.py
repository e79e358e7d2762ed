from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.models.quiz import Quiz


class QuestionResponse(BaseModel):
    """Вопрос без правильного ответа, для студента"""
    id: str
    section: str
    question: str
    options: List[str]


class StudentQuizResponse(BaseModel):
    id: str
    title: str
    description: str
    chapter_id: Optional[str] = None
    duration: int
    sections: List[str]
    negative_marking: bool
    negative_mark_value: float
    question_count: int
    questions: List[QuestionResponse] = []

    @classmethod
    def from_quiz(cls, quiz: Quiz, with_questions: bool = True) -> "StudentQuizResponse":
        return cls(
            id=quiz.id,
            title=quiz.title,
            description=quiz.description,
            chapter_id=quiz.chapter_id,
            duration=quiz.time_limit,
            sections=quiz.sections,
            negative_marking=quiz.negative_marking,
            negative_mark_value=quiz.negative_mark_value,
            question_count=len(quiz.questions),
            questions=[
                QuestionResponse(id=q.id, section=q.section, question=q.question, options=q.options)
                for q in quiz.questions
            ] if with_questions else [],
        )


class QuizAnalyticsResponse(BaseModel):
    id: str
    title: str
    chapter_id: Optional[str] = None
    is_active: bool
    created_at: datetime
    question_count: int
    attempts: int
    avg_score: int
    avg_time: int
