from datetime import datetime
from typing import List

from pydantic import BaseModel

from src.schemas.res.result import ResultResponse


class SubjectStats(BaseModel):
    subject: str
    attempts: int
    average_score: int
    best_score: int


class ChapterStats(SubjectStats):
    chapter: str


class TrendPoint(BaseModel):
    date: datetime
    score: int
    quiz_name: str


class StudentAnalyticsResponse(BaseModel):
    """Сводка успеваемости студента по его результатам"""
    total_attempts: int
    average_score: int
    best_score: int
    recent_attempts: List[ResultResponse]
    subject_stats: List[SubjectStats]
    chapter_stats: List[ChapterStats]
    performance_trend: List[TrendPoint]
