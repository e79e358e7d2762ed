from collections import defaultdict
from datetime import timedelta
from typing import List

from fastapi import Depends

from src.core.config import get_settings
from src.helpers.dates import as_utc, utcnow
from src.models.enums import UserRoleEnum
from src.repositories import (
    ChapterRepository,
    QuizRepository,
    ResultRepository,
    SubjectRepository,
    UserRepository,
    get_chapter_repository,
    get_quiz_repository,
    get_result_repository,
    get_subject_repository,
    get_user_repository,
)
from src.schemas.res.analytics import ChapterStats, StudentAnalyticsResponse, SubjectStats, TrendPoint
from src.schemas.res.quiz import QuizAnalyticsResponse
from src.schemas.res.result import ResultResponse
from src.schemas.res.user import UserProgressResponse
from src.services.scoring import round_half_up

UNKNOWN_SUBJECT = "Unknown Subject"
UNKNOWN_CHAPTER = "Unknown Chapter"


def _mean(values: List[float]) -> int:
    return round_half_up(sum(values) / len(values)) if values else 0


def _score_stats(scores: List[int]) -> dict:
    return {"attempts": len(scores), "average_score": _mean(scores), "best_score": max(scores, default=0)}


class AnalyticsService:

    def __init__(
        self,
        results: ResultRepository = Depends(get_result_repository),
        quizzes: QuizRepository = Depends(get_quiz_repository),
        users: UserRepository = Depends(get_user_repository),
        chapters: ChapterRepository = Depends(get_chapter_repository),
        subjects: SubjectRepository = Depends(get_subject_repository),
    ):
        self.results = results
        self.quizzes = quizzes
        self.users = users
        self.chapters = chapters
        self.subjects = subjects

    async def get_student_analytics(self, user_id: str) -> StudentAnalyticsResponse:
        """Аналитика студента: попытки, средний и лучший балл, разбивка по предметам и главам, динамика"""
        settings = get_settings()
        results = await self.results.find(user_id=user_id)
        quizzes = {q.id: q for q in await self.quizzes.list()}
        chapters = {c.id: c for c in await self.chapters.list()}
        subjects = {s.id: s for s in await self.subjects.list_all()}

        by_subject = defaultdict(list)
        by_chapter = defaultdict(list)
        for result in results:
            # квиз мог быть удалён или не привязан к главе
            quiz = quizzes.get(result.quiz_id)
            chapter = chapters.get(quiz.chapter_id) if quiz and quiz.chapter_id else None
            subject = subjects.get(chapter.subject_id) if chapter else None
            subject_name = subject.name if subject else UNKNOWN_SUBJECT
            chapter_name = chapter.name if chapter else UNKNOWN_CHAPTER
            by_subject[subject_name].append(result.total_score)
            by_chapter[(subject_name, chapter_name)].append(result.total_score)

        since = utcnow() - timedelta(days=settings.PERFORMANCE_TREND_DAYS)
        trend = sorted((r for r in results if as_utc(r.date) >= since), key=lambda r: as_utc(r.date))
        scores = [r.total_score for r in results]

        return StudentAnalyticsResponse(
            total_attempts=len(scores),
            average_score=_mean(scores),
            best_score=max(scores, default=0),
            recent_attempts=[
                ResultResponse.from_result(r, with_answers=False)
                for r in results[:settings.ANALYTICS_RECENT_ATTEMPTS]
            ],
            subject_stats=[SubjectStats(subject=name, **_score_stats(s)) for name, s in by_subject.items()],
            chapter_stats=[
                ChapterStats(subject=subject_name, chapter=chapter_name, **_score_stats(s))
                for (subject_name, chapter_name), s in by_chapter.items()
            ],
            performance_trend=[
                TrendPoint(date=r.date, score=r.total_score, quiz_name=r.quiz_title or "Unknown Quiz")
                for r in trend
            ],
        )

    async def get_quiz_analytics(self) -> List[QuizAnalyticsResponse]:
        """Число попыток, средний балл и среднее время по каждому квизу"""
        by_quiz = defaultdict(list)
        for result in await self.results.find():
            by_quiz[result.quiz_id].append(result)

        response = []
        for quiz in await self.quizzes.list():
            quiz_results = by_quiz.get(quiz.id, [])
            response.append(QuizAnalyticsResponse(
                id=quiz.id,
                title=quiz.title,
                chapter_id=quiz.chapter_id,
                is_active=quiz.is_active,
                created_at=quiz.created_at,
                question_count=len(quiz.questions),
                attempts=len(quiz_results),
                avg_score=_mean([r.total_score for r in quiz_results]),
                avg_time=_mean([r.time_spent for r in quiz_results]),
            ))
        return response

    async def get_user_progress(self) -> List[UserProgressResponse]:
        """Прогресс студентов, посчитанный по их результатам"""
        by_user = defaultdict(list)
        for result in await self.results.find():
            by_user[result.user_id].append(result.total_score)

        return [
            UserProgressResponse(
                id=user.id,
                name=user.name,
                email=user.email,
                attempts=len(by_user.get(user.id, [])),
                avg_score=_mean(by_user.get(user.id, [])),
                last_login=user.last_login,
            )
            for user in await self.users.list_all()
            if user.role == UserRoleEnum.STUDENT
        ]

    async def get_overview(self) -> dict:
        users = await self.users.list_all()
        quizzes = await self.quizzes.list()
        results = await self.results.find()
        return {
            "total_users": len(users),
            "total_students": sum(1 for u in users if u.role == UserRoleEnum.STUDENT),
            "total_quizzes": len(quizzes),
            "active_quizzes": sum(1 for q in quizzes if q.is_active),
            "total_results": len(results),
            "average_score": _mean([r.total_score for r in results]),
        }
