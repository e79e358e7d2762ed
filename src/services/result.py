import logging
from typing import List, Optional, Set

from fastapi import Depends, HTTPException

from src.core.config import get_settings
from src.models.quiz_result import QuizResult, QuizResultBase
from src.models.user import User
from src.repositories import (
    QuizRepository,
    ResultRepository,
    UserRepository,
    get_quiz_repository,
    get_result_repository,
    get_user_repository,
)
from src.schemas.req.result import ResultSubmitDTO
from src.schemas.res.result import ResultResponse
from src.services.scoring import round_half_up, score_quiz

logger = logging.getLogger(__name__)


class ResultService:

    def __init__(
        self,
        results: ResultRepository = Depends(get_result_repository),
        quizzes: QuizRepository = Depends(get_quiz_repository),
        users: UserRepository = Depends(get_user_repository),
    ):
        self.results = results
        self.quizzes = quizzes
        self.users = users

    async def submit(self, user_id: str, payload: ResultSubmitDTO) -> ResultResponse:
        """Проверяет и оценивает ответы, сохраняет результат и обновляет статистику пользователя"""
        if not payload.quiz_id:
            raise HTTPException(status_code=400, detail="Missing required fields: quiz_id")

        if payload.idempotency_key:
            existing = await self.results.find_by_idempotency_key(user_id, payload.idempotency_key)
            if existing:
                logger.info("Duplicate submission %s for user %s, returning result %s",
                            payload.idempotency_key, user_id, existing.id)
                return ResultResponse.from_result(existing)

        quiz = await self.quizzes.get(payload.quiz_id)
        if not quiz:
            raise HTTPException(status_code=404, detail="Quiz not found")
        if not quiz.is_active:
            raise HTTPException(status_code=400, detail="Quiz is not active")
        if len(payload.answers) > len(quiz.questions):
            raise HTTPException(
                status_code=400,
                detail=f"Quiz has {len(quiz.questions)} questions but {len(payload.answers)} answers were sent",
            )

        user = await self.users.get(user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")

        summary = score_quiz(quiz, payload.answers)
        result = await self.results.create(QuizResultBase(
            user_id=user.id,
            user_name=user.name,
            user_email=user.email,
            quiz_id=quiz.id,
            quiz_title=quiz.title,
            time_spent=payload.time_spent,
            idempotency_key=payload.idempotency_key,
            **summary.model_dump(),
        ))
        logger.info("Saved result %s: user %s quiz %s score %s%% (%s/%s/%s)",
                    result.id, user.id, quiz.id, result.total_score,
                    result.correct_answers, result.wrong_answers, result.unanswered)

        await self.refresh_user_stats(user.id)
        return ResultResponse.from_result(result)

    async def refresh_user_stats(self, user_id: str) -> Optional[User]:
        """Пересчитывает total_quizzes и average_score по всем результатам пользователя.

        Пишет только эти два поля. Если набор результатов изменился, пока шла
        запись (параллельная сдача или удаление), пересчёт повторяется.
        """
        attempts = get_settings().STATS_REFRESH_ATTEMPTS
        user = None
        for _ in range(attempts):
            user_results = await self.results.find(user_id=user_id)
            total_quizzes = len(user_results)
            average_score = (
                round_half_up(sum(r.total_score for r in user_results) / total_quizzes)
                if user_results else 0
            )
            user = await self.users.set_stats(user_id, total_quizzes, average_score)
            if user is None:
                return None
            current = await self.results.find(user_id=user_id)
            if _result_ids(current) == _result_ids(user_results):
                logger.debug("User %s stats: %s quizzes, %s%% avg", user_id, total_quizzes, average_score)
                return user
            logger.info("Results of user %s changed during stats refresh, recomputing", user_id)
        logger.warning("Stats of user %s did not settle after %s attempts", user_id, attempts)
        return user

    async def get_user_results(self, user_id: str) -> List[ResultResponse]:
        """Все результаты пользователя, новые первыми"""
        return [ResultResponse.from_result(r) for r in await self.results.find(user_id=user_id)]

    async def get_recent_results(self, user_id: str, limit: Optional[int] = None) -> List[ResultResponse]:
        limit = limit or get_settings().RECENT_RESULTS_LIMIT
        recent = await self.results.find(user_id=user_id, limit=limit)
        return [ResultResponse.from_result(r, with_answers=False) for r in recent]

    async def get_result(self, result_id: str, user_id: str, is_admin: bool = False) -> ResultResponse:
        result = await self.results.get(result_id)
        if not result or (result.user_id != user_id and not is_admin):
            raise HTTPException(status_code=404, detail="Result not found")
        return ResultResponse.from_result(result)

    async def list_results(self, user_id: Optional[str] = None,
                           quiz_id: Optional[str] = None) -> List[ResultResponse]:
        """Для админа: результаты с фильтром по пользователю и/или квизу"""
        found = await self.results.find(user_id=user_id, quiz_id=quiz_id)
        return [ResultResponse.from_result(r, with_answers=False) for r in found]

    async def delete_result(self, result_id: str) -> dict:
        """Удаляет ровно один результат и пересчитывает статистику его владельца"""
        result = await self.results.get(result_id)
        if not result:
            raise HTTPException(status_code=404, detail="Result not found")
        if not await self.results.delete(result_id):
            raise HTTPException(status_code=404, detail="Result not found")
        logger.info("Deleted result %s of user %s", result_id, result.user_id)
        await self._refresh_users({result.user_id})
        return {"message": "Quiz result deleted successfully", "deleted": 1}

    async def delete_results(self, user_id: Optional[str] = None, quiz_id: Optional[str] = None) -> dict:
        """Массовое удаление по пользователю, квизу или обоим"""
        if not user_id and not quiz_id:
            raise HTTPException(status_code=400, detail="Missing required parameters")
        affected = await self.results.find(user_id=user_id, quiz_id=quiz_id)
        deleted = await self.results.delete_many(user_id=user_id, quiz_id=quiz_id)
        logger.info("Deleted %s results (user=%s quiz=%s)", deleted, user_id, quiz_id)
        await self._refresh_users({r.user_id for r in affected})
        return {"message": "Quiz results deleted successfully", "deleted": deleted}

    async def _refresh_users(self, user_ids):
        for user_id in sorted(user_ids):
            if await self.refresh_user_stats(user_id) is None:
                logger.warning("Result owner %s no longer exists, skipping stats refresh", user_id)


def _result_ids(results: List[QuizResult]) -> Set[str]:
    return {r.id for r in results}
