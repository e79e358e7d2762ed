from typing import Optional

from fastapi import APIRouter, Depends

from src.core.auth_middleware import get_current_user
from src.services.quiz import QuizService

quiz_router = APIRouter()


@quiz_router.get("/")
async def get_active_quizzes(
    chapter_id: Optional[str] = None,
    quiz_service: QuizService = Depends(QuizService),
    token: dict = Depends(get_current_user),
):
    """Активные квизы"""
    return await quiz_service.get_active_quizzes(chapter_id)


@quiz_router.get("/{quiz_id}")
async def get_quiz(
    quiz_id: str,
    quiz_service: QuizService = Depends(QuizService),
    token: dict = Depends(get_current_user),
):
    """Квиз для прохождения, без правильных ответов"""
    return await quiz_service.get_quiz_for_student(quiz_id)
