import logging
from typing import List, Optional

from fastapi import Depends, HTTPException

from src.core.config import get_settings
from src.models.quiz import Question, Quiz, QuizBase
from src.repositories import (
    ChapterRepository,
    QuizRepository,
    get_chapter_repository,
    get_quiz_repository,
)
from src.schemas.req.quiz import QuizCreateDTO, QuizUpdateDTO
from src.schemas.res.quiz import StudentQuizResponse

logger = logging.getLogger(__name__)


class QuizService:

    def __init__(
        self,
        quizzes: QuizRepository = Depends(get_quiz_repository),
        chapters: ChapterRepository = Depends(get_chapter_repository),
    ):
        self.quizzes = quizzes
        self.chapters = chapters

    async def _check_chapter(self, chapter_id: Optional[str]):
        if chapter_id and not await self.chapters.get(chapter_id):
            raise HTTPException(status_code=400, detail="Invalid chapter ID provided")

    async def create_quiz(self, quiz_data: QuizCreateDTO, created_by: str = "admin") -> Quiz:
        """Создание нового квиза"""
        await self._check_chapter(quiz_data.chapter_id)
        negative_mark_value = quiz_data.negative_mark_value
        if negative_mark_value is None:
            negative_mark_value = get_settings().DEFAULT_NEGATIVE_MARK_VALUE
        quiz = await self.quizzes.create(QuizBase(
            title=quiz_data.title,
            description=quiz_data.description,
            chapter_id=quiz_data.chapter_id,
            sections=quiz_data.sections,
            questions=quiz_data.questions,
            time_limit=quiz_data.duration,
            negative_marking=quiz_data.negative_marking,
            negative_mark_value=negative_mark_value,
            created_by=created_by,
        ))
        logger.info("Created quiz %s (%s questions)", quiz.id, len(quiz.questions))
        return quiz

    async def get_quiz(self, quiz_id: str) -> Quiz:
        """Квиз целиком, с правильными ответами (для админа)"""
        quiz = await self.quizzes.get(quiz_id)
        if not quiz:
            raise HTTPException(status_code=404, detail="Quiz not found")
        return quiz

    async def update_quiz(self, quiz_id: str, quiz_data: QuizUpdateDTO) -> Quiz:
        quiz = await self.get_quiz(quiz_id)
        changes = quiz_data.model_dump(exclude_unset=True)
        if "chapter_id" in changes:
            await self._check_chapter(changes["chapter_id"])
        if "duration" in changes:
            changes["time_limit"] = changes.pop("duration")
        if changes.get("questions") is not None:
            changes["questions"] = quiz_data.questions
        for field, value in changes.items():
            if value is None and field != "chapter_id":
                continue
            setattr(quiz, field, value)
        quiz = await self.quizzes.update(quiz)
        logger.info("Updated quiz %s: %s", quiz.id, ", ".join(sorted(changes)) or "no changes")
        return quiz

    async def delete_quiz(self, quiz_id: str) -> dict:
        if not await self.quizzes.delete(quiz_id):
            raise HTTPException(status_code=404, detail="Quiz not found")
        logger.info("Deleted quiz %s", quiz_id)
        return {"message": "Quiz deleted successfully"}

    async def add_question(self, quiz_id: str, question: Question) -> Quiz:
        """Добавление вопроса в квиз"""
        quiz = await self.get_quiz(quiz_id)
        if any(q.id == question.id for q in quiz.questions):
            raise HTTPException(status_code=400, detail="Question with this id already exists in the quiz")
        quiz.questions.append(question)
        if question.section not in quiz.sections:
            quiz.sections.append(question.section)
        return await self.quizzes.update(quiz)

    async def get_all_quizzes(self) -> List[Quiz]:
        """Получение всех квизов (для админа)"""
        return await self.quizzes.list()

    async def get_active_quizzes(self, chapter_id: Optional[str] = None) -> List[StudentQuizResponse]:
        """Активные квизы для студентов, без вопросов"""
        quizzes = await self.quizzes.list(active_only=True, chapter_id=chapter_id)
        return [StudentQuizResponse.from_quiz(q, with_questions=False) for q in quizzes]

    async def get_quiz_for_student(self, quiz_id: str) -> StudentQuizResponse:
        """Квиз для прохождения: без правильных ответов и пояснений"""
        quiz = await self.quizzes.get(quiz_id)
        if not quiz or not quiz.is_active:
            raise HTTPException(status_code=404, detail="Quiz not found")
        return StudentQuizResponse.from_quiz(quiz)
