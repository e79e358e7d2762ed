import logging
import math
from typing import List, Optional

from fastapi import Depends, HTTPException

from src.core.config import get_settings
from src.helpers.dates import utcnow
from src.models.enums import DifficultyEnum
from src.models.question_bank import QuestionBankItem, QuestionBankItemBase
from src.repositories import (
    QuestionBankRepository,
    QuizRepository,
    get_question_bank_repository,
    get_quiz_repository,
)
from src.schemas.req.question_bank import QuestionBankItemReq
from src.schemas.res.question_bank import Pagination, QuestionBankPage

logger = logging.getLogger(__name__)


def _item_fields(req: QuestionBankItemReq) -> dict:
    return {
        "section": req.section,
        "question": req.question.strip(),
        "options": req.options,
        "correct_answer": req.correct_answer,
        "explanation": (req.explanation or "").strip(),
        "difficulty": req.difficulty,
        "tags": list(dict.fromkeys(tag.strip() for tag in req.tags if tag.strip())),
    }


class QuestionBankService:

    def __init__(
        self,
        bank: QuestionBankRepository = Depends(get_question_bank_repository),
        quizzes: QuizRepository = Depends(get_quiz_repository),
    ):
        self.bank = bank
        self.quizzes = quizzes

    async def list_questions(
        self,
        section: Optional[str] = None,
        difficulty: Optional[DifficultyEnum] = None,
        tag: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> QuestionBankPage:
        """Вопросы банка с фильтрами по секции, сложности, тегу и поиском по тексту"""
        limit = limit or get_settings().QUESTION_BANK_PAGE_SIZE
        items, total = await self.bank.search(
            section=section,
            difficulty=difficulty.value if difficulty else None,
            tag=tag,
            text=search.strip() if search else None,
            skip=(page - 1) * limit,
            limit=limit,
        )
        return QuestionBankPage(
            questions=items,
            pagination=Pagination(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit)),
        )

    async def get_question(self, item_id: str) -> QuestionBankItem:
        item = await self.bank.get(item_id)
        if not item:
            raise HTTPException(status_code=404, detail="Question not found")
        return item

    async def create_question(self, req: QuestionBankItemReq) -> QuestionBankItem:
        item = await self.bank.create(QuestionBankItemBase(**_item_fields(req)))
        logger.info("Added question %s to the bank (%s, %s)", item.id, item.section, item.difficulty.value)
        return item

    async def update_question(self, item_id: str, req: QuestionBankItemReq) -> QuestionBankItem:
        """Полная замена вопроса банка; уже импортированные копии в квизах не меняются"""
        item = await self.get_question(item_id)
        item = item.model_copy(update={**_item_fields(req), "updated_at": utcnow()})
        return await self.bank.update(item)

    async def delete_question(self, item_id: str) -> dict:
        if not await self.bank.delete(item_id):
            raise HTTPException(status_code=404, detail="Question not found")
        logger.info("Deleted question %s from the bank", item_id)
        return {"message": "Question deleted successfully"}

    async def import_into_quiz(self, quiz_id: str, question_ids: List[str]) -> dict:
        """Копирует выбранные вопросы банка в квиз, каждой копии даётся новый id"""
        quiz = await self.quizzes.get(quiz_id)
        if not quiz:
            raise HTTPException(status_code=404, detail="Quiz not found")

        ids = list(dict.fromkeys(question_ids))
        items = [await self.bank.get(item_id) for item_id in ids]
        missing = [item_id for item_id, item in zip(ids, items) if item is None]
        if missing:
            raise HTTPException(status_code=404, detail=f"Questions not found in the bank: {', '.join(missing)}")

        for item in items:
            question = item.to_question()
            quiz.questions.append(question)
            if question.section not in quiz.sections:
                quiz.sections.append(question.section)
        quiz = await self.quizzes.update(quiz)
        logger.info("Imported %s bank questions into quiz %s", len(items), quiz.id)
        return {"quiz": quiz, "imported": len(items)}
