from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.core.auth_middleware import require_admin
from src.models.enums import DifficultyEnum
from src.schemas.req.question_bank import QuestionBankItemReq
from src.services.question_bank import QuestionBankService

question_bank_router = APIRouter(dependencies=[Depends(require_admin)])


@question_bank_router.get("")
async def get_questions(
    section: Optional[str] = None,
    difficulty: Optional[DifficultyEnum] = None,
    tag: Optional[str] = None,
    search: Optional[str] = None,
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    question_bank_service: QuestionBankService = Depends(QuestionBankService),
):
    """Банк вопросов с фильтрами и пагинацией"""
    return await question_bank_service.list_questions(section, difficulty, tag, search, page, limit)


@question_bank_router.post("")
async def create_question(
    req: QuestionBankItemReq,
    question_bank_service: QuestionBankService = Depends(QuestionBankService),
):
    return {"question": await question_bank_service.create_question(req)}


@question_bank_router.get("/{item_id}")
async def get_question(item_id: str, question_bank_service: QuestionBankService = Depends(QuestionBankService)):
    return {"question": await question_bank_service.get_question(item_id)}


@question_bank_router.put("/{item_id}")
async def update_question(
    item_id: str,
    req: QuestionBankItemReq,
    question_bank_service: QuestionBankService = Depends(QuestionBankService),
):
    return {"question": await question_bank_service.update_question(item_id, req)}


@question_bank_router.delete("/{item_id}")
async def delete_question(item_id: str, question_bank_service: QuestionBankService = Depends(QuestionBankService)):
    return await question_bank_service.delete_question(item_id)
