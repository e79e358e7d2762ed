from typing import List

from pydantic import BaseModel

from src.models.question_bank import QuestionBankItem


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class QuestionBankPage(BaseModel):
    questions: List[QuestionBankItem]
    pagination: Pagination
