from typing import Any, List, Optional

from pydantic import BaseModel, Field


class SubmittedAnswer(BaseModel):
    """Ответ на вопрос, как его присылает клиент"""
    question_id: Any = None
    selected_answer: Any = None  # индекс варианта или его текст, -1/None = пропуск


class ResultSubmitDTO(BaseModel):
    quiz_id: str = ""
    answers: List[SubmittedAnswer] = []
    time_spent: int = Field(default=0, ge=0)  # секунды
    idempotency_key: Optional[str] = Field(default=None, max_length=128)
