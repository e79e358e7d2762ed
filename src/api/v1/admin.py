from typing import Optional

from fastapi import APIRouter, Depends

from src.core.auth_middleware import require_admin
from src.models.quiz import Question
from src.schemas.req.question_bank import QuestionImportReq
from src.schemas.req.quiz import QuizCreateDTO, QuizUpdateDTO
from src.schemas.req.subject import ChapterCreateReq, ChapterUpdateReq, SubjectCreateReq, SubjectUpdateReq
from src.services.analytics import AnalyticsService
from src.services.question_bank import QuestionBankService
from src.services.quiz import QuizService
from src.services.result import ResultService
from src.services.subject import SubjectService

admin_router = APIRouter(dependencies=[Depends(require_admin)])


# --- Quizzes ---

@admin_router.get("/quizzes")
async def get_all_quizzes(quiz_service: QuizService = Depends(QuizService)):
    """Получить все квизы"""
    return {"quizzes": await quiz_service.get_all_quizzes()}


@admin_router.post("/quizzes")
async def create_quiz(
    quiz_data: QuizCreateDTO,
    quiz_service: QuizService = Depends(QuizService),
    token: dict = Depends(require_admin),
):
    """Создать новый квиз"""
    return {"quiz": await quiz_service.create_quiz(quiz_data, created_by=token.get("sub"))}


@admin_router.get("/quizzes/{quiz_id}")
async def get_quiz(quiz_id: str, quiz_service: QuizService = Depends(QuizService)):
    return {"quiz": await quiz_service.get_quiz(quiz_id)}


@admin_router.patch("/quizzes/{quiz_id}")
async def update_quiz(quiz_id: str, quiz_data: QuizUpdateDTO, quiz_service: QuizService = Depends(QuizService)):
    return {"quiz": await quiz_service.update_quiz(quiz_id, quiz_data)}


@admin_router.delete("/quizzes/{quiz_id}")
async def delete_quiz(quiz_id: str, quiz_service: QuizService = Depends(QuizService)):
    return await quiz_service.delete_quiz(quiz_id)


@admin_router.post("/quizzes/{quiz_id}/questions")
async def add_question(quiz_id: str, question: Question, quiz_service: QuizService = Depends(QuizService)):
    """Добавить вопрос в квиз"""
    return {"quiz": await quiz_service.add_question(quiz_id, question)}


@admin_router.post("/quizzes/{quiz_id}/import-questions")
async def import_questions(
    quiz_id: str,
    req: QuestionImportReq,
    question_bank_service: QuestionBankService = Depends(QuestionBankService),
):
    """Импортировать вопросы из банка в квиз"""
    return await question_bank_service.import_into_quiz(quiz_id, req.question_ids)


# --- Subjects & chapters ---

@admin_router.post("/subjects")
async def create_subject(req: SubjectCreateReq, subject_service: SubjectService = Depends(SubjectService)):
    return await subject_service.create_subject(req)


@admin_router.patch("/subjects/{subject_id}")
async def update_subject(
    subject_id: str, req: SubjectUpdateReq, subject_service: SubjectService = Depends(SubjectService),
):
    return await subject_service.update_subject(subject_id, req)


@admin_router.delete("/subjects/{subject_id}")
async def delete_subject(subject_id: str, subject_service: SubjectService = Depends(SubjectService)):
    return await subject_service.delete_subject(subject_id)


@admin_router.post("/chapters")
async def create_chapter(req: ChapterCreateReq, subject_service: SubjectService = Depends(SubjectService)):
    return await subject_service.create_chapter(req)


@admin_router.patch("/chapters/{chapter_id}")
async def update_chapter(
    chapter_id: str, req: ChapterUpdateReq, subject_service: SubjectService = Depends(SubjectService),
):
    return await subject_service.update_chapter(chapter_id, req)


@admin_router.delete("/chapters/{chapter_id}")
async def delete_chapter(chapter_id: str, subject_service: SubjectService = Depends(SubjectService)):
    return await subject_service.delete_chapter(chapter_id)


# --- Results ---

@admin_router.get("/results")
async def get_results(
    user_id: Optional[str] = None,
    quiz_id: Optional[str] = None,
    result_service: ResultService = Depends(ResultService),
):
    return {"results": await result_service.list_results(user_id=user_id, quiz_id=quiz_id)}


@admin_router.delete("/results")
async def delete_results(
    id: Optional[str] = None,
    user_id: Optional[str] = None,
    quiz_id: Optional[str] = None,
    result_service: ResultService = Depends(ResultService),
):
    """Удалить результат по id, либо все результаты пользователя и/или квиза"""
    if id:
        return await result_service.delete_result(id)
    return await result_service.delete_results(user_id=user_id, quiz_id=quiz_id)


# --- Analytics ---

@admin_router.get("/analytics")
async def get_quiz_analytics(analytics_service: AnalyticsService = Depends(AnalyticsService)):
    return {"quizzes": await analytics_service.get_quiz_analytics()}


@admin_router.get("/user-progress")
async def get_user_progress(analytics_service: AnalyticsService = Depends(AnalyticsService)):
    return {"progress": await analytics_service.get_user_progress()}


@admin_router.get("/stats")
async def get_stats(analytics_service: AnalyticsService = Depends(AnalyticsService)):
    return await analytics_service.get_overview()
