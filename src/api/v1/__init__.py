from fastapi import APIRouter

from src.api.v1.admin import admin_router
from src.api.v1.analytics import analytics_router
from src.api.v1.auth import auth_router
from src.api.v1.profile import profile_router
from src.api.v1.question_bank import question_bank_router
from src.api.v1.quiz import quiz_router
from src.api.v1.result import result_router
from src.api.v1.subject import subject_router

api_router = APIRouter(prefix="/api")

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(profile_router, prefix="/profile", tags=["profile"])
api_router.include_router(quiz_router, prefix="/quizzes", tags=["quizzes"])
api_router.include_router(result_router, prefix="/results", tags=["results"])
api_router.include_router(analytics_router, prefix="/analytics", tags=["analytics"])
api_router.include_router(subject_router, tags=["subjects"])
api_router.include_router(admin_router, prefix="/admin", tags=["admin"])
api_router.include_router(question_bank_router, prefix="/admin/question-bank", tags=["question-bank"])
