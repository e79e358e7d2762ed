from fastapi import APIRouter, Depends

from src.core.auth_middleware import get_current_user
from src.services.subject import SubjectService

subject_router = APIRouter(dependencies=[Depends(get_current_user)])


@subject_router.get("/subjects")
async def get_subjects(subject_service: SubjectService = Depends(SubjectService)):
    return await subject_service.get_subjects()


@subject_router.get("/subjects/{subject_id}")
async def get_subject(subject_id: str, subject_service: SubjectService = Depends(SubjectService)):
    return await subject_service.get_subject(subject_id)


@subject_router.get("/subjects/{subject_id}/chapters")
async def get_subject_chapters(subject_id: str, subject_service: SubjectService = Depends(SubjectService)):
    return await subject_service.get_chapters(subject_id)


@subject_router.get("/chapters/{chapter_id}")
async def get_chapter(chapter_id: str, subject_service: SubjectService = Depends(SubjectService)):
    return await subject_service.get_chapter(chapter_id)


@subject_router.get("/chapters/{chapter_id}/quizzes")
async def get_chapter_quizzes(chapter_id: str, subject_service: SubjectService = Depends(SubjectService)):
    """Активные квизы главы"""
    return await subject_service.get_chapter_quizzes(chapter_id)
