import logging
from typing import List

from fastapi import Depends, HTTPException

from src.models.subject import Chapter, ChapterBase, Subject, SubjectBase
from src.repositories import (
    ChapterRepository,
    QuizRepository,
    SubjectRepository,
    get_chapter_repository,
    get_quiz_repository,
    get_subject_repository,
)
from src.schemas.req.subject import ChapterCreateReq, ChapterUpdateReq, SubjectCreateReq, SubjectUpdateReq
from src.schemas.res.quiz import StudentQuizResponse

logger = logging.getLogger(__name__)


class SubjectService:

    def __init__(
        self,
        subjects: SubjectRepository = Depends(get_subject_repository),
        chapters: ChapterRepository = Depends(get_chapter_repository),
        quizzes: QuizRepository = Depends(get_quiz_repository),
    ):
        self.subjects = subjects
        self.chapters = chapters
        self.quizzes = quizzes

    async def get_subjects(self) -> List[Subject]:
        return await self.subjects.list_all()

    async def get_subject(self, subject_id: str) -> Subject:
        subject = await self.subjects.get(subject_id)
        if not subject:
            raise HTTPException(status_code=404, detail="Subject not found")
        return subject

    async def create_subject(self, req: SubjectCreateReq) -> Subject:
        subject = await self.subjects.create(SubjectBase(name=req.name, description=req.description))
        logger.info("Created subject %s", subject.id)
        return subject

    async def update_subject(self, subject_id: str, req: SubjectUpdateReq) -> Subject:
        subject = await self.get_subject(subject_id)
        for field, value in req.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(subject, field, value)
        return await self.subjects.update(subject)

    async def delete_subject(self, subject_id: str) -> dict:
        """Предмет удаляется только без глав"""
        await self.get_subject(subject_id)
        if await self.chapters.list(subject_id=subject_id):
            raise HTTPException(status_code=400, detail="Subject still has chapters, delete them first")
        await self.subjects.delete(subject_id)
        logger.info("Deleted subject %s", subject_id)
        return {"message": "Subject deleted successfully"}

    async def get_chapters(self, subject_id: str) -> List[Chapter]:
        await self.get_subject(subject_id)
        return await self.chapters.list(subject_id=subject_id)

    async def get_chapter(self, chapter_id: str) -> Chapter:
        chapter = await self.chapters.get(chapter_id)
        if not chapter:
            raise HTTPException(status_code=404, detail="Chapter not found")
        return chapter

    async def create_chapter(self, req: ChapterCreateReq) -> Chapter:
        await self.get_subject(req.subject_id)
        chapter = await self.chapters.create(ChapterBase(
            subject_id=req.subject_id, name=req.name, description=req.description,
        ))
        logger.info("Created chapter %s in subject %s", chapter.id, chapter.subject_id)
        return chapter

    async def update_chapter(self, chapter_id: str, req: ChapterUpdateReq) -> Chapter:
        chapter = await self.get_chapter(chapter_id)
        for field, value in req.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(chapter, field, value)
        return await self.chapters.update(chapter)

    async def delete_chapter(self, chapter_id: str) -> dict:
        """Удаляет главу, квизы главы остаются без chapter_id"""
        await self.get_chapter(chapter_id)
        detached = await self.quizzes.detach_chapter(chapter_id)
        await self.chapters.delete(chapter_id)
        logger.info("Deleted chapter %s, detached %s quizzes", chapter_id, detached)
        return {"message": "Chapter deleted successfully", "detached_quizzes": detached}

    async def get_chapter_quizzes(self, chapter_id: str) -> List[StudentQuizResponse]:
        await self.get_chapter(chapter_id)
        quizzes = await self.quizzes.list(active_only=True, chapter_id=chapter_id)
        return [StudentQuizResponse.from_quiz(q, with_questions=False) for q in quizzes]
