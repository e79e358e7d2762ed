import functools
import logging
import re
from typing import List, Optional, Tuple, Type

from beanie import Document, PydanticObjectId, UpdateResponse
from bson.errors import InvalidId
from pydantic import BaseModel
from pymongo.errors import DuplicateKeyError, PyMongoError

from src.core.exceptions import DuplicateRecordError, StorageError
from src.models.question_bank import QuestionBankDocument, QuestionBankItem, QuestionBankItemBase
from src.models.quiz import Quiz, QuizBase, QuizDocument
from src.models.quiz_result import QuizResult, QuizResultBase, QuizResultDocument
from src.models.subject import Chapter, ChapterBase, ChapterDocument, Subject, SubjectBase, SubjectDocument
from src.models.user import User, UserBase, UserDocument
from src.repositories.base import (
    ChapterRepository,
    QuestionBankRepository,
    QuizRepository,
    ResultRepository,
    SubjectRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)

_DOCUMENT_ONLY_FIELDS = {"id", "revision_id"}


def storage_call(func):
    """Превращает ошибки драйвера в ``StorageError``, API отвечает общим 503"""
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except PyMongoError as exc:
            logger.exception("MongoDB operation %s failed", func.__qualname__)
            raise StorageError(str(exc)) from exc
    return wrapper


def object_id(value: str) -> Optional[PydanticObjectId]:
    try:
        return PydanticObjectId(value)
    except (InvalidId, TypeError):
        return None


class MongoRepository:
    """Общая обвязка: перевод документов Beanie в обычные модели, с которыми работают сервисы"""

    document: Type[Document]
    model: Type[BaseModel]

    def to_model(self, doc):
        return self.model(id=str(doc.id), **doc.model_dump(exclude=_DOCUMENT_ONLY_FIELDS))

    def to_document(self, item):
        return self.document(id=object_id(item.id), **item.model_dump(exclude={"id"}))

    async def _get(self, item_id: str):
        oid = object_id(item_id)
        if oid is None:
            return None
        doc = await self.document.get(oid)
        return self.to_model(doc) if doc else None

    async def _find(self, query: dict, sort: Optional[str] = None, limit: Optional[int] = None):
        cursor = self.document.find(query)
        if sort:
            cursor = cursor.sort(sort)
        if limit:
            cursor = cursor.limit(limit)
        return [self.to_model(doc) for doc in await cursor.to_list()]

    async def _create(self, data: BaseModel):
        doc = self.document(**data.model_dump())
        await doc.insert()
        return self.to_model(doc)

    async def _update(self, item):
        doc = self.to_document(item)
        await doc.save()
        return self.to_model(doc)

    async def _delete(self, item_id: str) -> bool:
        oid = object_id(item_id)
        if oid is None:
            return False
        doc = await self.document.get(oid)
        if not doc:
            return False
        await doc.delete()
        return True


class MongoUserRepository(MongoRepository, UserRepository):
    document = UserDocument
    model = User

    @storage_call
    async def get(self, user_id: str) -> Optional[User]:
        return await self._get(user_id)

    @storage_call
    async def get_by_email(self, email: str) -> Optional[User]:
        doc = await UserDocument.find_one({"email": email})
        return self.to_model(doc) if doc else None

    @storage_call
    async def list_all(self) -> List[User]:
        return await self._find({}, sort="name")

    @storage_call
    async def create(self, data: UserBase) -> User:
        try:
            return await self._create(data)
        except DuplicateKeyError as exc:
            raise DuplicateRecordError(f"email {data.email} is already registered") from exc

    @storage_call
    async def set_fields(self, user_id: str, fields: dict) -> Optional[User]:
        oid = object_id(user_id)
        if oid is None:
            return None
        try:
            doc = await UserDocument.find_one({"_id": oid}).update(
                {"$set": fields}, response_type=UpdateResponse.NEW_DOCUMENT,
            )
        except DuplicateKeyError as exc:
            raise DuplicateRecordError(f"email {fields.get('email')} is already registered") from exc
        return self.to_model(doc) if doc else None


class MongoQuizRepository(MongoRepository, QuizRepository):
    document = QuizDocument
    model = Quiz

    @storage_call
    async def get(self, quiz_id: str) -> Optional[Quiz]:
        return await self._get(quiz_id)

    @storage_call
    async def list(self, active_only: bool = False, chapter_id: Optional[str] = None) -> List[Quiz]:
        query = {}
        if active_only:
            query["is_active"] = True
        if chapter_id is not None:
            query["chapter_id"] = chapter_id
        return await self._find(query, sort="-created_at")

    @storage_call
    async def create(self, data: QuizBase) -> Quiz:
        return await self._create(data)

    @storage_call
    async def update(self, quiz: Quiz) -> Quiz:
        return await self._update(quiz)

    @storage_call
    async def delete(self, quiz_id: str) -> bool:
        return await self._delete(quiz_id)

    @storage_call
    async def detach_chapter(self, chapter_id: str) -> int:
        result = await QuizDocument.find({"chapter_id": chapter_id}).update({"$set": {"chapter_id": None}})
        return result.modified_count if result else 0


class MongoResultRepository(MongoRepository, ResultRepository):
    document = QuizResultDocument
    model = QuizResult

    @storage_call
    async def get(self, result_id: str) -> Optional[QuizResult]:
        return await self._get(result_id)

    @storage_call
    async def find(self, user_id: Optional[str] = None, quiz_id: Optional[str] = None,
                   limit: Optional[int] = None) -> List[QuizResult]:
        query = {}
        if user_id is not None:
            query["user_id"] = user_id
        if quiz_id is not None:
            query["quiz_id"] = quiz_id
        return await self._find(query, sort="-date", limit=limit)

    @storage_call
    async def find_by_idempotency_key(self, user_id: str, key: str) -> Optional[QuizResult]:
        doc = await QuizResultDocument.find_one({"user_id": user_id, "idempotency_key": key})
        return self.to_model(doc) if doc else None

    @storage_call
    async def create(self, data: QuizResultBase) -> QuizResult:
        try:
            return await self._create(data)
        except DuplicateKeyError:
            # параллельный запрос с тем же ключом успел записать первым
            existing = None
            if data.idempotency_key:
                existing = await self.find_by_idempotency_key(data.user_id, data.idempotency_key)
            if existing is None:
                raise
            logger.info("Result with key %s already stored as %s", data.idempotency_key, existing.id)
            return existing

    @storage_call
    async def delete(self, result_id: str) -> bool:
        return await self._delete(result_id)

    @storage_call
    async def delete_many(self, user_id: Optional[str] = None, quiz_id: Optional[str] = None) -> int:
        query = {}
        if user_id is not None:
            query["user_id"] = user_id
        if quiz_id is not None:
            query["quiz_id"] = quiz_id
        if not query:
            return 0
        result = await QuizResultDocument.find(query).delete()
        return result.deleted_count if result else 0


class MongoSubjectRepository(MongoRepository, SubjectRepository):
    document = SubjectDocument
    model = Subject

    @storage_call
    async def get(self, subject_id: str) -> Optional[Subject]:
        return await self._get(subject_id)

    @storage_call
    async def list_all(self) -> List[Subject]:
        return await self._find({}, sort="name")

    @storage_call
    async def create(self, data: SubjectBase) -> Subject:
        return await self._create(data)

    @storage_call
    async def update(self, subject: Subject) -> Subject:
        return await self._update(subject)

    @storage_call
    async def delete(self, subject_id: str) -> bool:
        return await self._delete(subject_id)


class MongoChapterRepository(MongoRepository, ChapterRepository):
    document = ChapterDocument
    model = Chapter

    @storage_call
    async def get(self, chapter_id: str) -> Optional[Chapter]:
        return await self._get(chapter_id)

    @storage_call
    async def list(self, subject_id: Optional[str] = None) -> List[Chapter]:
        query = {"subject_id": subject_id} if subject_id is not None else {}
        return await self._find(query, sort="name")

    @storage_call
    async def create(self, data: ChapterBase) -> Chapter:
        return await self._create(data)

    @storage_call
    async def update(self, chapter: Chapter) -> Chapter:
        return await self._update(chapter)

    @storage_call
    async def delete(self, chapter_id: str) -> bool:
        return await self._delete(chapter_id)


class MongoQuestionBankRepository(MongoRepository, QuestionBankRepository):
    document = QuestionBankDocument
    model = QuestionBankItem

    @storage_call
    async def get(self, item_id: str) -> Optional[QuestionBankItem]:
        return await self._get(item_id)

    @storage_call
    async def search(self, section: Optional[str] = None, difficulty: Optional[str] = None,
                     tag: Optional[str] = None, text: Optional[str] = None,
                     skip: int = 0, limit: Optional[int] = None) -> Tuple[List[QuestionBankItem], int]:
        query = {}
        if section:
            query["section"] = section
        if difficulty:
            query["difficulty"] = difficulty
        if tag:
            query["tags"] = tag
        if text:
            pattern = {"$regex": re.escape(text), "$options": "i"}
            query["$or"] = [{"question": pattern}, {"explanation": pattern}]

        total = await QuestionBankDocument.find(query).count()
        cursor = QuestionBankDocument.find(query).sort("-created_at").skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return [self.to_model(doc) for doc in await cursor.to_list()], total

    @storage_call
    async def create(self, data: QuestionBankItemBase) -> QuestionBankItem:
        return await self._create(data)

    @storage_call
    async def update(self, item: QuestionBankItem) -> QuestionBankItem:
        return await self._update(item)

    @storage_call
    async def delete(self, item_id: str) -> bool:
        return await self._delete(item_id)
