"""Контракты хранилища, с которыми работают сервисы.

Сервисы видят только эти интерфейсы: зависимости FastAPI из
``src.repositories`` отдают реализации на MongoDB, тесты подставляют
реализации в памяти.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.models.question_bank import QuestionBankItem, QuestionBankItemBase
from src.models.quiz import Quiz, QuizBase
from src.models.quiz_result import QuizResult, QuizResultBase
from src.models.subject import Chapter, ChapterBase, Subject, SubjectBase
from src.models.user import User, UserBase


class UserRepository(ABC):

    @abstractmethod
    async def get(self, user_id: str) -> Optional[User]: ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    async def list_all(self) -> List[User]: ...

    @abstractmethod
    async def create(self, data: UserBase) -> User:
        """Бросает ``DuplicateRecordError``, если email уже занят"""

    @abstractmethod
    async def set_fields(self, user_id: str, fields: dict) -> Optional[User]:
        """Точечно меняет только переданные поля; None, если пользователя нет.

        Бросает ``DuplicateRecordError``, если новый email уже занят.
        """

    async def set_stats(self, user_id: str, total_quizzes: int, average_score: int) -> Optional[User]:
        return await self.set_fields(user_id, {"total_quizzes": total_quizzes, "average_score": average_score})


class QuizRepository(ABC):

    @abstractmethod
    async def get(self, quiz_id: str) -> Optional[Quiz]: ...

    @abstractmethod
    async def list(self, active_only: bool = False, chapter_id: Optional[str] = None) -> List[Quiz]: ...

    @abstractmethod
    async def create(self, data: QuizBase) -> Quiz: ...

    @abstractmethod
    async def update(self, quiz: Quiz) -> Quiz: ...

    @abstractmethod
    async def delete(self, quiz_id: str) -> bool: ...

    @abstractmethod
    async def detach_chapter(self, chapter_id: str) -> int:
        """Обнуляет ``chapter_id`` у всех квизов главы, возвращает число изменённых"""


class ResultRepository(ABC):

    @abstractmethod
    async def get(self, result_id: str) -> Optional[QuizResult]: ...

    @abstractmethod
    async def find(self, user_id: Optional[str] = None, quiz_id: Optional[str] = None,
                   limit: Optional[int] = None) -> List[QuizResult]:
        """Подходящие результаты, новые первыми"""

    @abstractmethod
    async def find_by_idempotency_key(self, user_id: str, key: str) -> Optional[QuizResult]: ...

    @abstractmethod
    async def create(self, data: QuizResultBase) -> QuizResult:
        """Сохраняет результат.

        Если у пользователя уже есть результат с тем же ``idempotency_key``,
        новый не пишется и возвращается существующий.
        """

    @abstractmethod
    async def delete(self, result_id: str) -> bool: ...

    @abstractmethod
    async def delete_many(self, user_id: Optional[str] = None, quiz_id: Optional[str] = None) -> int: ...


class SubjectRepository(ABC):

    @abstractmethod
    async def get(self, subject_id: str) -> Optional[Subject]: ...

    @abstractmethod
    async def list_all(self) -> List[Subject]: ...

    @abstractmethod
    async def create(self, data: SubjectBase) -> Subject: ...

    @abstractmethod
    async def update(self, subject: Subject) -> Subject: ...

    @abstractmethod
    async def delete(self, subject_id: str) -> bool: ...


class ChapterRepository(ABC):

    @abstractmethod
    async def get(self, chapter_id: str) -> Optional[Chapter]: ...

    @abstractmethod
    async def list(self, subject_id: Optional[str] = None) -> List[Chapter]: ...

    @abstractmethod
    async def create(self, data: ChapterBase) -> Chapter: ...

    @abstractmethod
    async def update(self, chapter: Chapter) -> Chapter: ...

    @abstractmethod
    async def delete(self, chapter_id: str) -> bool: ...


class QuestionBankRepository(ABC):

    @abstractmethod
    async def get(self, item_id: str) -> Optional[QuestionBankItem]: ...

    @abstractmethod
    async def search(self, section: Optional[str] = None, difficulty: Optional[str] = None,
                     tag: Optional[str] = None, text: Optional[str] = None,
                     skip: int = 0, limit: Optional[int] = None) -> Tuple[List[QuestionBankItem], int]:
        """Страница вопросов (новые первыми) и общее число подходящих под фильтры.

        ``text`` ищется без учёта регистра в тексте вопроса и пояснении.
        """

    @abstractmethod
    async def create(self, data: QuestionBankItemBase) -> QuestionBankItem: ...

    @abstractmethod
    async def update(self, item: QuestionBankItem) -> QuestionBankItem: ...

    @abstractmethod
    async def delete(self, item_id: str) -> bool: ...
