from src.repositories.base import (
    ChapterRepository,
    QuestionBankRepository,
    QuizRepository,
    ResultRepository,
    SubjectRepository,
    UserRepository,
)
from src.repositories.mongo import (
    MongoChapterRepository,
    MongoQuestionBankRepository,
    MongoQuizRepository,
    MongoResultRepository,
    MongoSubjectRepository,
    MongoUserRepository,
)


def get_user_repository() -> UserRepository:
    return MongoUserRepository()


def get_quiz_repository() -> QuizRepository:
    return MongoQuizRepository()


def get_result_repository() -> ResultRepository:
    return MongoResultRepository()


def get_subject_repository() -> SubjectRepository:
    return MongoSubjectRepository()


def get_chapter_repository() -> ChapterRepository:
    return MongoChapterRepository()


def get_question_bank_repository() -> QuestionBankRepository:
    return MongoQuestionBankRepository()
