import pytest
from fastapi.testclient import TestClient

from main import make_app
from src.helpers.password import PasswordHandler
from src.models.enums import UserRoleEnum
from src.models.quiz import QuizBase
from src.models.user import UserBase
from src.repositories import (
    get_chapter_repository,
    get_question_bank_repository,
    get_quiz_repository,
    get_result_repository,
    get_subject_repository,
    get_user_repository,
)
from src.services.analytics import AnalyticsService
from src.services.auth import issue_token
from src.services.question_bank import QuestionBankService
from src.services.quiz import QuizService
from src.services.result import ResultService
from src.services.subject import SubjectService
from tests.fakes import (
    FakeChapterRepository,
    FakeQuestionBankRepository,
    FakeQuizRepository,
    FakeResultRepository,
    FakeSubjectRepository,
    FakeUserRepository,
    PASSWORD,
    make_question,
)


@pytest.fixture
def users():
    return FakeUserRepository()


@pytest.fixture
def quizzes():
    return FakeQuizRepository()


@pytest.fixture
def results():
    return FakeResultRepository()


@pytest.fixture
def subjects():
    return FakeSubjectRepository()


@pytest.fixture
def chapters():
    return FakeChapterRepository()


@pytest.fixture
def question_bank():
    return FakeQuestionBankRepository()


@pytest.fixture
def result_service(results, quizzes, users):
    return ResultService(results=results, quizzes=quizzes, users=users)


@pytest.fixture
def quiz_service(quizzes, chapters):
    return QuizService(quizzes=quizzes, chapters=chapters)


@pytest.fixture
def subject_service(subjects, chapters, quizzes):
    return SubjectService(subjects=subjects, chapters=chapters, quizzes=quizzes)


@pytest.fixture
def question_bank_service(question_bank, quizzes):
    return QuestionBankService(bank=question_bank, quizzes=quizzes)


@pytest.fixture
def analytics_service(results, quizzes, users, chapters, subjects):
    return AnalyticsService(results=results, quizzes=quizzes, users=users, chapters=chapters, subjects=subjects)


@pytest.fixture
def four_question_quiz_data():
    """Правильные ответы [1, 2, 0, 3], два вопроса reasoning и два quantitative"""
    return QuizBase(
        title="Banking Fundamentals Mock Test",
        sections=["reasoning", "quantitative"],
        questions=[
            make_question("q1", "reasoning", 1),
            make_question("q2", "reasoning", 2),
            make_question("q3", "quantitative", 0),
            make_question("q4", "quantitative", 3),
        ],
        negative_marking=True,
        negative_mark_value=0.25,
    )


@pytest.fixture
def quiz(quizzes, four_question_quiz_data):
    return quizzes.store.add(four_question_quiz_data)


@pytest.fixture
def student(users):
    return users.store.add(UserBase(
        name="Demo Student", email="student@example.com", password=PasswordHandler.hash(PASSWORD),
    ))


@pytest.fixture
def other_student(users):
    return users.store.add(UserBase(
        name="Other Student", email="other@example.com", password=PasswordHandler.hash(PASSWORD),
    ))


@pytest.fixture
def admin(users):
    return users.store.add(UserBase(
        name="System Admin", email="admin@bank.com", password=PasswordHandler.hash(PASSWORD),
        role=UserRoleEnum.ADMIN,
    ))


@pytest.fixture
def app(users, quizzes, results, subjects, chapters, question_bank):
    app = make_app(use_lifespan=False)
    app.dependency_overrides[get_user_repository] = lambda: users
    app.dependency_overrides[get_quiz_repository] = lambda: quizzes
    app.dependency_overrides[get_result_repository] = lambda: results
    app.dependency_overrides[get_subject_repository] = lambda: subjects
    app.dependency_overrides[get_chapter_repository] = lambda: chapters
    app.dependency_overrides[get_question_bank_repository] = lambda: question_bank
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def student_headers(student):
    return {"Authorization": f"Bearer {issue_token(student)}"}


@pytest.fixture
def admin_headers(admin):
    return {"Authorization": f"Bearer {issue_token(admin)}"}
