from enum import Enum


class UserRoleEnum(str, Enum):
    STUDENT = "student"
    ADMIN = "admin"


class AnswerOutcome(str, Enum):
    CORRECT = "correct"
    WRONG = "wrong"
    UNANSWERED = "unanswered"


class DifficultyEnum(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
