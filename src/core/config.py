from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    APP_NAME: str = "Quizzy API"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # База данных
    MONGO_URL: str = "mongodb://mongodb:27017"
    MONGO_DB: str = "quizzy"

    # Безопасность
    JWT_SECRET: str = Field(default="change-me-in-production")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Значения по умолчанию для квизов
    DEFAULT_NEGATIVE_MARK_VALUE: float = 0.25
    RECENT_RESULTS_LIMIT: int = 5
    STATS_REFRESH_ATTEMPTS: int = 3

    # Аналитика студента
    ANALYTICS_RECENT_ATTEMPTS: int = 10
    PERFORMANCE_TREND_DAYS: int = 30

    # Банк вопросов
    QUESTION_BANK_PAGE_SIZE: int = 20


@lru_cache
def get_settings() -> Settings:
    return Settings()
