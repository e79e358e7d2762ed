import logging

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from src.core.config import get_settings
from src.models.question_bank import QuestionBankDocument
from src.models.quiz import QuizDocument
from src.models.quiz_result import QuizResultDocument
from src.models.subject import ChapterDocument, SubjectDocument
from src.models.user import UserDocument

logger = logging.getLogger(__name__)

client = None
db = None


async def init_db():
    global client, db
    settings = get_settings()
    client = AsyncIOMotorClient(settings.MONGO_URL, tz_aware=True)
    db = client[settings.MONGO_DB]
    await init_beanie(
        database=db,
        document_models=[
            UserDocument,
            SubjectDocument,
            ChapterDocument,
            QuizDocument,
            QuizResultDocument,
            QuestionBankDocument,
        ],
    )
    logger.info("Connected to MongoDB database %s", settings.MONGO_DB)


def close_db():
    global client, db
    if client is not None:
        client.close()
    client = None
    db = None
