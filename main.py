from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.v1 import api_router
from src.core.config import get_settings
from src.core.database import close_db, init_db
from src.core.exceptions import register_exception_handlers
from src.core.logging_config import setup_logging


@asynccontextmanager
async def lifespan(_: FastAPI):
    await init_db()
    yield
    close_db()


def make_app(use_lifespan: bool = True):
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan if use_lifespan else None)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(
        api_router,
    )
    return app


app = make_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=9005,
        reload=True,
        timeout_graceful_shutdown=360,
        proxy_headers=True,
        forwarded_allow_ips="*"
    )
