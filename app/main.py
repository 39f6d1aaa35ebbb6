import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from app.ai_core.completion import CompletionGateway
from app.api.error_handlers import register_error_handlers
from app.api.routes import assistant, knowledge
from app.config import Settings, get_settings
from app.integrations.mongodb import KnowledgeRepository, MongoStore
from app.services.actions import DashboardActions

APP_DESCRIPTION = "Internal AI assistant with a saved-answers knowledge base"
APP_VERSION = "0.1.0"


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Set log level for app modules
    logger = logging.getLogger("app")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Settings are loaded when the application starts (not at import time);
    a missing OPENAI_API_KEY, MONGODB_URI or MONGODB_DB aborts startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        config = settings or get_settings()
        configure_logging(config.debug)

        store = MongoStore.from_settings(config)
        app.state.store = store
        app.state.actions = DashboardActions(
            repository=KnowledgeRepository(store),
            gateway=CompletionGateway(config),
        )
        logging.getLogger(__name__).info(f"{config.app_name} started")
        try:
            yield
        finally:
            store.close()

    app = FastAPI(
        title="Knowledge Desk",
        description=APP_DESCRIPTION,
        version=APP_VERSION,
        lifespan=lifespan,
    )

    register_error_handlers(app)

    # Include routers
    app.include_router(assistant.router, prefix="/api/assistant", tags=["Assistant"])
    app.include_router(knowledge.router, prefix="/api/knowledge", tags=["Knowledge Base"])

    @app.get("/")
    async def root():
        return {
            "message": "Welcome to Knowledge Desk - AI assistant with a knowledge base",
            "version": APP_VERSION,
            "endpoints": {
                "assistant": "/api/assistant/ask",
                "knowledge": "/api/knowledge",
                "health": "/health",
                "docs": "/docs",
                "redoc": "/redoc",
            },
        }

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "service": app.title}

    return app


app = create_app()
