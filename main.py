from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Core
from core.config import Settings, settings as default_settings
from core.errors import ConsoleError, handle_console_error
from core.logging_config import logger
from core.scheduler import create_scheduler, start_scheduler, stop_scheduler
from core.session_manager import build_session_manager
from core.state_store import FileStateStore, StateStore
from core.store import EntityStore

# Services
from services.assistant import AssistantClient
from services.seed_data import build_entity_store

from routers import api_router


def _state_store(config: Settings) -> StateStore:
    if config.STATE_FILE:
        logger.info(f"Persisting console state to {config.STATE_FILE}")
        return FileStateStore(config.STATE_FILE)
    return StateStore()


# -------------------------------------------------
# Create the Application
# -------------------------------------------------
def create_app(
    config: Settings = default_settings,
    store: Optional[EntityStore] = None,
    state: Optional[StateStore] = None,
    assistant: Optional[AssistantClient] = None,
) -> FastAPI:
    scheduler = create_scheduler()
    console = build_session_manager(
        store or build_entity_store(),
        scheduler=scheduler,
        state=state or _state_store(config),
        config=config,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 Starting UDMS console")
        start_scheduler(scheduler)
        if console.session is None:
            console.restore_session()
        yield
        stop_scheduler(scheduler)
        logger.info("🛑 UDMS console stopped")

    app = FastAPI(
        title=config.PROJECT_NAME,
        version="1.0.0",
        description="UDMS Console — access-control and state-mutation kernel for dormitory operations",
        lifespan=lifespan,
    )

    app.state.console = console
    app.state.assistant = assistant or AssistantClient(config)
    app.state.scheduler = scheduler

    # -------------------------------------------------
    # CORS
    # -------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------
    # Error handling
    # -------------------------------------------------
    app.add_exception_handler(ConsoleError, handle_console_error)

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error at %s", request.url, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    app.include_router(api_router)
    return app


# Create the global FastAPI instance
app = create_app()
