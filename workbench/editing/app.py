from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.routing import APIRouter
from loguru import logger

from workbench.editing.context import create_session
from workbench.editing.log import setup_logging
from workbench.editing.settings import get_settings


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # -- Startup ---------------------------------------------------------------
    settings = get_settings()
    setup_logging(settings.log_level)

    logger.info("Workbench starting (host={}, port={})", settings.host, settings.port)
    logger.info("Data root: {} (untitled={})", settings.data_root, settings.resolve_untitled_home())
    if settings.extension_tests_location is not None:
        logger.warning("Extension tests at {} -- entering workspaces is disabled", settings.extension_tests_location)

    _app.state.session = await create_session(settings)

    yield

    # -- Shutdown --------------------------------------------------------------
    session = _app.state.session
    logger.info("Workbench shutting down (state={})", session.context.workbench.state)
    session.windows.unregister(session.window_id)


app = FastAPI(title="Workbench Workspace Editing", lifespan=lifespan)

# ---------------------------------------------------------------------------
# API router -- all endpoints live under /api
# ---------------------------------------------------------------------------
api = APIRouter(prefix="/api")


@api.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


from workbench.editing.routers.lifecycle import router as lifecycle_router  # noqa: E402
from workbench.editing.routers.workspaces import router as workspaces_router  # noqa: E402

api.include_router(workspaces_router)
api.include_router(lifecycle_router)

app.include_router(api)
