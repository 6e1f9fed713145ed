from contextlib import asynccontextmanager

from fastapi import FastAPI

from template_store import __version__
from template_store.core.config import Settings, get_settings
from template_store.core.logging import configure_logging
from template_store.infrastructure.database.session import dispose_engine, init_db
from template_store.interfaces.http.routers import create_api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    if app.state.settings.environment == "development":
        await init_db()
    yield
    await dispose_engine()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        description="Owner-scoped template storage",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.include_router(create_api_router(settings.api_prefix))
    return app
