import logging
from contextlib import asynccontextmanager
from urllib.parse import urlparse

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware.cors import CORSMiddleware

from vloghub.api.exception_handlers import register_exception_handlers
from vloghub.api.router import build_api_router
from vloghub.core.config import DEFAULT_SECRET_KEY, Settings, get_settings
from vloghub.core.logging_config import configure_logging
from vloghub.db.store import create_store

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application around one store.

    The store is created and initialized when the app starts and disposed
    when it stops; handlers reach it through vloghub.api.deps.get_store.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    if settings.secret_key == DEFAULT_SECRET_KEY:
        logger.warning("SECRET_KEY is not set; using the development default")
    if settings.expose_reset_tokens:
        logger.warning("EXPOSE_RESET_TOKENS is on; reset tokens are returned in API responses")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = create_store(settings)
        store.initialize()
        app.state.store = store
        try:
            yield
        finally:
            store.dispose()

    app = FastAPI(title="vloghub API", lifespan=lifespan)
    app.state.settings = settings

    if settings.frontend_url:
        parsed = urlparse(settings.frontend_url)
        origin = f"{parsed.scheme}://{parsed.netloc}"
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[origin],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)
    app.include_router(build_api_router(settings), prefix="/api")

    if settings.uses_hosted_backend:
        app.mount(
            "/uploads",
            StaticFiles(directory=settings.upload_dir, check_dir=False),
            name="uploads",
        )

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


def run() -> None:
    """Serve the app with uvicorn, building it through the create_app factory."""
    settings = get_settings()
    uvicorn.run(
        "vloghub.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
