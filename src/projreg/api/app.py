"""FastAPI app entrypoint."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI

from projreg.api.deps import get_app_settings
from projreg.api.errors import install_error_handlers
from projreg.api.routes.events import router as events_router
from projreg.api.routes.mcp_transport import router as mcp_transport_router
from projreg.api.routes.projects import router as projects_router
from projreg.api.routes.registry import router as registry_router
from projreg.config import validate_settings
from projreg.logs import configure_logging


def create_app() -> FastAPI:
    app = FastAPI(title="Project Registry API", version="0.1.0")
    install_error_handlers(app)
    app.include_router(projects_router)
    app.include_router(events_router)
    app.include_router(registry_router)
    app.include_router(mcp_transport_router)

    @app.get("/api/v1/health", tags=["system"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/v1/mcp/.well-known", tags=["system"])
    async def mcp_discovery() -> dict[str, str]:
        return {
            "name": "projreg-mcp",
            "transport": "streamable-http",
            "endpoint": "/mcp",
        }

    return app


app = create_app()


def run() -> None:
    settings = get_app_settings()
    logger = configure_logging(settings)
    issues = validate_settings(settings)
    if issues:
        for issue in issues:
            logger.error("invalid configuration: %s", issue)
        raise SystemExit(2)
    logger.info("serving registry db=%s admin=%s", settings.db_path, settings.administrator)
    uvicorn.run("projreg.api.app:app", host=settings.host, port=settings.port, reload=False)
