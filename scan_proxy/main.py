# scan_proxy/main.py
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from . import __version__
from .errors import UnsupportedModel
from .routers import endpoints, icons, scan
from .settings import Settings

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Optional[Settings] = None, validate: bool = True) -> FastAPI:
    """
    Build the proxy app. Settings are read from the environment unless given,
    and validated before the app is returned.

    Logging is configured only when settings come from the environment, i.e.
    when the process itself starts the app; callers passing their own
    Settings own logging setup.

    Run with: uvicorn scan_proxy.main:create_app --factory
    """
    if settings is None:
        settings = Settings.from_env()
        configure_logging(settings.log_level)

    settings.warn_legacy_keys()
    if validate:
        settings.validate()
    logger.debug("Loaded settings: %s", settings.redacted())

    app = FastAPI(
        title="Detection Scan Proxy",
        description="Forwards scans and icon lookups to the YOLO / RetinaNet backends.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(UnsupportedModel)
    async def unsupported_model(request: Request, exc: UnsupportedModel):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.get("/", include_in_schema=False)
    def root():
        return RedirectResponse(url="/docs")

    @app.get("/health", tags=["meta"])
    def health():
        return {"ok": True}

    app.include_router(icons.router, prefix="/api")
    app.include_router(scan.router, prefix="/api")
    app.include_router(endpoints.router, prefix="/api")
    return app
