"""File Relay Application.

This is the main entry point for the file relay service. Devices on the same
local network upload files tagged with a session ID, and any other device that
knows the session ID can list and download them.

Modules:
    - files: upload/listing API, blob store and in-memory session registry
    - network: LAN address discovery for download URLs
    - config: YAML-backed settings
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from relay.config import AppSettings, get_config
from relay.files.blob_store import BlobStore
from relay.files.errors import MISSING_UPLOAD_FIELDS, BadRequestError, RelayError
from relay.files.registry import SessionRegistry
from relay.files.router import router as files_router
from relay.files.service import UPLOADS_PATH, FileRelayService
from relay.network import build_base_url, get_lan_address

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

DEFAULT_STATIC_DIR = Path(__file__).parent / "static"


def _log_banner(settings: AppSettings, lan_host: str) -> None:
    port = settings.server.port
    logger.info("Server running!")
    logger.info("---------------------------------------------")
    logger.info("Local Access:   %s", build_base_url("localhost", port))
    logger.info("Mobile Access:  %s", build_base_url(lan_host, port))
    logger.info("---------------------------------------------")


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Build the FastAPI application for *settings* (defaults to the loaded config)."""
    settings = settings or get_config()
    lan_host = settings.server.public_host or get_lan_address()

    blob_store = BlobStore(settings.storage.upload_dir)
    service = FileRelayService(
        registry=SessionRegistry(),
        blob_store=blob_store,
        base_url=build_base_url(lan_host, settings.server.port),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager for startup/shutdown events."""
        # Apply configured log level to root logger
        configured_level = getattr(logging, settings.logging.level.upper(), None)
        if configured_level is not None:
            logging.getLogger().setLevel(configured_level)
            logger.info("Root logger level set to %s", settings.logging.level.upper())

        blob_store.ensure_dir()
        logger.info("Storing uploads in %s", blob_store.upload_dir.resolve())
        _log_banner(settings, lan_host)

        yield  # Application runs here

        logger.info("Application shutdown complete")

    app = FastAPI(
        title="File Relay API",
        description="Local-network file relay grouped by session ID",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.relay_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RelayError)
    async def relay_error_handler(_request: Request, exc: RelayError):
        if exc.status_code >= 500:
            logger.error("Request failed: %s", exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        # A text "file" field or a file-typed "sessionId" is a missing upload field
        if request.url.path == request.app.url_path_for("upload_file"):
            return JSONResponse(
                status_code=BadRequestError.status_code,
                content={"error": MISSING_UPLOAD_FIELDS},
            )
        return await request_validation_exception_handler(request, exc)

    app.include_router(files_router)

    @app.get("/health")
    async def health() -> dict:
        """Health check endpoint.

        Returns:
            dict: Status object indicating the server is running.
        """
        return {"status": "ok"}

    # The content directory is created at startup, so it may not exist yet here
    app.mount(
        UPLOADS_PATH,
        StaticFiles(directory=blob_store.upload_dir, check_dir=False),
        name="uploads",
    )

    # Mounted last: "/" would otherwise shadow every route above
    static_dir = Path(settings.storage.static_dir or DEFAULT_STATIC_DIR)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.warning("Static directory not found, frontend disabled: %s", static_dir)

    return app


def run() -> None:
    """Console entry point: serve the relay on the configured host and port."""
    settings = get_config()
    uvicorn.run(create_app(settings), host=settings.server.host, port=settings.server.port)


if __name__ == "__main__":
    run()
