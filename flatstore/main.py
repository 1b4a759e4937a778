"""
Main application factory for flatstore
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI
from pydantic import BaseModel

from . import __version__
from .config import DEFAULT_CONFIG_PATH, load_config
from .models import Config
from .middleware import setup_middleware
from .store import DataStore, StoreInitError
from .ui import setup_ui_routes
from .api import setup_api_routes


logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    ok: bool
    version: str


def setup_logging(config: Config):
    """Setup logging configuration"""
    log_config = config.logging

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_config.level.upper(), logging.INFO))

    # Clear existing handlers
    root_logger.handlers.clear()

    # Create formatter
    if log_config.json:
        formatter = logging.Formatter(
            '{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","msg":"%(message)s"}'
        )
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File handler if configured
    if log_config.file:
        log_file = Path(log_config.file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=log_config.max_size_mb * 1024 * 1024,
            backupCount=log_config.backup_count,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def create_app(config_path: Optional[str] = None) -> FastAPI:
    """
    Create FastAPI application

    Raises:
        StoreInitError: If the data file cannot be prepared
    """

    # If not provided explicitly, fall back to env or default
    if not config_path:
        config_path = os.getenv("FLATSTORE_CONFIG", DEFAULT_CONFIG_PATH)
    config = load_config(config_path)

    setup_logging(config)

    store = DataStore(config.store.path, config.store.placeholder.encode("utf-8"))
    store.ensure_initialized()

    app = FastAPI(
        title="flatstore",
        description="Single-file data server",
        version=__version__,
        docs_url="/docs" if os.getenv("FLATSTORE_DEBUG") else None,
        redoc_url=None,
        openapi_url="/openapi.json" if os.getenv("FLATSTORE_DEBUG") else None,
    )

    app.state.config = config
    app.state.store = store

    setup_middleware(app)
    setup_api_routes(app)

    @app.get("/healthz", response_model=HealthResponse)
    async def health_check():
        return HealthResponse(ok=True, version=__version__)

    # Mounts last so they never shadow the routes above
    setup_ui_routes(app)

    logger.info(f"Data file: {store.path}")
    return app


def main():
    """Main entry point for running the server"""
    import argparse

    parser = argparse.ArgumentParser(description="flatstore data server")
    parser.add_argument("--config", "-c", default=None, help="Configuration file path")
    parser.add_argument("--host", default=None, help="Host to bind to")
    parser.add_argument("--port", type=int, default=None, help="Port to bind to")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")

    args = parser.parse_args()

    if args.debug:
        os.environ["FLATSTORE_DEBUG"] = "1"

    try:
        app = create_app(args.config)
    except StoreInitError as e:
        logger.critical(f"Startup failed: {e}")
        sys.exit(1)

    config = app.state.config

    # Override with command line args
    host = args.host or config.server.addr
    port = args.port or config.server.port

    logger.info(f"flatstore listening on {host}:{port}")

    # uvicorn exits non-zero if the address cannot be bound
    uvicorn.run(
        app,
        host=host,
        port=port,
        timeout_keep_alive=int(config.server.readTimeout),
        log_config=None,
        access_log=False,  # We handle access logging ourselves
        server_header=False,
    )


if __name__ == "__main__":
    main()
