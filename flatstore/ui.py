"""
Home page and static asset routes for flatstore
"""

import logging
import time
from pathlib import Path

import aiofiles
from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from .models import INTERNAL_ERROR_BODY
from .utils import create_response_headers, get_content_type

logger = logging.getLogger(__name__)

ui_router = APIRouter(tags=["ui"])


@ui_router.get("/")
async def home_page(request: Request):
    """Serve the home document"""

    static = request.app.state.config.static
    index_path = Path(static.dir) / static.index

    try:
        async with aiofiles.open(index_path, 'rb') as f:
            content = await f.read()
    except OSError as e:
        logger.error(f"Failed to open home document {index_path}: {e}")
        return PlainTextResponse(INTERNAL_ERROR_BODY, status_code=500)

    headers = create_response_headers(
        content_type=get_content_type(index_path),
        last_modified=time.time(),
    )
    return Response(content=content, headers=headers)


def setup_ui_routes(app: FastAPI):
    """Setup home route and mount the static directory"""
    app.include_router(ui_router)

    static = app.state.config.static
    static_dir = Path(static.dir)
    if static_dir.is_dir():
        app.mount(static.mountPath, StaticFiles(directory=str(static_dir), html=True), name="static")
        logger.info(f"Static files mounted at {static.mountPath} from {static_dir}")
    else:
        logger.warning(f"Static directory not found: {static_dir}")

    logger.info("UI routes setup complete")
