"""
Data routes for flatstore
"""

from __future__ import annotations

import asyncio
import logging
import time

from fastapi import APIRouter, Request, HTTPException, Response
from fastapi.responses import PlainTextResponse

from .models import INTERNAL_ERROR_BODY
from .store import DataStore, StoreError
from .utils import create_response_headers, get_content_type

logger = logging.getLogger(__name__)

data_router = APIRouter(tags=["data"])


def get_store(request: Request) -> DataStore:
    return request.app.state.store


async def read_body(request: Request) -> bytes:
    """Read the whole request body within the configured read timeout"""
    timeout = request.app.state.config.server.readTimeout
    try:
        return await asyncio.wait_for(request.body(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"Timed out reading request body: {request.method} {request.url.path}")
        raise HTTPException(status_code=408, detail="Request body read timed out")


@data_router.get("/data")
async def get_data(request: Request):
    """Return the current contents of the data file"""

    store = get_store(request)
    config = request.app.state.config

    try:
        if config.store.appendOnRead:
            # Legacy behaviour: a GET body is appended after the read
            body = await read_body(request)
            content = await store.read_then_append(body)
        else:
            content = await store.read_all()
    except StoreError as e:
        logger.error(f"Data read failed: {e}")
        return PlainTextResponse(INTERNAL_ERROR_BODY, status_code=500)

    headers = create_response_headers(
        content_type=get_content_type(store.path),
        last_modified=time.time(),
    )
    return Response(content=content, headers=headers)


@data_router.post("/data")
async def post_data(request: Request):
    """Replace the contents of the data file with the request body"""

    store = get_store(request)
    body = await read_body(request)

    try:
        written = await store.replace_all(body)
    except StoreError as e:
        logger.error(f"Data write failed: {e}")
        return PlainTextResponse(INTERNAL_ERROR_BODY, status_code=500)

    logger.info(f"Data file replaced ({written} bytes)")
    return Response(status_code=200)


def setup_api_routes(app):
    """Setup data routes"""
    app.include_router(data_router)
    logger.info("Data routes setup complete")
