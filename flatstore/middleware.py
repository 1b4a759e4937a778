"""
Middleware for flatstore
"""

import asyncio
import logging
import time
from typing import Callable, Optional
from fastapi import FastAPI, Request, Response, HTTPException
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .models import INTERNAL_ERROR_BODY

logger = logging.getLogger(__name__)


def get_client_ip(request: Request) -> str:
    return request.client.host if request.client else "-"


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Access logging middleware"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        client_ip = get_client_ip(request)

        try:
            response = await call_next(request)

            duration = time.time() - start_time
            self._log_access(
                request=request,
                response=response,
                duration=duration,
                client_ip=client_ip,
            )
            return response

        except Exception as e:
            duration = time.time() - start_time
            logger.error(f"Request failed: {request.method} {request.url.path} - {e}")

            self._log_access(
                request=request,
                response=None,
                duration=duration,
                client_ip=client_ip,
                error=str(e)
            )
            raise

    def _log_access(
        self,
        request: Request,
        response: Optional[Response],
        duration: float,
        client_ip: str,
        error: Optional[str] = None
    ):
        """Log access information"""

        status_code = response.status_code if response else 500
        content_length = response.headers.get("content-length", "-") if response else "-"

        log_data = {
            "method": request.method,
            "path": str(request.url.path),
            "status": status_code,
            "size": content_length,
            "duration": round(duration * 1000, 2),  # milliseconds
            "ip": client_ip,
            "user_agent": request.headers.get("user-agent", "-"),
        }

        if error:
            log_data["error"] = error

        # Log level based on status code
        if status_code >= 500:
            logger.error(f"ACCESS {log_data}")
        elif status_code >= 400:
            logger.warning(f"ACCESS {log_data}")
        else:
            logger.info(f"ACCESS {log_data}")


class ExceptionHandlerMiddleware(BaseHTTPMiddleware):
    """Turns any unhandled handler exception into a plain-text 500"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except HTTPException:
            # Let FastAPI handle HTTP exceptions
            raise

        except Exception as e:
            logger.exception(f"Unhandled exception: {e}")
            return PlainTextResponse(INTERNAL_ERROR_BODY, status_code=500)


class WriteTimeoutMiddleware:
    """Bounds the time a handler may take to produce its response"""

    def __init__(self, app: ASGIApp, timeout: float = 15.0):
        self.app = app
        self.timeout = timeout

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(self.app(scope, receive, send_wrapper), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"Handler exceeded {self.timeout}s: {scope['method']} {scope['path']}")
            # A partially sent response is left for the server to close
            if not response_started:
                response = PlainTextResponse("Request timed out", status_code=503)
                await response(scope, receive, send)


def setup_middleware(app: FastAPI):
    """Setup all middleware for the application"""

    config = app.state.config

    # Innermost first; the last one added wraps all others
    app.add_middleware(WriteTimeoutMiddleware, timeout=config.server.writeTimeout)
    app.add_middleware(ExceptionHandlerMiddleware)
    app.add_middleware(AccessLogMiddleware)

    logger.info("Middleware setup complete")
