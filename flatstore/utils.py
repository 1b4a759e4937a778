"""
Utility functions for flatstore
"""

import mimetypes
import time
from pathlib import Path
from typing import Optional

from .models import MIME_TYPES, DEFAULT_MIME_TYPE


def get_mime_type(file_path: Path) -> str:
    """Get MIME type for file"""
    suffix = file_path.suffix.lower()

    # Check our custom MIME types first
    if suffix in MIME_TYPES:
        return MIME_TYPES[suffix]

    # Fall back to system mimetypes
    mime_type, _ = mimetypes.guess_type(str(file_path))
    return mime_type or DEFAULT_MIME_TYPE


def get_content_type(file_path: Path) -> str:
    """MIME type with a utf-8 charset for text types"""
    mime_type = get_mime_type(file_path)
    if mime_type.startswith("text/"):
        return f"{mime_type}; charset=utf-8"
    return mime_type


def create_response_headers(
    content_type: str = "application/octet-stream",
    last_modified: Optional[float] = None,
    cache_control: str = "no-cache"
) -> dict:
    """Create standard response headers"""
    headers = {
        "Content-Type": content_type,
        "Cache-Control": cache_control,
        "X-Content-Type-Options": "nosniff",
    }

    if last_modified:
        headers["Last-Modified"] = time.strftime(
            "%a, %d %b %Y %H:%M:%S GMT",
            time.gmtime(last_modified)
        )

    return headers
