"""
Backing data file for flatstore
"""

import asyncio
import logging
from pathlib import Path
from typing import Union

import aiofiles
import aiofiles.os

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Request-scoped failure reading or writing the data file"""
    pass


class StoreInitError(StoreError):
    """The data file could not be prepared at startup"""
    pass


class DataStore:
    """
    Sole owner of the shared data file.

    Every read and write is serialized through one asyncio lock, so a read
    never observes a half-written replace and concurrent replaces leave the
    file equal to exactly one of the written payloads.
    """

    def __init__(self, path: Union[str, Path], placeholder: bytes = b"[]"):
        self.path = Path(path)
        self.placeholder = placeholder
        self._lock = asyncio.Lock()

    def ensure_initialized(self) -> None:
        """
        Make sure the data file exists and is not empty

        Raises:
            StoreInitError: If the file cannot be created, inspected or written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            if not self.path.exists():
                self.path.write_bytes(self.placeholder)
                logger.info(f"Created data file: {self.path}")
                return

            if not self.path.is_file():
                raise StoreInitError(f"Data path is not a regular file: {self.path}")

            if self.path.stat().st_size == 0:
                self.path.write_bytes(self.placeholder)
                logger.info(f"Initialized empty data file: {self.path}")

        except OSError as e:
            raise StoreInitError(f"Failed to initialize data file {self.path}: {e}") from e

    async def read_all(self) -> bytes:
        """
        Return the current contents of the data file

        Raises:
            StoreError: If the file cannot be opened or read
        """
        async with self._lock:
            return await self._read()

    async def replace_all(self, data: bytes) -> int:
        """
        Truncate the data file and write data into it

        Returns:
            Number of bytes written

        Raises:
            StoreError: If the file is missing or the write fails
        """
        async with self._lock:
            return await self._write(data, 'wb')

    async def append(self, data: bytes) -> int:
        """
        Append data to the end of the data file

        Raises:
            StoreError: If the file is missing or the write fails
        """
        async with self._lock:
            return await self._write(data, 'ab')

    async def read_then_append(self, data: bytes) -> bytes:
        """Read the contents, then append data, as one locked step"""
        async with self._lock:
            content = await self._read()
            if data:
                await self._write(data, 'ab')
            return content

    async def _read(self) -> bytes:
        try:
            async with aiofiles.open(self.path, 'rb') as f:
                return await f.read()
        except OSError as e:
            raise StoreError(f"Failed to read data file: {e}") from e

    async def _write(self, data: bytes, mode: str) -> int:
        # The file is created at startup only; a vanished file is an error
        if not await aiofiles.os.path.isfile(self.path):
            raise StoreError(f"Data file not found: {self.path}")

        try:
            async with aiofiles.open(self.path, mode) as f:
                written = await f.write(data)
            logger.debug(f"Wrote {written} bytes to data file (mode {mode})")
            return written
        except OSError as e:
            raise StoreError(f"Failed to write data file: {e}") from e


__all__ = ["DataStore", "StoreError", "StoreInitError"]
