import asyncio
import logging
import os
from dataclasses import dataclass
from typing import List, Sequence
from uuid import uuid4

from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings
from content.ports.outbound.storage_port import StoragePort
from shared.exceptions import TooManyFilesError, UpstreamFailure, UpstreamTimeout

logger = logging.getLogger(__name__)


@dataclass
class ImageFile:
    filename: str
    data: bytes
    content_type: str | None = None


def make_key(filename: str) -> str:
    base = os.path.basename(filename or "") or "upload"
    return f"{settings.s3_key_prefix}{uuid4().hex}_{base}"


class ImageService:
    def __init__(self, storage: StoragePort, max_files: int | None = None, timeout: float | None = None):
        self.storage = storage
        self.max_files = max_files or settings.upload_max_files
        self.timeout = timeout or settings.storage_timeout_seconds

    async def upload(self, files: Sequence[ImageFile]) -> List[str]:
        """
        Store every file or none of them: when a call fails or times out, the
        keys already written (and the one in flight) are deleted before the
        error propagates.
        """
        if len(files) > self.max_files:
            raise TooManyFilesError(f"at most {self.max_files} files per upload", received=len(files))

        urls: List[str] = []
        keys: List[str] = []
        try:
            for f in files:
                key = make_key(f.filename)
                keys.append(key)
                urls.append(await self._call(self.storage.upload, key, f.data, f.content_type))
        except UpstreamFailure:
            await self._discard(keys)
            raise
        logger.info("Uploaded %d image(s)", len(urls))
        return urls

    async def delete(self, key: str) -> bool:
        await self._call(self.storage.delete, key)
        logger.info("Deleted image %s", key)
        return True

    async def _discard(self, keys: Sequence[str]) -> None:
        for key in keys:
            try:
                await self._call(self.storage.delete, key)
            except UpstreamFailure:
                logger.warning("Could not remove partial upload %s", key)
        logger.info("Rolled back %d partial upload(s)", len(keys))

    async def _call(self, fn, *args):
        """Run a blocking storage call in a thread, bounded by the storage timeout."""
        try:
            return await asyncio.wait_for(asyncio.to_thread(fn, *args), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error("Storage call %s timed out after %.1fs", fn.__name__, self.timeout)
            raise UpstreamTimeout("storage_timeout")
        except (BotoCoreError, ClientError) as e:
            logger.error("Storage call %s failed: %s", fn.__name__, e)
            raise UpstreamFailure("storage_error")
