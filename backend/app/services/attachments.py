"""
Audio attachment storage.

Accepts one uploaded audio blob, enforces the media type and size limit,
and stores it under a generated name in the upload directory.
"""

import logging
import os
import re
import secrets
import time
from pathlib import Path
from typing import Optional
from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool
from backend.app.core.exceptions import PayloadTooLargeError, UnsupportedMediaTypeError

logger = logging.getLogger("equipment_monitoring.attachments")

CHUNK_SIZE = 64 * 1024
_EXTENSION_RE = re.compile(r"^\.[A-Za-z0-9]{1,10}$")
_STORED_NAME_RE = re.compile(r"^audio-\d+-\d+(\.[A-Za-z0-9]{1,10})?$")


def is_audio(content_type: Optional[str]) -> bool:
    return bool(content_type) and content_type.lower().startswith("audio/")


def safe_extension(filename: Optional[str]) -> str:
    """Keep the original extension only if it is short and alphanumeric."""
    ext = os.path.splitext(filename or "")[1]
    return ext.lower() if _EXTENSION_RE.match(ext) else ""


def generate_name(filename: Optional[str]) -> str:
    """audio-<epoch millis>-<random><ext>"""
    return f"audio-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{safe_extension(filename)}"


class AttachmentStore:
    def __init__(self, directory: str, max_bytes: int):
        self.directory = Path(directory)
        self.max_bytes = max_bytes

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Optional[Path]:
        """Resolve a stored name to its file, or None if it is not one of ours."""
        if not _STORED_NAME_RE.match(name):
            return None
        path = self.directory / name
        return path if path.is_file() else None

    async def save(self, upload: UploadFile) -> str:
        """
        Validate and persist an upload.

        The file is fully written (temp file + rename) before this returns,
        so a report row committed afterwards never points at a partial blob.

        Raises:
            UnsupportedMediaTypeError: declared content type is not audio/*
            PayloadTooLargeError: blob exceeds max_bytes
        """
        if not is_audio(upload.content_type):
            logger.warning("Rejected upload %r with content type %r", upload.filename, upload.content_type)
            raise UnsupportedMediaTypeError(upload.content_type)

        chunks = []
        size = 0
        while True:
            chunk = await upload.read(CHUNK_SIZE)
            if not chunk:
                break
            size += len(chunk)
            if size > self.max_bytes:
                logger.warning("Rejected upload %r over %d bytes", upload.filename, self.max_bytes)
                raise PayloadTooLargeError(self.max_bytes)
            chunks.append(chunk)

        name = generate_name(upload.filename)
        await run_in_threadpool(self._write, name, b"".join(chunks))
        logger.info("Stored attachment %s (%d bytes)", name, size)
        return name

    def _write(self, name: str, data: bytes) -> None:
        self.ensure_directory()
        target = self.directory / name
        tmp = self.directory / f".{name}.part"
        try:
            with open(tmp, "xb") as fh:
                fh.write(data)
            os.replace(tmp, target)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise

    async def delete(self, name: str) -> None:
        """Remove a stored blob; used when the referencing row fails to commit."""
        path = self.path_for(name)
        if path is not None:
            await run_in_threadpool(path.unlink, True)
