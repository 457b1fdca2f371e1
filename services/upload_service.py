"""
services/upload_service.py
--------------------------
Stores uploaded image bytes on disk under a generated name.

Only bytes go to disk here; registering the photo against a post is a
separate call to the photo repository, and the two are not transactional.
"""

import os
import re
import uuid
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional

from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from config import PHOTOS_URL_PREFIX, UPLOAD_DIR
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_FILENAME = "upload.jpg"
DEFAULT_EXTENSION = "jpg"
CHUNK_SIZE = 64 * 1024

_EXTENSION_RE = re.compile(r"^[A-Za-z0-9]{1,10}$")


class UploadError(Exception):
    """
    Filesystem failure while storing an upload.

    Attributes:
        message: Short text safe to show to the caller.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(f"{message}: {cause}" if cause else message)


@dataclass
class StoredFile:
    filename: str
    url: str
    path: Path
    size: int


def file_extension(original_name: Optional[str]) -> str:
    """
    Extension of the declared file name, or the fallback.

    Only the last path component is considered, and only short
    alphanumeric extensions are accepted.
    """
    name = original_name or DEFAULT_FILENAME
    basename = PurePosixPath(name.replace("\\", "/")).name
    ext = PurePosixPath(basename).suffix.lstrip(".")
    if not _EXTENSION_RE.match(ext):
        return DEFAULT_EXTENSION
    return ext.lower()


def generate_filename(original_name: Optional[str]) -> str:
    """Random, collision-resistant name that keeps only the extension of the original."""
    return f"{uuid.uuid4().hex}.{file_extension(original_name)}"


class UploadService:
    """Writes uploaded files to the configured directory."""

    def __init__(self, upload_dir: str = UPLOAD_DIR, url_prefix: str = PHOTOS_URL_PREFIX):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")

    def public_url(self, filename: str) -> str:
        return f"{self.url_prefix}/{filename}"

    def ensure_upload_dir(self) -> None:
        """
        Create the upload directory (and parents) if missing.

        Raises:
            UploadError: If the directory cannot be created.
        """
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise UploadError("Failed to create upload directory", e) from e

    async def save(self, upload: UploadFile) -> StoredFile:
        """
        Stream an uploaded part to a new file in the upload directory.

        Args:
            upload: The first file part of the multipart request.

        Returns:
            The generated file name, its public URL, path and size in bytes.

        Raises:
            UploadError: If the directory, the file, or a chunk write fails.
        """
        filename = generate_filename(upload.filename)
        await run_in_threadpool(self.ensure_upload_dir)
        path = self.upload_dir / filename

        try:
            out = await run_in_threadpool(open, path, "xb")
        except OSError as e:
            raise UploadError("Failed to save file", e) from e

        size = 0
        try:
            while True:
                try:
                    chunk = await upload.read(CHUNK_SIZE)
                except Exception as e:
                    raise UploadError("Failed to read file data", e) from e
                if not chunk:
                    break
                try:
                    await run_in_threadpool(out.write, chunk)
                except OSError as e:
                    raise UploadError("Failed to write file", e) from e
                size += len(chunk)
        except UploadError:
            out.close()
            _remove_quietly(path)
            raise
        out.close()

        logger.info(f"Stored upload {upload.filename!r} as {filename} ({size} bytes)")
        return StoredFile(filename=filename, url=self.public_url(filename), path=path, size=size)


def _remove_quietly(path: Path) -> None:
    try:
        os.remove(path)
    except OSError as e:
        logger.warning(f"Could not remove partial upload {path}: {e}")
