"""Storage for uploaded vlog media on local disk, served back under /uploads."""

import logging
import re
import time
from pathlib import Path

from fastapi import UploadFile

from vloghub.core.config import Settings
from vloghub.errors import DomainValidationError
from vloghub.schemas.vlog import UploadedFile

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads"
CHUNK_SIZE = 1024 * 1024

# kind -> (accepted content type prefix, stored file name prefix)
MEDIA_KINDS = {
    "video": ("video/", ""),
    "thumbnail": ("image/", "thumb_"),
}

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(filename: str | None) -> str:
    """Strip directories and anything outside [A-Za-z0-9._-] from a client file name."""
    name = Path(filename or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "upload"


class StorageService:
    def __init__(self, settings: Settings):
        self.root = settings.upload_dir
        self.max_bytes = settings.upload_max_bytes

    async def save_upload(self, user_id: int, kind: str, upload: UploadFile) -> UploadedFile:
        """
        Store an uploaded file as <user_id>/<prefix><timestamp>_<name> and return its URL.

        Raises:
            DomainValidationError: If the kind is unknown, the content type does
                not match it, or the file is empty or larger than UPLOAD_MAX_BYTES.
        """
        if kind not in MEDIA_KINDS:
            raise DomainValidationError(f"kind must be one of: {', '.join(MEDIA_KINDS)}")

        content_prefix, name_prefix = MEDIA_KINDS[kind]
        if not upload.content_type or not upload.content_type.startswith(content_prefix):
            raise DomainValidationError(f"File {upload.filename} is not a {kind}")

        stamp = int(time.time() * 1000)
        relative = Path(str(user_id)) / f"{name_prefix}{stamp}_{safe_filename(upload.filename)}"
        target = self.root / relative
        target.parent.mkdir(parents=True, exist_ok=True)

        size = 0
        try:
            with target.open("wb") as out:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self.max_bytes:
                        raise DomainValidationError(
                            f"File is larger than the {self.max_bytes} byte limit"
                        )
                    out.write(chunk)
            if size == 0:
                raise DomainValidationError("File is empty")
        except DomainValidationError:
            target.unlink(missing_ok=True)
            raise

        logger.info("User %s uploaded %s %s (%d bytes)", user_id, kind, relative, size)
        return UploadedFile(
            url=f"{UPLOAD_URL_PREFIX}/{relative.as_posix()}",
            kind=kind,
            size=size,
        )
