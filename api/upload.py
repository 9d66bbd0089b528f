"""Avatar upload: client-side validation plus multipart POST to /api/upload."""

from collections.abc import Sequence
from dataclasses import dataclass

import aiohttp
import structlog
from api.client import ApiClient, is_success
from api.errors import UploadFailed, UploadInProgress, ValidationError
from config.constants import (
    IMAGE_MEDIA_PREFIX,
    MAX_UPLOAD_BYTES,
    UPLOAD_PATH,
    ErrorMessage,
)

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class UploadFile:
    """A single file picked or dropped by the user."""
    filename: str
    content: bytes
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content)


class UploadAdapter:
    """Uploads one image at a time and returns its hosted URL."""

    def __init__(self, client: ApiClient, max_bytes: int = MAX_UPLOAD_BYTES) -> None:
        self.client = client
        self.max_bytes = max_bytes
        self.is_uploading = False

    def validate(self, file: UploadFile) -> None:
        """Raise ValidationError if the file is too large or not an image."""
        if file.size > self.max_bytes:
            raise ValidationError(ErrorMessage.FILE_TOO_LARGE.value)
        if not file.content_type.startswith(IMAGE_MEDIA_PREFIX):
            raise ValidationError(ErrorMessage.NOT_AN_IMAGE.value)

    async def drop(self, files: Sequence[UploadFile]) -> str | None:
        """Handle a drop/pick event. An empty drop is ignored."""
        if not files:
            return None
        if len(files) > 1:
            raise ValidationError(ErrorMessage.TOO_MANY_FILES.value)
        return await self.upload(files[0])

    async def upload(self, file: UploadFile) -> str:
        if self.is_uploading:
            raise UploadInProgress(ErrorMessage.UPLOAD_BUSY.value)
        self.validate(file)

        self.is_uploading = True
        try:
            session = await self.client.get_session()
            form = aiohttp.FormData()
            form.add_field("file", file.content, filename=file.filename, content_type=file.content_type)
            async with session.post(self.client.url(UPLOAD_PATH), data=form) as resp:
                if not is_success(resp.status):
                    log.warning("upload_rejected", filename=file.filename, status=resp.status)
                    raise UploadFailed(f"Upload failed with status {resp.status}", status=resp.status)
                result = await resp.json(content_type=None)
        except (aiohttp.ClientError, ValueError) as e:
            log.error("upload_error", filename=file.filename, error=str(e))
            raise UploadFailed(str(e)) from e
        finally:
            self.is_uploading = False

        url = result.get("url") if isinstance(result, dict) else None
        if not isinstance(url, str) or not url:
            log.error("upload_missing_url", filename=file.filename)
            raise UploadFailed("Upload response did not include a url")

        log.info("upload_complete", filename=file.filename, size=file.size)
        return url
