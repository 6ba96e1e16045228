"""Image uploads with a local-file fallback."""

import logging
import mimetypes
from pathlib import Path

from inventory_client.client import MultipartPayload, RequestClient
from inventory_client.exceptions import InventoryClientError, StorageError
from inventory_client.notices import NoticeBoard

logger = logging.getLogger(__name__)

UPLOAD_FIELD = "file"
UPLOAD_FALLBACK_NOTICE_KEY = "upload-fallback"
UPLOAD_FALLBACK_MESSAGE = (
    "Image upload is unavailable; using a local preview that only works on this machine."
)


class ImageUploader:
    """Send an image to ``/upload`` and return the URL to store on the record."""

    def __init__(self, client: RequestClient, notices: NoticeBoard) -> None:
        self.client = client
        self.notices = notices

    async def upload(self, path: str | Path) -> str:
        """Upload ``path``; fall back to its ``file://`` URI if the server refuses.

        Raises
        ------
        StorageError
            If the file itself cannot be read.
        """
        file_path = Path(path).expanduser()
        try:
            content = file_path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Could not read image {file_path}: {exc}") from exc

        content_type = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"
        payload = MultipartPayload(
            field=UPLOAD_FIELD,
            filename=file_path.name,
            content=content,
            content_type=content_type,
        )
        try:
            location = await self.client.upload(payload)
        except InventoryClientError as exc:
            logger.warning("Upload of %s failed, using local file: %s", file_path.name, exc)
            self.notices.post_once(UPLOAD_FALLBACK_NOTICE_KEY, UPLOAD_FALLBACK_MESSAGE)
            return file_path.resolve().as_uri()

        logger.info("Uploaded %s (%d bytes)", file_path.name, len(content))
        return location
