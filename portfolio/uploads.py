import asyncio
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from application_sdk.observability.logger_adaptor import get_logger

logger = get_logger(__name__)

ACCEPTED_CONTENT_TYPE = "application/pdf"
MAX_UPLOAD_SIZE = 5 * 1024 * 1024
REVOKE_DELAY_SECONDS = 60.0

Scheduler = Callable[[float, Callable[[], None]], Any]


class ValidationError(Exception):
    """A selected file was rejected; the message is shown next to the control."""


@dataclass(frozen=True)
class UploadedFile:
    name: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class DownloadHandle:
    url: str
    filename: str


def validate_upload(file: UploadedFile) -> None:
    """Raise ValidationError unless ``file`` is a PDF of at most 5 MiB."""
    if file.content_type != ACCEPTED_CONTENT_TYPE:
        raise ValidationError("Please upload a PDF file")
    if file.size > MAX_UPLOAD_SIZE:
        raise ValidationError("File size must be less than 5MB")


def _loop_scheduler(delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
    return asyncio.get_running_loop().call_later(delay, callback)


class ResumeUploadHelper:
    """Session-local holder for the resume offered for download.

    Only the in-memory bytes of accepted files are kept, keyed by an opaque
    ``blob:`` URL. Nothing is written anywhere.
    """

    def __init__(
        self,
        revoke_delay: float = REVOKE_DELAY_SECONDS,
        scheduler: Optional[Scheduler] = None,
    ):
        self.revoke_delay = revoke_delay
        self.scheduler = scheduler or _loop_scheduler
        self.current: Optional[DownloadHandle] = None
        self.status: str = ""
        self._blobs: Dict[str, bytes] = {}

    def select(self, file: Optional[UploadedFile]) -> Optional[DownloadHandle]:
        """Accept a newly chosen file and issue a download handle for it.

        An empty selection does nothing. A rejected file leaves the current
        handle untouched.

        Raises:
            ValidationError: If the file is not a PDF or exceeds 5 MiB.
        """
        if file is None:
            return None
        try:
            validate_upload(file)
        except ValidationError as e:
            self.status = str(e)
            logger.info("Rejected upload '%s': %s", file.name, e)
            raise

        handle = DownloadHandle(url=f"blob:{uuid.uuid4()}", filename=file.name)
        previous = self.current
        if previous is not None:
            # Schedule before mutating state.
            self.scheduler(self.revoke_delay, lambda: self._revoke_if_superseded(previous))

        self._blobs[handle.url] = file.data
        self.current = handle
        self.status = f"Uploaded: {file.name}"
        logger.info("Accepted upload '%s' (%d bytes)", file.name, file.size)
        return handle

    def _revoke_if_superseded(self, handle: DownloadHandle) -> None:
        if self.current is not None and self.current.url == handle.url:
            return
        if self._blobs.pop(handle.url, None) is not None:
            logger.debug("Revoked superseded download handle %s", handle.url)

    def is_active(self, handle: DownloadHandle) -> bool:
        return handle.url in self._blobs

    def download(self, handle: DownloadHandle) -> bytes:
        """Bytes behind ``handle``.

        Raises:
            KeyError: If the handle has been revoked.
        """
        return self._blobs[handle.url]
