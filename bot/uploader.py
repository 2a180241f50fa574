"""Upload client for the anonymous file host (0x0.st by default)."""
import io
from dataclasses import dataclass
from typing import BinaryIO

import httpx

from bot.exceptions import UploadError
from bot.logging_client import setup_logger

logger = setup_logger('gsoh-bot-upload')


@dataclass(frozen=True)
class UploadResult:
    """Download link returned by the file host."""

    url: str
    expires_in_hours: int


class Uploader:
    """Posts archives to the file host as multipart uploads.

    Example:
        uploader = Uploader("https://0x0.st", user_agent="MyBot/1.0")
        with open("move.zip", "rb") as f:
            result = await uploader.upload(f, "move.zip")
        print(result.url)
    """

    def __init__(
        self,
        url: str,
        user_agent: str,
        expiry_hours: int = 1,
        timeout: float = 300.0
    ):
        """
        Initialize the uploader.

        Args:
            url: Upload endpoint
            user_agent: User-Agent header (the host rejects generic agents)
            expiry_hours: Requested link lifetime, sent as the ``expires`` field
            timeout: Request timeout in seconds
        """
        self.url = url
        self.expiry_hours = expiry_hours
        self.client = httpx.AsyncClient(
            headers={"User-Agent": user_agent},
            timeout=timeout
        )

    async def upload(self, file: BinaryIO, filename: str) -> UploadResult:
        """
        Upload a file and return the download link.

        The file is streamed from its start, so archives never
        need to be loaded into memory. The host renames uploaded files, so
        the original filename is appended to the returned URL to keep the
        download's name.

        Args:
            file: Seekable binary file object
            filename: Name the download should have

        Returns:
            UploadResult: Link and its lifetime

        Raises:
            UploadError: On network failure, non-2xx status, or a response
                body that is not a URL
        """
        size = file.seek(0, io.SEEK_END)
        file.seek(0)
        logger.info(f"[UPLOAD] Uploading {filename} ({size} bytes) to {self.url}")

        try:
            response = await self.client.post(
                self.url,
                data={"expires": str(self.expiry_hours)},
                files={"file": (filename, file, "application/zip")}
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"[UPLOAD] Host returned HTTP {e.response.status_code}: {e.response.text.strip()}"
            )
            raise UploadError(
                f"Failed to create download link (file host returned HTTP {e.response.status_code})"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"[UPLOAD] Request to {self.url} failed: {e}")
            raise UploadError("Failed to create download link (file host unreachable)") from e

        body = response.text.strip()
        if not _is_download_url(body):
            logger.error(f"[UPLOAD] Unexpected response body:\n{body}")
            raise UploadError("Failed to create download link")

        url = f"{body.rstrip('/')}/{filename}"
        logger.info(f"[UPLOAD] Uploaded {filename}: {url}")
        return UploadResult(url=url, expires_in_hours=self.expiry_hours)

    async def aclose(self):
        """Close the underlying HTTP client."""
        await self.client.aclose()


def _is_download_url(text: str) -> bool:
    """Check that the host answered with a single absolute http(s) URL."""
    if not text or any(c.isspace() for c in text):
        return False
    try:
        url = httpx.URL(text)
    except httpx.InvalidURL:
        return False
    return url.scheme in ("http", "https") and bool(url.host)
