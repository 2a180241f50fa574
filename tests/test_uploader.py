"""Unit tests for Uploader."""
import io

import pytest
from unittest.mock import AsyncMock, patch
import httpx

from bot.exceptions import UploadError
from bot.uploader import Uploader, UploadResult

UPLOAD_URL = "https://0x0.st"


@pytest.fixture
def uploader():
    """Fixture for Uploader instance."""
    return Uploader(UPLOAD_URL, user_agent="TestBot/1.0", expiry_hours=1, timeout=5.0)


def _response(status_code: int, text: str) -> httpx.Response:
    return httpx.Response(status_code, text=text, request=httpx.Request("POST", UPLOAD_URL))


class TestUploader:
    """Tests for Uploader.upload."""

    @pytest.mark.asyncio
    async def test_upload_success(self, uploader):
        """Test that the returned link keeps the archive name."""
        with patch.object(uploader.client, 'post', new_callable=AsyncMock) as mock_post:
            mock_post.return_value = _response(200, "https://0x0.st/AbCd.zip\n")

            archive = io.BytesIO(b"zipbytes")
            archive.seek(3)
            result = await uploader.upload(archive, "foo.zip")

            assert result == UploadResult(url="https://0x0.st/AbCd.zip/foo.zip", expires_in_hours=1)
            assert archive.tell() == 0
            mock_post.assert_called_once_with(
                UPLOAD_URL,
                data={"expires": "1"},
                files={"file": ("foo.zip", archive, "application/zip")}
            )

    @pytest.mark.asyncio
    async def test_upload_http_error_status(self, uploader):
        """Test that a non-2xx status raises UploadError."""
        with patch.object(uploader.client, 'post', new_callable=AsyncMock) as mock_post:
            mock_post.return_value = _response(503, "Service Unavailable")

            with pytest.raises(UploadError, match="HTTP 503"):
                await uploader.upload(io.BytesIO(b"zipbytes"), "foo.zip")

    @pytest.mark.asyncio
    async def test_upload_network_failure(self, uploader):
        """Test that connection errors raise UploadError."""
        with patch.object(uploader.client, 'post', new_callable=AsyncMock) as mock_post:
            mock_post.side_effect = httpx.ConnectError("Connection refused")

            with pytest.raises(UploadError, match="unreachable"):
                await uploader.upload(io.BytesIO(b"zipbytes"), "foo.zip")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", ["", "Segmentation fault", "ftp://0x0.st/x", "not a url at all"])
    async def test_upload_malformed_body(self, uploader, body):
        """Test that a success status without a URL body raises UploadError."""
        with patch.object(uploader.client, 'post', new_callable=AsyncMock) as mock_post:
            mock_post.return_value = _response(200, body)

            with pytest.raises(UploadError, match="Failed to create download link"):
                await uploader.upload(io.BytesIO(b"zipbytes"), "foo.zip")

    @pytest.mark.asyncio
    async def test_user_agent_header(self, uploader):
        """Test that the client identifies itself to the host."""
        assert uploader.client.headers["User-Agent"] == "TestBot/1.0"
        await uploader.aclose()
        assert uploader.client.is_closed

    @pytest.mark.asyncio
    async def test_upload_streams_file_as_multipart(self, uploader):
        """Test the multipart body built from a file object."""
        received = {}

        async def handler(request: httpx.Request) -> httpx.Response:
            received["body"] = await request.aread()
            received["content_type"] = request.headers["Content-Type"]
            return httpx.Response(200, text="https://0x0.st/Xy.zip")

        await uploader.aclose()
        uploader.client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

        result = await uploader.upload(io.BytesIO(b"zipbytes"), "foo.zip")

        assert result.url == "https://0x0.st/Xy.zip/foo.zip"
        assert received["content_type"].startswith("multipart/form-data")
        assert b'name="expires"' in received["body"]
        assert b'name="file"; filename="foo.zip"' in received["body"]
        assert b"zipbytes" in received["body"]
        await uploader.aclose()
