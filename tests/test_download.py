"""图片落盘测试。"""

from __future__ import annotations

import base64
from pathlib import Path

import aiohttp
import pytest

from najie_ai_draw.download import ImageSaveError, decode_base64_image, save_image

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


class FakeResponse:
    def __init__(self, status: int, body: bytes) -> None:
        self.status = status
        self._body = body

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc) -> None:
        return None

    async def read(self) -> bytes:
        return self._body


class FakeSession:
    """模拟 aiohttp.ClientSession.get。"""

    def __init__(self, status: int = 200, body: bytes = PNG_BYTES, error: Exception | None = None) -> None:
        self.status = status
        self.body = body
        self.error = error
        self.urls: list[str] = []

    def get(self, url: str) -> FakeResponse:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return FakeResponse(self.status, self.body)


class TestDecodeBase64:
    """base64 解码测试。"""

    def test_plain(self):
        assert decode_base64_image(base64.b64encode(PNG_BYTES).decode()) == PNG_BYTES

    def test_data_uri_prefix(self):
        data = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()
        assert decode_base64_image(data) == PNG_BYTES

    def test_invalid(self):
        with pytest.raises(ImageSaveError, match="Invalid base64"):
            decode_base64_image("not base64!!")


class TestSaveImage:
    """save_image 测试。"""

    @pytest.mark.asyncio
    async def test_save_base64(self, tmp_path: Path):
        output = tmp_path / "out" / "cat.png"

        saved = await save_image(output, image_base64=base64.b64encode(PNG_BYTES).decode())

        assert saved == str(output.resolve())
        assert output.read_bytes() == PNG_BYTES

    @pytest.mark.asyncio
    async def test_save_url(self, tmp_path: Path):
        session = FakeSession()
        output = tmp_path / "cat.png"

        await save_image(output, image_url="https://x/a.png", session=session)

        assert session.urls == ["https://x/a.png"]
        assert output.read_bytes() == PNG_BYTES

    @pytest.mark.asyncio
    async def test_url_preferred_over_base64(self, tmp_path: Path):
        session = FakeSession(body=b"from-url")
        output = tmp_path / "cat.png"

        await save_image(
            output,
            image_url="https://x/a.png",
            image_base64=base64.b64encode(b"from-base64").decode(),
            session=session,
        )

        assert output.read_bytes() == b"from-url"

    @pytest.mark.asyncio
    async def test_http_error(self, tmp_path: Path):
        output = tmp_path / "cat.png"

        with pytest.raises(ImageSaveError, match="HTTP 404"):
            await save_image(output, image_url="https://x/a.png", session=FakeSession(status=404))
        assert not output.exists()

    @pytest.mark.asyncio
    async def test_network_error(self, tmp_path: Path):
        session = FakeSession(error=aiohttp.ClientConnectionError("refused"))

        with pytest.raises(ImageSaveError, match="Network error"):
            await save_image(tmp_path / "cat.png", image_url="https://x/a.png", session=session)

    @pytest.mark.asyncio
    async def test_no_data(self, tmp_path: Path):
        with pytest.raises(ImageSaveError, match="No image data"):
            await save_image(tmp_path / "cat.png")
