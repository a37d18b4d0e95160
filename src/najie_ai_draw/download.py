"""生成图片落盘。

支持 URL（aiohttp 下载）和 base64（可带 data URI 前缀）两种来源。
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from pathlib import Path

import aiohttp

__all__ = ["ImageSaveError", "save_image", "decode_base64_image"]

logger = logging.getLogger(__name__)

_DATA_URI_PREFIX = re.compile(r"^data:image/\w+;base64,")

DOWNLOAD_TIMEOUT = aiohttp.ClientTimeout(total=60)


class ImageSaveError(Exception):
    """图片保存失败。"""
    pass


def decode_base64_image(data: str) -> bytes:
    """解码 base64 图片数据。

    Raises:
        ImageSaveError: 数据不是合法 base64
    """
    try:
        return base64.b64decode(_DATA_URI_PREFIX.sub("", data), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageSaveError(f"Invalid base64 image data: {e}") from e


async def _download(url: str, session: aiohttp.ClientSession) -> bytes:
    async with session.get(url) as resp:
        if resp.status != 200:
            raise ImageSaveError(f"Download failed with HTTP {resp.status}: {url}")
        return await resp.read()


async def save_image(
    output: str | Path,
    image_url: str | None = None,
    image_base64: str | None = None,
    session: aiohttp.ClientSession | None = None,
) -> str:
    """保存图片到文件。

    Args:
        output: 输出文件路径
        image_url: 图片 URL
        image_base64: base64 图片数据（image_url 为空时使用）
        session: HTTP 会话（可选，默认临时创建）

    Returns:
        保存后的绝对路径

    Raises:
        ImageSaveError: 没有图片数据、下载失败或写入失败
    """
    if image_url:
        try:
            if session is not None:
                data = await _download(image_url, session)
            else:
                async with aiohttp.ClientSession(timeout=DOWNLOAD_TIMEOUT) as own_session:
                    data = await _download(image_url, own_session)
        except aiohttp.ClientError as e:
            raise ImageSaveError(f"Network error while downloading {image_url}: {e}") from e
    elif image_base64:
        data = decode_base64_image(image_base64)
    else:
        raise ImageSaveError("No image data to save")

    path = Path(output).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        raise ImageSaveError(f"Failed to write {path}: {e}") from e

    logger.info(f"Saved image ({len(data)} bytes) to {path}")
    return str(path.resolve())
