"""Draw providers 模块。

najie-ai-draw draw/providers v0.1.0

各厂商生图适配器。
"""

from __future__ import annotations

from .base import AsyncJobProvider, ImageProvider, supports_async
from .hunyuan import HunyuanProvider

__all__ = [
    "ImageProvider",
    "AsyncJobProvider",
    "supports_async",
    "HunyuanProvider",
]
