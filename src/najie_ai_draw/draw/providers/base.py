"""Provider 能力接口。

najie-ai-draw draw/providers v0.1.0

所有厂商适配器都实现 ImageProvider（同步生图）；支持异步任务的适配器
额外继承 AsyncJobProvider（submit/query）。能力判断基于类型，而非探测方法。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from ..types import AsyncJob, GenerateRequest, GenerateResult, JobStatus, ProviderConfig

__all__ = ["ImageProvider", "AsyncJobProvider", "supports_async"]


class ImageProvider(ABC):
    """生图提供商基类。

    子类需要声明:
        display_name: 展示名称
        sub_models: 支持的子模型 ID（与目录保持一致）
    """

    display_name: ClassVar[str] = ""
    sub_models: ClassVar[tuple[str, ...]] = ()

    def __init__(self, config: ProviderConfig) -> None:
        self.config = config

    @abstractmethod
    async def generate(self, request: GenerateRequest) -> GenerateResult:
        """同步生成图片。"""


class AsyncJobProvider(ImageProvider):
    """支持异步任务模式的提供商。"""

    @abstractmethod
    async def submit(self, request: GenerateRequest) -> AsyncJob:
        """提交异步生图任务。"""

    @abstractmethod
    async def query(self, job_id: str) -> JobStatus:
        """查询异步任务结果。"""


def supports_async(provider_type: type[ImageProvider]) -> bool:
    """提供商类型是否支持异步任务。"""
    return issubclass(provider_type, AsyncJobProvider)
