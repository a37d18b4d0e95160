"""Provider 注册表。

najie-ai-draw draw v0.1.0

提供商 ID -> 适配器类型/工厂。新增厂商只需实现 ImageProvider
（需要异步任务时实现 AsyncJobProvider）并注册。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .errors import UnknownProviderError
from .providers import HunyuanProvider, ImageProvider, supports_async
from .types import ProviderConfig, ProviderInfo

__all__ = [
    "ProviderId",
    "ProviderEntry",
    "ProviderRegistry",
    "DEFAULT_REGISTRY",
    "create_default_registry",
]

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[ProviderConfig], ImageProvider]


class ProviderId(str, Enum):
    """内置提供商。"""

    HUNYUAN = "hunyuan"


def _normalize_id(provider_id: ProviderId | str) -> str:
    if isinstance(provider_id, ProviderId):
        return provider_id.value
    return provider_id


@dataclass(frozen=True)
class ProviderEntry:
    """注册表条目。

    Attributes:
        id: 提供商 ID
        provider_type: 适配器类型（用于能力判断）
        factory: 实例工厂
    """
    id: str
    provider_type: type[ImageProvider]
    factory: ProviderFactory

    @property
    def name(self) -> str:
        return self.provider_type.display_name or self.id

    @property
    def supports_async(self) -> bool:
        return supports_async(self.provider_type)


class ProviderRegistry:
    """提供商注册表。"""

    def __init__(self) -> None:
        self._entries: dict[str, ProviderEntry] = {}

    def register(
        self,
        provider_id: ProviderId | str,
        provider_type: type[ImageProvider],
        factory: ProviderFactory | None = None,
    ) -> None:
        """注册提供商。

        Args:
            provider_id: 提供商 ID
            provider_type: 适配器类型
            factory: 实例工厂（可选，默认直接用 provider_type(config) 构造）
        """
        key = _normalize_id(provider_id)
        self._entries[key] = ProviderEntry(key, provider_type, factory or provider_type)
        logger.debug(f"Registered provider {key} ({provider_type.__name__})")

    def ids(self) -> list[str]:
        return list(self._entries)

    def entries(self) -> list[ProviderEntry]:
        return list(self._entries.values())

    def get(self, provider_id: ProviderId | str) -> ProviderEntry:
        """查找提供商。

        Raises:
            UnknownProviderError: 未注册
        """
        entry = self._entries.get(_normalize_id(provider_id))
        if entry is None:
            raise UnknownProviderError(str(_normalize_id(provider_id)), self.ids())
        return entry

    def create(self, provider_id: ProviderId | str, config: ProviderConfig) -> ImageProvider:
        """创建提供商实例。"""
        return self.get(provider_id).factory(config)

    def describe(self) -> list[ProviderInfo]:
        return [
            ProviderInfo(id=entry.id, name=entry.name, supports_async=entry.supports_async)
            for entry in self._entries.values()
        ]


def create_default_registry() -> ProviderRegistry:
    """创建包含内置提供商的注册表。"""
    registry = ProviderRegistry()
    registry.register(ProviderId.HUNYUAN, HunyuanProvider)
    return registry


# 默认注册表
DEFAULT_REGISTRY = create_default_registry()
