"""Pytest 配置和 fixtures。"""

from __future__ import annotations

import os
import sys
from collections import Counter
from pathlib import Path
from typing import Any
from unittest import mock

import pytest

# 项目根目录
PROJECT_ROOT = Path(__file__).parent.parent

# 添加 src 目录到 Python 路径
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from najie_ai_draw.config import reload_settings  # noqa: E402
from najie_ai_draw.draw import HunyuanProvider, ProviderConfig, ProviderRegistry  # noqa: E402


class FakeVendorClient:
    """模拟腾讯云 SDK 客户端（call_json 接口）。

    responses: action -> 响应 dict / 响应列表（依次返回）/ 异常
    """

    def __init__(self, kind: str, responses: dict[str, Any]) -> None:
        self.kind = kind
        self.responses = responses
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def call_json(self, action: str, params: dict[str, Any]) -> dict[str, Any]:
        self.calls.append((action, dict(params)))
        resp = self.responses[action]
        if isinstance(resp, list):
            resp = resp.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return {"Response": resp}


class FakeClientFactory:
    """记录客户端创建次数的工厂。"""

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses = responses if responses is not None else {}
        self.clients: dict[str, FakeVendorClient] = {}
        self.build_count: Counter[str] = Counter()
        self.configs: list[ProviderConfig] = []

    def __call__(self, kind: str, config: ProviderConfig) -> FakeVendorClient:
        self.build_count[kind] += 1
        self.configs.append(config)
        client = FakeVendorClient(kind, self.responses)
        self.clients[kind] = client
        return client

    def calls(self, kind: str) -> list[tuple[str, dict[str, Any]]]:
        client = self.clients.get(kind)
        return client.calls if client else []

    @property
    def total_calls(self) -> int:
        return sum(len(c.calls) for c in self.clients.values())


def make_registry(factory: FakeClientFactory) -> ProviderRegistry:
    """注册一个使用假客户端的 hunyuan 提供商。"""
    registry = ProviderRegistry()
    registry.register(
        "hunyuan",
        HunyuanProvider,
        lambda config: HunyuanProvider(
            config,
            client_factory=factory,
            poll_interval=0,
            poll_timeout=5,
        ),
    )
    return registry


@pytest.fixture
def provider_config() -> ProviderConfig:
    return ProviderConfig(secret_id="X", secret_key="Y", region="ap-guangzhou")


@pytest.fixture
def config_dict() -> dict[str, str]:
    return {"secretId": "X", "secretKey": "Y", "region": "ap-guangzhou"}


@pytest.fixture
def fake_factory() -> FakeClientFactory:
    return FakeClientFactory()


@pytest.fixture
def fake_registry(fake_factory: FakeClientFactory) -> ProviderRegistry:
    return make_registry(fake_factory)


@pytest.fixture
def aidraw_home(tmp_path: Path):
    """将 AIDRAW_HOME 指向临时目录。"""
    home = tmp_path / "aidraw-home"
    with mock.patch.dict(os.environ, {"AIDRAW_HOME": str(home)}, clear=False):
        reload_settings()
        yield home
    reload_settings()
