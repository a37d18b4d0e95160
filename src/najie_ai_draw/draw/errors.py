"""Draw 模块异常类。

najie-ai-draw draw v0.1.0
"""

from __future__ import annotations

__all__ = [
    "DrawError",
    "MissingConfigError",
    "UnknownProviderError",
    "UnsupportedSubModelError",
    "UnsupportedCapabilityError",
    "VendorCallError",
    "MissingDependencyError",
]


class DrawError(Exception):
    """Draw 模块基础异常。"""
    pass


class MissingConfigError(DrawError):
    """缺少提供商配置（config）。"""

    def __init__(self, message: str = "Missing provider config") -> None:
        super().__init__(message)


class UnknownProviderError(DrawError):
    """未注册的生图提供商。

    Attributes:
        provider: 请求的提供商 ID
        supported: 已注册的提供商 ID 列表
    """

    def __init__(self, provider: str, supported: list[str]) -> None:
        self.provider = provider
        self.supported = supported
        super().__init__(
            f"Unsupported provider: {provider}. Supported: {', '.join(supported)}"
        )


class UnsupportedSubModelError(DrawError):
    """提供商不支持的子模型。"""

    def __init__(self, sub_model: str, supported: list[str]) -> None:
        self.sub_model = sub_model
        self.supported = supported
        super().__init__(
            f"Unsupported sub-model: {sub_model}. Supported: {', '.join(supported)}"
        )


class UnsupportedCapabilityError(DrawError):
    """提供商未实现某项能力（如异步任务）。"""

    def __init__(self, provider: str, capability: str = "async jobs") -> None:
        self.provider = provider
        self.capability = capability
        super().__init__(f"{provider} does not support {capability}")


class VendorCallError(DrawError):
    """厂商 API 调用失败（网络、鉴权、配额等）。

    Attributes:
        message: 错误消息
        code: 厂商错误码（如 AuthFailure.SignatureFailure）
        request_id: 厂商返回的 RequestId
    """

    def __init__(self, message: str, code: str = "", request_id: str = "") -> None:
        self.message = message
        self.code = code
        self.request_id = request_id
        super().__init__(f"[{code}] {message}" if code else message)


class MissingDependencyError(DrawError):
    """厂商 SDK 未安装。"""
    pass
