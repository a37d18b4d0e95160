"""Draw 模块类型定义。

najie-ai-draw draw v0.1.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping

__all__ = [
    "JobState",
    "ProviderConfig",
    "GenerateRequest",
    "GenerateResult",
    "AsyncJob",
    "JobStatus",
    "ProviderInfo",
    "ModelInfo",
    "GenerateResponse",
    "SubmitResponse",
    "QueryResponse",
    "JOB_STATUS_MAP",
    "map_job_status",
    "classify_image",
]

DEFAULT_RESOLUTION = "1024:1024"
DEFAULT_RSP_IMG_TYPE = "url"

JobState = Literal["processing", "success", "failed", "unknown"]

# JobStatusCode -> 任务状态
JOB_STATUS_MAP: dict[int, JobState] = {
    1: "processing",
    2: "success",
    -1: "failed",
}


def map_job_status(code: Any) -> JobState:
    """将厂商 JobStatusCode 映射为任务状态。

    厂商可能返回 int 或数字字符串，无法识别的值返回 "unknown"。
    """
    try:
        return JOB_STATUS_MAP.get(int(code), "unknown")
    except (TypeError, ValueError):
        return "unknown"


def classify_image(result_image: str | None) -> tuple[str | None, str | None]:
    """区分 ResultImage 是 URL 还是 base64。

    Returns:
        (image_url, image_base64)，最多一个非空
    """
    if not result_image:
        return None, None
    if result_image.startswith("http"):
        return result_image, None
    return None, result_image


@dataclass
class ProviderConfig:
    """提供商凭据，由调用方持有。

    Attributes:
        secret_id: 腾讯云 SecretId
        secret_key: 腾讯云 SecretKey
        region: 地域（如 ap-guangzhou）
    """
    secret_id: str
    secret_key: str
    region: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProviderConfig":
        """从 dict 构建，兼容 camelCase 和 snake_case 键名。"""
        return cls(
            secret_id=data.get("secretId") or data.get("secret_id") or "",
            secret_key=data.get("secretKey") or data.get("secret_key") or "",
            region=data.get("region") or "",
        )

    def masked_id(self) -> str:
        """脱敏 SecretId，只显示前8位。"""
        if not self.secret_id:
            return ""
        return f"{self.secret_id[:8]}***"


@dataclass
class GenerateRequest:
    """同步生图请求。

    Attributes:
        sub_model: 子模型（hunyuan-light/hunyuan-lite/hunyuan-rapid/hunyuan-async）
        prompt: 提示词
        resolution: 分辨率 "W:H"
        seed: 随机种子
        style: 风格
        logo_add: 是否添加 Logo（0/1）
        rsp_img_type: 返回类型（url/base64）
    """
    sub_model: str
    prompt: str
    resolution: str | None = None
    seed: int | None = None
    style: str | None = None
    logo_add: int | None = None
    rsp_img_type: str | None = None


@dataclass
class GenerateResult:
    image_url: str | None
    image_base64: str | None
    request_id: str = ""


@dataclass
class AsyncJob:
    job_id: str
    request_id: str = ""


@dataclass
class JobStatus:
    status: JobState
    image_url: str | None = None
    request_id: str = ""


@dataclass
class ProviderInfo:
    id: str
    name: str
    supports_async: bool

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "supportsAsync": self.supports_async}


@dataclass(frozen=True)
class ModelInfo:
    id: str
    name: str
    provider: str
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "provider": self.provider,
            "description": self.description,
        }


@dataclass
class GenerateResponse:
    """generate_image 的结果信封。

    Attributes:
        success: 是否成功
        provider: 提供商 ID
        image_url: 图片 URL
        image_base64: base64 图片数据
        request_id: 厂商 RequestId
        error: 错误信息
    """
    success: bool
    provider: str = ""
    image_url: str | None = None
    image_base64: str | None = None
    request_id: str = ""
    error: str = ""

    def to_dict(self) -> dict[str, Any]:
        if not self.success:
            return {"success": False, "provider": self.provider, "error": self.error}
        return {
            "success": True,
            "provider": self.provider,
            "imageUrl": self.image_url,
            "imageBase64": self.image_base64,
            "requestId": self.request_id,
        }


@dataclass
class SubmitResponse:
    """submit_image_job 的结果信封。"""
    success: bool
    provider: str = ""
    job_id: str = ""
    request_id: str = ""
    error: str = ""

    def to_dict(self) -> dict[str, Any]:
        if not self.success:
            return {"success": False, "provider": self.provider, "error": self.error}
        return {
            "success": True,
            "provider": self.provider,
            "jobId": self.job_id,
            "requestId": self.request_id,
        }


@dataclass
class QueryResponse:
    """query_image_job 的结果信封。"""
    success: bool
    provider: str = ""
    job_id: str = ""
    status: JobState | None = None
    image_url: str | None = None
    request_id: str = ""
    error: str = ""

    def to_dict(self) -> dict[str, Any]:
        if not self.success:
            return {
                "success": False,
                "provider": self.provider,
                "jobId": self.job_id,
                "error": self.error,
            }
        return {
            "success": True,
            "provider": self.provider,
            "jobId": self.job_id,
            "status": self.status,
            "imageUrl": self.image_url,
            "requestId": self.request_id,
        }
