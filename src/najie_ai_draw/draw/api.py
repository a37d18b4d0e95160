"""统一生图接口。

najie-ai-draw draw v0.1.0

generate_image / submit_image_job / query_image_job 根据 provider 从注册表
解析适配器并调用。所有失败都被转换为 success=False 的响应，不向调用方抛异常。

Example:
    response = await generate_image(
        provider="hunyuan",
        config={"secretId": "...", "secretKey": "...", "region": "ap-guangzhou"},
        sub_model="hunyuan-rapid",
        prompt="a cat",
    )
    if response.success:
        print(response.image_url)
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .catalog import MODEL_CATALOG
from .errors import DrawError, MissingConfigError, UnsupportedCapabilityError
from .providers import AsyncJobProvider, ImageProvider
from .registry import DEFAULT_REGISTRY, ProviderRegistry
from .types import (
    GenerateRequest,
    GenerateResponse,
    ModelInfo,
    ProviderConfig,
    ProviderInfo,
    QueryResponse,
    SubmitResponse,
)

__all__ = [
    "generate_image",
    "submit_image_job",
    "query_image_job",
    "get_supported_providers",
    "get_supported_models",
]

logger = logging.getLogger(__name__)

ConfigLike = ProviderConfig | Mapping[str, Any] | None


def _resolve_config(config: ConfigLike) -> ProviderConfig:
    if not config:
        raise MissingConfigError("Missing provider config")
    if isinstance(config, ProviderConfig):
        return config
    return ProviderConfig.from_mapping(config)


def _create_provider(
    provider: str,
    config: ConfigLike,
    registry: ProviderRegistry | None,
) -> ImageProvider:
    provider_config = _resolve_config(config)
    return (registry or DEFAULT_REGISTRY).create(provider, provider_config)


def _require_async(provider: str, instance: ImageProvider) -> AsyncJobProvider:
    if not isinstance(instance, AsyncJobProvider):
        raise UnsupportedCapabilityError(provider, "async jobs")
    return instance


def _describe_failure(operation: str, provider: str, error: Exception) -> str:
    if isinstance(error, DrawError):
        logger.warning(f"{operation} failed for provider={provider}: {error}")
    else:
        logger.exception(f"{operation} failed for provider={provider} with unexpected error")
    return str(error) or error.__class__.__name__


async def generate_image(
    provider: str,
    config: ConfigLike,
    sub_model: str,
    prompt: str,
    resolution: str | None = None,
    seed: int | None = None,
    style: str | None = None,
    logo_add: int | None = None,
    rsp_img_type: str | None = None,
    *,
    registry: ProviderRegistry | None = None,
) -> GenerateResponse:
    """同步生成图片。

    Args:
        provider: 提供商 ID（如 "hunyuan"）
        config: 凭据 {secretId, secretKey, region}，必需
        sub_model: 子模型（如 "hunyuan-rapid"）
        prompt: 提示词
        resolution: 分辨率 "W:H"
        seed: 随机种子
        style: 风格
        logo_add: 是否添加 Logo（0/1）
        rsp_img_type: 返回类型（url/base64）
        registry: 注册表（可选，默认内置注册表）

    Returns:
        GenerateResponse
    """
    try:
        instance = _create_provider(provider, config, registry)
        result = await instance.generate(GenerateRequest(
            sub_model=sub_model,
            prompt=prompt,
            resolution=resolution,
            seed=seed,
            style=style,
            logo_add=logo_add,
            rsp_img_type=rsp_img_type,
        ))
    except Exception as e:
        return GenerateResponse(
            success=False,
            provider=provider,
            error=_describe_failure("generate", provider, e),
        )

    logger.info(f"Generated image via {provider}/{sub_model} (request_id={result.request_id})")
    return GenerateResponse(
        success=True,
        provider=provider,
        image_url=result.image_url,
        image_base64=result.image_base64,
        request_id=result.request_id,
    )


async def submit_image_job(
    provider: str,
    config: ConfigLike,
    prompt: str,
    resolution: str | None = None,
    seed: int | None = None,
    style: str | None = None,
    logo_add: int | None = None,
    *,
    registry: ProviderRegistry | None = None,
) -> SubmitResponse:
    """提交异步生图任务。

    提供商未实现异步任务时返回失败，不发起网络请求。
    """
    try:
        instance = _require_async(provider, _create_provider(provider, config, registry))
        job = await instance.submit(GenerateRequest(
            sub_model="",
            prompt=prompt,
            resolution=resolution,
            seed=seed,
            style=style,
            logo_add=logo_add,
        ))
    except Exception as e:
        return SubmitResponse(
            success=False,
            provider=provider,
            error=_describe_failure("submit", provider, e),
        )

    return SubmitResponse(
        success=True,
        provider=provider,
        job_id=job.job_id,
        request_id=job.request_id,
    )


async def query_image_job(
    provider: str,
    job_id: str,
    config: ConfigLike,
    *,
    registry: ProviderRegistry | None = None,
) -> QueryResponse:
    """查询异步任务结果。"""
    try:
        instance = _require_async(provider, _create_provider(provider, config, registry))
        status = await instance.query(job_id)
    except Exception as e:
        return QueryResponse(
            success=False,
            provider=provider,
            job_id=job_id,
            error=_describe_failure("query", provider, e),
        )

    return QueryResponse(
        success=True,
        provider=provider,
        job_id=job_id,
        status=status.status,
        image_url=status.image_url,
        request_id=status.request_id,
    )


async def get_supported_providers(*, registry: ProviderRegistry | None = None) -> list[ProviderInfo]:
    """获取已注册的提供商列表。"""
    return (registry or DEFAULT_REGISTRY).describe()


async def get_supported_models() -> list[ModelInfo]:
    """获取子模型目录。"""
    return list(MODEL_CATALOG)
