"""Draw 模块。

najie-ai-draw draw v0.1.0

多厂商文生图统一接口：提供商注册表 + 厂商适配器。
"""

from __future__ import annotations

from .api import (
    generate_image,
    get_supported_models,
    get_supported_providers,
    query_image_job,
    submit_image_job,
)
from .catalog import MODEL_CATALOG, calculate_resolution, check_catalog
from .errors import (
    DrawError,
    MissingConfigError,
    MissingDependencyError,
    UnknownProviderError,
    UnsupportedCapabilityError,
    UnsupportedSubModelError,
    VendorCallError,
)
from .providers import AsyncJobProvider, HunyuanProvider, ImageProvider
from .registry import DEFAULT_REGISTRY, ProviderId, ProviderRegistry
from .types import (
    AsyncJob,
    GenerateRequest,
    GenerateResponse,
    GenerateResult,
    JobStatus,
    ModelInfo,
    ProviderConfig,
    ProviderInfo,
    QueryResponse,
    SubmitResponse,
)

__all__ = [
    # Facade
    "generate_image",
    "submit_image_job",
    "query_image_job",
    "get_supported_providers",
    "get_supported_models",
    # Registry
    "ProviderId",
    "ProviderRegistry",
    "DEFAULT_REGISTRY",
    # Providers
    "ImageProvider",
    "AsyncJobProvider",
    "HunyuanProvider",
    # Catalog
    "MODEL_CATALOG",
    "calculate_resolution",
    "check_catalog",
    # Errors
    "DrawError",
    "MissingConfigError",
    "UnknownProviderError",
    "UnsupportedSubModelError",
    "UnsupportedCapabilityError",
    "VendorCallError",
    "MissingDependencyError",
    # Types
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
]
