"""腾讯混元生图 Provider。

najie-ai-draw draw/providers v0.1.0

混元的文生图能力分布在两套 API 上：
1. hunyuan (v20230901): TextToImageLite（轻量版）、Submit/QueryHunyuanImageJob（异步版）
2. aiart (v20221229): TextToImageLite（极速版）、TextToImageRapid（精简版）

两套接口接受的参数略有不同，由 SUB_MODEL_ROUTES 决定路由和参数取舍。
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Literal

import anyio
import anyio.to_thread

from ...config import get_settings
from ..errors import DrawError, MissingDependencyError, UnsupportedSubModelError, VendorCallError
from ..types import (
    DEFAULT_RESOLUTION,
    DEFAULT_RSP_IMG_TYPE,
    AsyncJob,
    GenerateRequest,
    GenerateResult,
    JobStatus,
    ProviderConfig,
    classify_image,
    map_job_status,
)
from .base import AsyncJobProvider

__all__ = [
    "HunyuanProvider",
    "SubModelRoute",
    "SUB_MODEL_ROUTES",
    "ASYNC_SUB_MODEL",
    "build_sdk_client",
]

logger = logging.getLogger(__name__)

ClientKind = Literal["hunyuan", "aiart"]
ClientFactory = Callable[[ClientKind, ProviderConfig], Any]

CLIENT_ENDPOINTS: dict[str, str] = {
    "hunyuan": "hunyuan.tencentcloudapi.com",
    "aiart": "aiart.tencentcloudapi.com",
}

# 异步任务默认参数
ASYNC_DEFAULT_SEED = 0
ASYNC_DEFAULT_STYLE = "riman"
ASYNC_DEFAULT_LOGO_ADD = 0


@dataclass(frozen=True)
class SubModelRoute:
    """子模型路由。

    Attributes:
        client: 使用的客户端
        action: 远程方法名
        accepts_seed: 是否发送 Seed
        accepts_style: 是否发送 Style
    """
    client: ClientKind
    action: str
    accepts_seed: bool
    accepts_style: bool


ASYNC_SUB_MODEL = "hunyuan-async"

SUB_MODEL_ROUTES: dict[str, SubModelRoute] = {
    "hunyuan-light": SubModelRoute("hunyuan", "TextToImageLite", accepts_seed=False, accepts_style=True),
    "hunyuan-lite": SubModelRoute("aiart", "TextToImageLite", accepts_seed=True, accepts_style=False),
    "hunyuan-rapid": SubModelRoute("aiart", "TextToImageRapid", accepts_seed=True, accepts_style=True),
    ASYNC_SUB_MODEL: SubModelRoute("hunyuan", "SubmitHunyuanImageJob", accepts_seed=True, accepts_style=True),
}


def build_sdk_client(kind: ClientKind, config: ProviderConfig) -> Any:
    """使用 tencentcloud-sdk-python 创建客户端。

    Raises:
        MissingDependencyError: SDK 未安装
    """
    try:
        from tencentcloud.common import credential
        from tencentcloud.common.profile.client_profile import ClientProfile
        from tencentcloud.common.profile.http_profile import HttpProfile

        if kind == "hunyuan":
            from tencentcloud.hunyuan.v20230901.hunyuan_client import HunyuanClient as client_cls
        else:
            from tencentcloud.aiart.v20221229.aiart_client import AiartClient as client_cls
    except ImportError as e:
        raise MissingDependencyError(
            "tencentcloud-sdk-python is not installed. Run: pip install tencentcloud-sdk-python"
        ) from e

    cred = credential.Credential(config.secret_id, config.secret_key)
    profile = ClientProfile(httpProfile=HttpProfile(endpoint=CLIENT_ENDPOINTS[kind]))
    return client_cls(cred, config.region or "", profile)


def _first_image(value: Any) -> str | None:
    """ResultImage 可能是字符串或字符串列表。"""
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value or None


class HunyuanProvider(AsyncJobProvider):
    """腾讯混元 Provider。

    客户端按需创建，每个实例每种客户端只创建一次。

    Example:
        provider = HunyuanProvider(ProviderConfig("id", "key", "ap-guangzhou"))
        result = await provider.generate(GenerateRequest(
            sub_model="hunyuan-rapid",
            prompt="a cat",
        ))
    """

    display_name = "腾讯混元"
    sub_models = tuple(SUB_MODEL_ROUTES)

    def __init__(
        self,
        config: ProviderConfig,
        client_factory: ClientFactory | None = None,
        poll_interval: float | None = None,
        poll_timeout: float | None = None,
    ) -> None:
        """初始化 Provider。

        Args:
            config: 凭据
            client_factory: 客户端工厂（可选，默认使用腾讯云 SDK）
            poll_interval: 异步版轮询间隔（秒，默认读取运行配置）
            poll_timeout: 异步版轮询超时（秒，默认读取运行配置）
        """
        super().__init__(config)
        settings = get_settings()
        self._client_factory = client_factory or build_sdk_client
        self._poll_interval = settings.poll_interval if poll_interval is None else poll_interval
        self._poll_timeout = settings.poll_timeout if poll_timeout is None else poll_timeout
        self._clients: dict[str, Any] = {}

    def _get_client(self, kind: ClientKind) -> Any:
        client = self._clients.get(kind)
        if client is None:
            logger.debug(
                f"Creating {kind} client (secretId={self.config.masked_id()}, region={self.config.region or '-'})"
            )
            client = self._client_factory(kind, self.config)
            self._clients[kind] = client
        return client

    async def _call(self, kind: ClientKind, action: str, params: dict[str, Any]) -> dict[str, Any]:
        """调用厂商 API，返回 Response 内容。"""
        client = self._get_client(kind)
        logger.debug(f"Calling {kind}.{action} with keys={sorted(params)}")
        try:
            resp = await anyio.to_thread.run_sync(client.call_json, action, params)
        except DrawError:
            raise
        except Exception as e:
            # TencentCloudSDKException 携带 code / message / requestId
            raise VendorCallError(
                getattr(e, "message", None) or str(e),
                code=getattr(e, "code", None) or "",
                request_id=getattr(e, "requestId", None) or "",
            ) from e
        return resp.get("Response", resp) if isinstance(resp, dict) else {}

    def _route(self, sub_model: str) -> SubModelRoute:
        route = SUB_MODEL_ROUTES.get(sub_model)
        if route is None:
            raise UnsupportedSubModelError(sub_model, list(SUB_MODEL_ROUTES))
        return route

    @staticmethod
    def build_request_params(route: SubModelRoute, request: GenerateRequest) -> dict[str, Any]:
        """按路由构建同步生图请求参数。"""
        params: dict[str, Any] = {
            "Prompt": request.prompt,
            "Resolution": request.resolution or DEFAULT_RESOLUTION,
            "RspImgType": request.rsp_img_type or DEFAULT_RSP_IMG_TYPE,
        }
        if request.seed is not None and route.accepts_seed:
            params["Seed"] = request.seed
        if request.style and route.accepts_style:
            params["Style"] = request.style
        if request.logo_add is not None:
            params["LogoAdd"] = request.logo_add
        return params

    @staticmethod
    def build_job_params(request: GenerateRequest) -> dict[str, Any]:
        """构建异步任务请求参数（均带默认值）。"""
        return {
            "Prompt": request.prompt,
            "Resolution": request.resolution or DEFAULT_RESOLUTION,
            "Seed": request.seed or ASYNC_DEFAULT_SEED,
            "Style": request.style or ASYNC_DEFAULT_STYLE,
            "LogoAdd": request.logo_add or ASYNC_DEFAULT_LOGO_ADD,
        }

    async def generate(self, request: GenerateRequest) -> GenerateResult:
        """同步生成图片。

        - hunyuan-light: hunyuan.TextToImageLite
        - hunyuan-lite: aiart.TextToImageLite
        - hunyuan-rapid: aiart.TextToImageRapid
        - hunyuan-async: 提交任务并轮询直到结束
        """
        route = self._route(request.sub_model)

        if request.sub_model == ASYNC_SUB_MODEL:
            return await self._generate_via_job(request)

        resp = await self._call(route.client, route.action, self.build_request_params(route, request))
        image_url, image_base64 = classify_image(_first_image(resp.get("ResultImage")))
        return GenerateResult(
            image_url=image_url,
            image_base64=image_base64,
            request_id=resp.get("RequestId", ""),
        )

    async def _generate_via_job(self, request: GenerateRequest) -> GenerateResult:
        job = await self.submit(request)
        status = await self._wait_for_job(job.job_id)
        image_url, image_base64 = classify_image(status.image_url)
        return GenerateResult(
            image_url=image_url,
            image_base64=image_base64,
            request_id=status.request_id,
        )

    async def _wait_for_job(self, job_id: str) -> JobStatus:
        """轮询任务直到成功、失败或超时。"""
        deadline = time.monotonic() + self._poll_timeout
        while True:
            status = await self.query(job_id)
            if status.status == "success":
                return status
            if status.status == "failed":
                raise VendorCallError(f"Job {job_id} failed", request_id=status.request_id)
            if time.monotonic() >= deadline:
                raise VendorCallError(
                    f"Job {job_id} timed out after {self._poll_timeout:g}s (last status: {status.status})",
                    request_id=status.request_id,
                )
            logger.debug(f"Job {job_id} is {status.status}, polling again in {self._poll_interval}s")
            await anyio.sleep(self._poll_interval)

    async def submit(self, request: GenerateRequest) -> AsyncJob:
        """提交异步任务（始终使用 hunyuan 客户端）。"""
        resp = await self._call("hunyuan", "SubmitHunyuanImageJob", self.build_job_params(request))
        job = AsyncJob(job_id=resp.get("JobId", ""), request_id=resp.get("RequestId", ""))
        logger.info(f"Submitted hunyuan job {job.job_id}")
        return job

    async def query(self, job_id: str) -> JobStatus:
        """查询异步任务结果。

        JobStatusCode: 1-处理中, 2-成功, -1-失败，其他为 unknown。
        """
        resp = await self._call("hunyuan", "QueryHunyuanImageJob", {"JobId": job_id})
        return JobStatus(
            status=map_job_status(resp.get("JobStatusCode")),
            image_url=_first_image(resp.get("ResultImage")),
            request_id=resp.get("RequestId", ""),
        )
