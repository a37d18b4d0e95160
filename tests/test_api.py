"""统一接口（facade）测试。

测试覆盖：
- generate/submit/query 成功与失败信封
- 缺少配置、未知提供商、能力不支持
- 提供商与子模型目录
"""

from __future__ import annotations

import dataclasses

import pytest

from najie_ai_draw.draw import (
    GenerateRequest,
    GenerateResult,
    ImageProvider,
    ProviderConfig,
    ProviderRegistry,
    check_catalog,
    generate_image,
    get_supported_models,
    get_supported_providers,
    query_image_job,
    submit_image_job,
)

from conftest import FakeClientFactory, make_registry


class SyncOnlyProvider(ImageProvider):
    """只支持同步生图的测试提供商。"""

    display_name = "Sync Only"
    sub_models = ("sync-basic",)
    created = 0

    def __init__(self, config: ProviderConfig) -> None:
        super().__init__(config)
        SyncOnlyProvider.created += 1
        self.generate_calls = 0

    async def generate(self, request: GenerateRequest) -> GenerateResult:
        self.generate_calls += 1
        return GenerateResult(image_url="https://sync/a.png", image_base64=None, request_id="sync-1")


class ExplodingProvider(ImageProvider):
    display_name = "Exploding"

    async def generate(self, request: GenerateRequest) -> GenerateResult:
        raise RuntimeError("boom")


@pytest.fixture
def mixed_registry(fake_factory: FakeClientFactory) -> ProviderRegistry:
    registry = make_registry(fake_factory)
    registry.register("synconly", SyncOnlyProvider)
    registry.register("exploding", ExplodingProvider)
    return registry


# =============================================================================
# generate_image
# =============================================================================


class TestGenerateImage:
    """generate_image 测试。"""

    @pytest.mark.asyncio
    async def test_rapid_url_scenario(self, fake_factory, fake_registry, config_dict):
        fake_factory.responses["TextToImageRapid"] = {"ResultImage": "https://x/a.png", "RequestId": "r1"}

        response = await generate_image(
            provider="hunyuan",
            config=config_dict,
            sub_model="hunyuan-rapid",
            prompt="a cat",
            resolution="1024:1024",
            registry=fake_registry,
        )

        assert response.success is True
        assert response.image_url == "https://x/a.png"
        assert response.image_base64 is None
        assert response.request_id == "r1"
        assert response.to_dict() == {
            "success": True,
            "provider": "hunyuan",
            "imageUrl": "https://x/a.png",
            "imageBase64": None,
            "requestId": "r1",
        }

    @pytest.mark.asyncio
    async def test_config_mapping_is_converted(self, fake_factory, fake_registry, config_dict):
        fake_factory.responses["TextToImageRapid"] = {"ResultImage": "https://x/a.png", "RequestId": "r1"}

        await generate_image("hunyuan", config_dict, "hunyuan-rapid", "a cat", registry=fake_registry)

        assert fake_factory.configs[0] == ProviderConfig("X", "Y", "ap-guangzhou")

    @pytest.mark.asyncio
    async def test_bogus_sub_model(self, fake_factory, fake_registry, config_dict):
        response = await generate_image(
            "hunyuan", config_dict, "bogus-model", "a cat", "1024:1024", registry=fake_registry,
        )

        assert response.success is False
        for sub_model in ("hunyuan-light", "hunyuan-lite", "hunyuan-rapid"):
            assert sub_model in response.error
        assert response.to_dict() == {"success": False, "provider": "hunyuan", "error": response.error}
        assert fake_factory.total_calls == 0

    @pytest.mark.parametrize("config", [None, {}])
    @pytest.mark.asyncio
    async def test_missing_config_constructs_nothing(self, mixed_registry, config):
        SyncOnlyProvider.created = 0

        response = await generate_image("synconly", config, "sync-basic", "a cat", registry=mixed_registry)

        assert response.success is False
        assert "config" in response.error.lower()
        assert SyncOnlyProvider.created == 0

    @pytest.mark.asyncio
    async def test_unknown_provider(self, fake_registry, config_dict):
        response = await generate_image("tongyi", config_dict, "x", "a cat", registry=fake_registry)

        assert response.success is False
        assert "tongyi" in response.error
        assert "hunyuan" in response.error
        assert response.provider == "tongyi"

    @pytest.mark.asyncio
    async def test_vendor_failure_is_captured(self, fake_factory, fake_registry, config_dict):
        fake_factory.responses["TextToImageRapid"] = ConnectionError("network down")

        response = await generate_image("hunyuan", config_dict, "hunyuan-rapid", "a", registry=fake_registry)

        assert response.success is False
        assert "network down" in response.error

    @pytest.mark.asyncio
    async def test_unexpected_error_is_captured(self, mixed_registry, config_dict):
        response = await generate_image("exploding", config_dict, "x", "a", registry=mixed_registry)

        assert response.success is False
        assert response.error == "boom"

    @pytest.mark.asyncio
    async def test_accepts_provider_config_instance(self, mixed_registry, provider_config):
        response = await generate_image("synconly", provider_config, "sync-basic", "a", registry=mixed_registry)

        assert response.success is True
        assert response.image_url == "https://sync/a.png"


# =============================================================================
# submit_image_job / query_image_job
# =============================================================================


class TestAsyncJobs:
    """异步任务接口测试。"""

    @pytest.mark.asyncio
    async def test_submit(self, fake_factory, fake_registry, config_dict):
        fake_factory.responses["SubmitHunyuanImageJob"] = {"JobId": "J1", "RequestId": "s1"}

        response = await submit_image_job("hunyuan", config_dict, "a cat", registry=fake_registry)

        assert response.success is True
        assert response.job_id == "J1"
        assert response.to_dict()["jobId"] == "J1"

    @pytest.mark.asyncio
    async def test_query_success_scenario(self, fake_factory, fake_registry, config_dict):
        fake_factory.responses["QueryHunyuanImageJob"] = {
            "JobStatusCode": 2,
            "ResultImage": "https://x/b.png",
            "RequestId": "q1",
        }

        response = await query_image_job(provider="hunyuan", job_id="J1", config=config_dict, registry=fake_registry)

        assert response.success is True
        assert response.status == "success"
        assert response.image_url == "https://x/b.png"
        assert response.job_id == "J1"

    @pytest.mark.parametrize("code, expected", [(1, "processing"), (-1, "failed"), (0, "unknown"), (99, "unknown")])
    @pytest.mark.asyncio
    async def test_query_status_codes(self, fake_factory, fake_registry, config_dict, code, expected):
        fake_factory.responses["QueryHunyuanImageJob"] = {"JobStatusCode": code, "RequestId": "q1"}

        response = await query_image_job("hunyuan", "J1", config_dict, registry=fake_registry)

        assert response.success is True
        assert response.status == expected

    @pytest.mark.asyncio
    async def test_submit_unsupported_capability(self, mixed_registry, config_dict):
        response = await submit_image_job("synconly", config_dict, "a cat", registry=mixed_registry)

        assert response.success is False
        assert "synconly" in response.error
        assert "does not support" in response.error

    @pytest.mark.asyncio
    async def test_query_unsupported_capability(self, mixed_registry, config_dict):
        response = await query_image_job("synconly", "J1", config_dict, registry=mixed_registry)

        assert response.success is False
        assert "synconly" in response.error
        assert response.job_id == "J1"
        assert response.to_dict()["jobId"] == "J1"

    @pytest.mark.asyncio
    async def test_query_missing_config(self, fake_factory, fake_registry):
        response = await query_image_job("hunyuan", "J1", None, registry=fake_registry)

        assert response.success is False
        assert response.job_id == "J1"
        assert fake_factory.build_count == {}


# =============================================================================
# 目录
# =============================================================================


class TestIntrospection:
    """提供商与模型目录测试。"""

    @pytest.mark.asyncio
    async def test_default_providers(self):
        providers = await get_supported_providers()

        assert [p.id for p in providers] == ["hunyuan"]
        assert providers[0].supports_async is True
        assert providers[0].to_dict() == {"id": "hunyuan", "name": "腾讯混元", "supportsAsync": True}

    @pytest.mark.asyncio
    async def test_sync_only_provider_reports_no_async(self, mixed_registry):
        providers = {p.id: p for p in await get_supported_providers(registry=mixed_registry)}

        assert providers["hunyuan"].supports_async is True
        assert providers["synconly"].supports_async is False
        assert providers["synconly"].name == "Sync Only"

    @pytest.mark.asyncio
    async def test_models(self):
        models = await get_supported_models()

        assert {m.id for m in models} == {"hunyuan-rapid", "hunyuan-light", "hunyuan-lite", "hunyuan-async"}
        assert all(m.provider == "hunyuan" for m in models)

    @pytest.mark.asyncio
    async def test_models_cannot_be_modified_by_callers(self):
        models = await get_supported_models()

        with pytest.raises(dataclasses.FrozenInstanceError):
            models[0].name = "changed"
        models.clear()

        again = await get_supported_models()
        assert len(again) == 4
        assert again[0].name == "混元精简版"

    def test_catalog_matches_routes(self):
        assert check_catalog() == []
