"""命令行入口。

每个命令向 stdout 输出一个 JSON 对象，失败时退出码为 1。

用法:
    najie-ai-draw config set --secretId xxx --secretKey xxx
    najie-ai-draw generate --prompt "a cat" --model hunyuan-rapid
    najie-ai-draw submit --prompt "a cat"
    najie-ai-draw query --jobId xxx
    najie-ai-draw serve --port 5178
"""

from __future__ import annotations

import argparse
import asyncio
import inspect
import json
import logging
import sys
from typing import Any, Sequence

from . import __version__
from .config import get_settings
from .download import ImageSaveError, save_image
from .draw import (
    calculate_resolution,
    generate_image,
    get_supported_models,
    get_supported_providers,
    query_image_job,
    submit_image_job,
)
from .draw.catalog import MODEL_CATALOG
from .store import CredentialStore, Credentials

__all__ = ["build_parser", "run_cli"]

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "hunyuan-rapid"
DEFAULT_RESOLUTION = "1024:1024"
NOT_CONFIGURED_ERROR = (
    "Please configure SecretId and SecretKey first: "
    "najie-ai-draw config set --secretId xxx --secretKey xxx"
)

CommandResult = tuple[dict[str, Any], int]


def _emit(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, ensure_ascii=False))


def _failure(error: str) -> CommandResult:
    return {"success": False, "error": error}, 1


def _get_store() -> CredentialStore:
    return CredentialStore(get_settings().config_file)


def _load_credentials() -> Credentials | None:
    credentials = _get_store().load()
    return credentials if credentials.is_configured else None


def _cmd_config_set(args: argparse.Namespace) -> CommandResult:
    credentials = Credentials(
        provider=args.provider,
        secret_id=args.secret_id,
        secret_key=args.secret_key,
        region=args.region,
    )
    try:
        _get_store().save(credentials)
    except OSError as e:
        return _failure(f"Failed to save config: {e}")
    return {"success": True, "message": "Config saved"}, 0


def _cmd_config_show(args: argparse.Namespace) -> CommandResult:
    return {"success": True, "config": _get_store().load().masked()}, 0


def _resolve_resolution(args: argparse.Namespace) -> str:
    if args.aspect_ratio:
        return calculate_resolution(args.aspect_ratio, args.size)
    return args.resolution


async def _cmd_generate(args: argparse.Namespace) -> CommandResult:
    credentials = _load_credentials()
    if credentials is None:
        return _failure(NOT_CONFIGURED_ERROR)

    try:
        resolution = _resolve_resolution(args)
    except ValueError as e:
        return _failure(str(e))

    response = await generate_image(
        credentials.provider,
        credentials.provider_config(),
        args.model,
        args.prompt,
        resolution,
        seed=args.seed,
        style=args.style or None,
        logo_add=args.logo_add,
        rsp_img_type=args.rsp_img_type,
    )
    if not response.success:
        return _failure(response.error)

    saved_path = None
    if args.output:
        try:
            saved_path = await save_image(
                args.output,
                image_url=response.image_url,
                image_base64=response.image_base64,
            )
        except ImageSaveError as e:
            # 保存失败不影响生图结果
            logger.warning(f"Failed to save image to {args.output}: {e}")

    return {
        "success": True,
        "imageUrl": response.image_url,
        "imageBase64": response.image_base64,
        "requestId": response.request_id,
        "savedPath": saved_path,
        "model": args.model,
        "resolution": resolution,
    }, 0


async def _cmd_submit(args: argparse.Namespace) -> CommandResult:
    credentials = _load_credentials()
    if credentials is None:
        return _failure(NOT_CONFIGURED_ERROR)

    response = await submit_image_job(
        credentials.provider,
        credentials.provider_config(),
        args.prompt,
        args.resolution,
        seed=args.seed,
        style=args.style or None,
        logo_add=args.logo_add,
    )
    return response.to_dict(), 0 if response.success else 1


async def _cmd_query(args: argparse.Namespace) -> CommandResult:
    credentials = _load_credentials()
    if credentials is None:
        return _failure(NOT_CONFIGURED_ERROR)

    response = await query_image_job(
        credentials.provider,
        args.job_id,
        credentials.provider_config(),
    )
    return response.to_dict(), 0 if response.success else 1


async def _cmd_models(args: argparse.Namespace) -> CommandResult:
    models = await get_supported_models()
    return {"success": True, "models": [m.to_dict() for m in models]}, 0


async def _cmd_providers(args: argparse.Namespace) -> CommandResult:
    providers = await get_supported_providers()
    return {"success": True, "providers": [p.to_dict() for p in providers]}, 0


def _cmd_serve(args: argparse.Namespace) -> CommandResult:
    from .webui import ServerConfig, WebUIServer

    server = WebUIServer(_get_store(), config=ServerConfig(host=args.host, port=args.port))
    server.start()
    _emit({"success": True, "url": server.url})
    sys.stdout.flush()
    try:
        server.serve_until_interrupted()
    finally:
        server.stop()
    return {"success": True, "message": "Server stopped"}, 0


def _add_generation_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--prompt", required=True, help="图片描述提示词")
    parser.add_argument("--resolution", default=DEFAULT_RESOLUTION, help="分辨率 W:H")
    parser.add_argument("--style", help="风格")
    parser.add_argument("--seed", type=int, help="随机种子")
    parser.add_argument("--logo-add", dest="logo_add", type=int, choices=(0, 1), help="是否添加 Logo")


def build_parser() -> argparse.ArgumentParser:
    """构建参数解析器。"""
    parser = argparse.ArgumentParser(
        prog="najie-ai-draw",
        description="AI 画画 - 多厂商生图服务",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    config_parser = sub.add_parser("config", help="配置管理")
    config_sub = config_parser.add_subparsers(dest="config_command", required=True)

    config_set = config_sub.add_parser("set", help="设置配置")
    config_set.add_argument("--secretId", "--secret-id", dest="secret_id", required=True, help="腾讯云 SecretId")
    config_set.add_argument("--secretKey", "--secret-key", dest="secret_key", required=True, help="腾讯云 SecretKey")
    config_set.add_argument("--region", default="ap-guangzhou", help="地域")
    config_set.add_argument("--provider", default="hunyuan", help="提供商")
    config_set.set_defaults(handler=_cmd_config_set)

    config_show = config_sub.add_parser("show", help="显示当前配置")
    config_show.set_defaults(handler=_cmd_config_show)

    generate = sub.add_parser("generate", help="生成图片")
    _add_generation_options(generate)
    generate.add_argument(
        "--model",
        default=DEFAULT_MODEL,
        choices=[m.id for m in MODEL_CATALOG],
        help="子模型",
    )
    generate.add_argument("--aspect-ratio", dest="aspect_ratio", help="宽高比（与 --size 一起替代 --resolution）")
    generate.add_argument("--size", type=int, default=1024, help="长边像素（配合 --aspect-ratio）")
    generate.add_argument("--rsp-img-type", dest="rsp_img_type", choices=("url", "base64"), help="返回类型")
    generate.add_argument("--output", help="输出文件路径")
    generate.set_defaults(handler=_cmd_generate)

    submit = sub.add_parser("submit", help="提交异步生图任务")
    _add_generation_options(submit)
    submit.set_defaults(handler=_cmd_submit)

    query = sub.add_parser("query", help="查询异步任务结果")
    query.add_argument("--jobId", "--job-id", dest="job_id", required=True, help="任务ID")
    query.set_defaults(handler=_cmd_query)

    models = sub.add_parser("models", help="列出支持的子模型")
    models.set_defaults(handler=_cmd_models)

    providers = sub.add_parser("providers", help="列出支持的提供商")
    providers.set_defaults(handler=_cmd_providers)

    serve = sub.add_parser("serve", help="启动 Web UI 服务")
    serve.add_argument("-p", "--port", type=int, default=get_settings().port, help="服务端口")
    serve.add_argument("--host", default="127.0.0.1", help="监听地址")
    serve.set_defaults(handler=_cmd_serve)

    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    """执行命令，返回退出码。"""
    args = build_parser().parse_args(argv)
    handler = args.handler

    if inspect.iscoroutinefunction(handler):
        payload, code = asyncio.run(handler(args))
    else:
        payload, code = handler(args)

    if args.command != "serve":
        _emit(payload)
    return code
