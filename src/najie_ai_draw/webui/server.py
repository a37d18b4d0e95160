"""Web UI HTTP 服务器

najie-ai-draw webui v0.1.0

提供单页 UI 和 JSON API（配置、生图、异步任务、历史记录）。
每个请求在独立线程中处理，生图接口通过 asyncio.run 调用统一接口。
"""

from __future__ import annotations

import asyncio
import http.server
import json
import logging
import socketserver
import threading
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs, unquote, urlsplit

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..draw import (
    ProviderRegistry,
    generate_image,
    get_supported_providers,
    query_image_job,
    submit_image_job,
)
from ..draw.catalog import catalog_as_dict
from ..history import HistoryStore
from ..store import CredentialStore, Credentials
from .template import PAGE_HTML

logger = logging.getLogger(__name__)

__all__ = [
    "WebUIServer",
    "ServerConfig",
]

MASKED_SECRET = "***"
NOT_CONFIGURED_ERROR = "Please configure SecretId and SecretKey first"


@dataclass
class ServerConfig:
    """服务器配置"""
    host: str = "127.0.0.1"
    port: int = 0  # 0 = 随机端口
    max_body_bytes: int = 1024 * 1024


class ReusableTCPServer(socketserver.ThreadingTCPServer):
    """支持端口复用的 TCP 服务器"""
    allow_reuse_address = True


class ConfigBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    provider: str = "hunyuan"
    secretId: str = ""
    secretKey: str = ""
    region: str = "ap-guangzhou"


class GenerateBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    prompt: str = Field(min_length=1)
    model: str = "hunyuan-rapid"
    resolution: str = "1024:1024"
    style: str | None = None
    seed: int | None = None
    logoAdd: int | None = None
    tags: str = ""


class SubmitBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    prompt: str = Field(min_length=1)
    resolution: str = "1024:1024"
    style: str | None = None
    seed: int | None = None
    logoAdd: int | None = None


class BadRequest(Exception):
    """请求体无效"""
    pass


def _validation_message(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item.get("loc", ()))
        parts.append(f"{loc}: {item.get('msg', 'invalid')}" if loc else item.get("msg", "invalid"))
    return "; ".join(parts) or "Invalid request body"


class WebUIServer:
    """HTTP 服务器，提供 UI 页面和 JSON API"""

    def __init__(
        self,
        store: CredentialStore,
        history: HistoryStore | None = None,
        registry: ProviderRegistry | None = None,
        config: ServerConfig | None = None,
        html: str = PAGE_HTML,
    ):
        self.store = store
        self.history = history if history is not None else HistoryStore()
        self.registry = registry
        self.config = config or ServerConfig()
        self.html = html
        self._server: socketserver.TCPServer | None = None
        self._thread: threading.Thread | None = None
        self._actual_port: int = 0

    @property
    def port(self) -> int:
        """实际绑定的端口"""
        return self._actual_port

    @property
    def url(self) -> str:
        """服务器 URL"""
        return f"http://{self.config.host}:{self._actual_port}"

    def start(self) -> int:
        """启动服务器，返回实际端口"""
        handler = self._create_handler()

        self._server = ReusableTCPServer(
            (self.config.host, self.config.port), handler
        )
        self._server.daemon_threads = True

        self._actual_port = self._server.server_address[1]

        self._thread = threading.Thread(
            target=self._server.serve_forever,
            daemon=True,
            name="webui_http_server"
        )
        self._thread.start()

        logger.info(f"Web UI started at {self.url}")
        return self._actual_port

    def stop(self):
        """停止服务器"""
        if self._server:
            self._server.shutdown()
            self._server.server_close()
            self._server = None
            logger.debug("Web UI stopped")

    def serve_until_interrupted(self):
        """阻塞直到 Ctrl+C（需先 start）"""
        try:
            while self._thread and self._thread.is_alive():
                self._thread.join(timeout=0.5)
        except KeyboardInterrupt:
            logger.info("Interrupted, shutting down")

    # ----- API 实现（与 HTTP 解耦，便于测试） -----

    def api_get_config(self) -> dict[str, Any]:
        credentials = self.store.load()
        data = credentials.to_dict()
        data["secretKey"] = MASKED_SECRET if credentials.secret_key else ""
        return {"success": True, "config": data}

    def api_save_config(self, body: ConfigBody) -> dict[str, Any]:
        secret_key = body.secretKey
        if secret_key == MASKED_SECRET:
            # UI 回传脱敏值时保留原密钥
            secret_key = self.store.load().secret_key
        credentials = Credentials(
            provider=body.provider,
            secret_id=body.secretId,
            secret_key=secret_key,
            region=body.region,
        )
        try:
            self.store.save(credentials)
        except OSError as e:
            logger.error(f"Failed to save config: {e}")
            return {"success": False, "error": f"Failed to save config: {e}"}
        return {"success": True}

    def api_test_config(self, body: ConfigBody) -> dict[str, Any]:
        providers = asyncio.run(get_supported_providers(registry=self.registry))
        if any(p.id == body.provider for p in providers):
            return {"success": True}
        return {"success": False, "error": f"Unsupported provider: {body.provider}"}

    def api_providers(self) -> dict[str, Any]:
        providers = asyncio.run(get_supported_providers(registry=self.registry))
        return {"success": True, "providers": [p.to_dict() for p in providers]}

    def api_generate(self, body: GenerateBody) -> dict[str, Any]:
        credentials = self.store.load()
        if not credentials.is_configured:
            return {"success": False, "error": NOT_CONFIGURED_ERROR}

        response = asyncio.run(generate_image(
            credentials.provider,
            credentials.provider_config(),
            body.model,
            body.prompt,
            body.resolution,
            seed=body.seed,
            style=body.style or None,
            logo_add=body.logoAdd,
            registry=self.registry,
        ))
        if not response.success:
            return {"success": False, "error": response.error}

        display_url = response.image_url
        if not display_url and response.image_base64:
            display_url = f"data:image/png;base64,{response.image_base64}"
        record = self.history.add(
            prompt=body.prompt,
            model=body.model,
            image_url=display_url,
            resolution=body.resolution,
            style=body.style or "",
            tags=body.tags,
        )
        return {
            "success": True,
            "imageUrl": response.image_url,
            "imageBase64": response.image_base64,
            "requestId": response.request_id,
            "historyId": record.id,
        }

    def api_submit(self, body: SubmitBody) -> dict[str, Any]:
        credentials = self.store.load()
        if not credentials.is_configured:
            return {"success": False, "error": NOT_CONFIGURED_ERROR}
        response = asyncio.run(submit_image_job(
            credentials.provider,
            credentials.provider_config(),
            body.prompt,
            body.resolution,
            seed=body.seed,
            style=body.style or None,
            logo_add=body.logoAdd,
            registry=self.registry,
        ))
        return response.to_dict()

    def api_query(self, job_id: str) -> dict[str, Any]:
        credentials = self.store.load()
        if not credentials.is_configured:
            return {"success": False, "error": NOT_CONFIGURED_ERROR}
        response = asyncio.run(query_image_job(
            credentials.provider,
            job_id,
            credentials.provider_config(),
            registry=self.registry,
        ))
        return response.to_dict()

    def api_history(self, tag: str | None) -> dict[str, Any]:
        return {"success": True, "records": [r.to_dict() for r in self.history.list(tag)]}

    def api_delete_history(self, record_id: int) -> dict[str, Any]:
        self.history.delete(record_id)
        return {"success": True}

    # ----- HTTP -----

    def _create_handler(self):
        server = self

        class Handler(http.server.BaseHTTPRequestHandler):
            protocol_version = 'HTTP/1.1'

            def do_GET(self):
                parts = urlsplit(self.path)
                path = parts.path
                if path == '/' or path == '/index.html':
                    self._serve_html()
                elif path == '/api/config':
                    self._send_json(200, server.api_get_config())
                elif path == '/api/models':
                    self._send_json(200, {"success": True, **catalog_as_dict()})
                elif path == '/api/providers':
                    self._send_json(200, server.api_providers())
                elif path == '/api/history':
                    tag = parse_qs(parts.query).get('tag', [None])[0]
                    self._send_json(200, server.api_history(tag))
                elif path.startswith('/api/jobs/'):
                    job_id = unquote(path[len('/api/jobs/'):])
                    if not job_id:
                        self._send_json(404, {"success": False, "error": "Not found"})
                        return
                    self._send_json(200, server.api_query(job_id))
                else:
                    self._send_json(404, {"success": False, "error": "Not found"})

            def do_POST(self):
                path = urlsplit(self.path).path
                routes = {
                    '/api/config': (ConfigBody, server.api_save_config),
                    '/api/config/test': (ConfigBody, server.api_test_config),
                    '/api/generate': (GenerateBody, server.api_generate),
                    '/api/submit': (SubmitBody, server.api_submit),
                }
                route = routes.get(path)
                if route is None:
                    self._send_json(404, {"success": False, "error": "Not found"})
                    return
                model_cls, action = route
                try:
                    body = model_cls.model_validate(self._read_json())
                except BadRequest as e:
                    self._send_json(400, {"success": False, "error": str(e)})
                    return
                except ValidationError as e:
                    self._send_json(400, {"success": False, "error": _validation_message(e)})
                    return
                self._send_json(200, action(body))

            def do_DELETE(self):
                path = urlsplit(self.path).path
                prefix = '/api/history/'
                if not path.startswith(prefix):
                    self._send_json(404, {"success": False, "error": "Not found"})
                    return
                try:
                    record_id = int(path[len(prefix):])
                except ValueError:
                    self._send_json(400, {"success": False, "error": "Invalid history id"})
                    return
                self._send_json(200, server.api_delete_history(record_id))

            def _read_json(self) -> Any:
                try:
                    length = int(self.headers.get('Content-Length') or 0)
                except ValueError as e:
                    raise BadRequest("Invalid Content-Length") from e
                if length < 0:
                    raise BadRequest("Invalid Content-Length")
                if length > server.config.max_body_bytes:
                    raise BadRequest("Request body too large")
                raw = self.rfile.read(length) if length else b''
                if not raw:
                    return {}
                try:
                    return json.loads(raw.decode('utf-8'))
                except (UnicodeDecodeError, ValueError) as e:
                    raise BadRequest(f"Invalid JSON body: {e}") from e

            def _send_json(self, status: int, payload: dict[str, Any]):
                content = json.dumps(payload, ensure_ascii=False).encode('utf-8')
                self.send_response(status)
                self.send_header('Content-Type', 'application/json; charset=utf-8')
                self.send_header('Content-Length', len(content))
                self.send_header('Access-Control-Allow-Origin', '*')
                self.end_headers()
                self.wfile.write(content)

            def _serve_html(self):
                content = server.html.encode('utf-8')
                self.send_response(200)
                self.send_header('Content-Type', 'text/html; charset=utf-8')
                self.send_header('Content-Length', len(content))
                self.end_headers()
                self.wfile.write(content)

            def log_message(self, format, *args):
                logger.debug("%s - %s", self.address_string(), format % args)

        return Handler
