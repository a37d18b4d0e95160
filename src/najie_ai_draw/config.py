"""运行配置（环境变量）。

环境变量:
    AIDRAW_HOME: 凭据配置目录
        - 默认 ~/.najie/ai-draw
        - config.json 存放于该目录

    AIDRAW_LOG_DEBUG: 日志调试模式
        - true/1/yes = 开启 (日志输出到临时文件)
        - false/0/no = 关闭 (默认，日志输出到 stderr)

    AIDRAW_POLL_INTERVAL: 异步版轮询间隔（秒）
        - 默认 2.0，限制在 0-60

    AIDRAW_POLL_TIMEOUT: 异步版轮询超时（秒）
        - 默认 120，限制在 1-3600

    AIDRAW_PORT: Web UI 默认端口
        - 默认 5178
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

__all__ = ["Settings", "load_settings", "get_settings", "reload_settings"]

DEFAULT_HOME = Path.home() / ".najie" / "ai-draw"
DEFAULT_PORT = 5178
DEFAULT_POLL_INTERVAL = 2.0
DEFAULT_POLL_TIMEOUT = 120.0


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """解析布尔值环境变量。"""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _parse_float(value: str | None, default: float, low: float, high: float) -> float:
    """解析浮点数环境变量并限制范围，无效值返回默认值。"""
    if not value:
        return default
    try:
        return max(low, min(float(value), high))
    except ValueError:
        return default


def _parse_port(value: str | None) -> int:
    if not value:
        return DEFAULT_PORT
    try:
        port = int(value)
    except ValueError:
        return DEFAULT_PORT
    return port if 0 < port < 65536 else DEFAULT_PORT


def _generate_log_file_path() -> str:
    """生成日志文件路径。

    Returns:
        临时目录下的日志文件绝对路径
    """
    log_dir = Path(tempfile.gettempdir()) / "najie-ai-draw"
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return str((log_dir / f"aidraw_debug_{timestamp}.log").resolve())


@dataclass
class Settings:
    """运行配置。

    Attributes:
        home: 凭据配置目录
        log_debug: 日志调试模式（输出到临时文件）
        log_file: 日志文件路径（当 log_debug=True 时自动设置）
        poll_interval: 异步版轮询间隔（秒）
        poll_timeout: 异步版轮询超时（秒）
        port: Web UI 默认端口
    """

    home: Path = DEFAULT_HOME
    log_debug: bool = False
    log_file: str | None = None
    poll_interval: float = DEFAULT_POLL_INTERVAL
    poll_timeout: float = DEFAULT_POLL_TIMEOUT
    port: int = DEFAULT_PORT

    @property
    def config_file(self) -> Path:
        return self.home / "config.json"


def load_settings() -> Settings:
    """从环境变量加载配置。"""
    log_debug = _parse_bool(os.environ.get("AIDRAW_LOG_DEBUG"), default=False)
    home = os.environ.get("AIDRAW_HOME")

    return Settings(
        home=Path(home).expanduser() if home else DEFAULT_HOME,
        log_debug=log_debug,
        log_file=_generate_log_file_path() if log_debug else None,
        poll_interval=_parse_float(
            os.environ.get("AIDRAW_POLL_INTERVAL"), DEFAULT_POLL_INTERVAL, 0.0, 60.0
        ),
        poll_timeout=_parse_float(
            os.environ.get("AIDRAW_POLL_TIMEOUT"), DEFAULT_POLL_TIMEOUT, 1.0, 3600.0
        ),
        port=_parse_port(os.environ.get("AIDRAW_PORT")),
    )


# 全局配置实例（延迟加载）
_settings: Settings | None = None


def get_settings() -> Settings:
    """获取全局配置实例。"""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reload_settings() -> Settings:
    """重新加载配置（用于测试）。"""
    global _settings
    _settings = load_settings()
    return _settings
