"""najie-ai-draw 应用入口。

包含日志配置和主入口点。
"""

from __future__ import annotations

import logging
import sys
from typing import Sequence

from .cli import run_cli
from .config import get_settings

__all__ = ["configure_logging", "main"]

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging() -> None:
    """配置日志输出。

    默认输出到 stderr（stdout 留给 JSON 结果）；AIDRAW_LOG_DEBUG 开启时
    以 DEBUG 级别写入临时日志文件。
    """
    settings = get_settings()
    log_handlers: list[logging.Handler] = []

    if settings.log_debug and settings.log_file:
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log_handlers.append(file_handler)
        log_level = logging.DEBUG
    else:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log_handlers.append(stderr_handler)
        log_level = logging.INFO

    # 第三方库（tencentcloud、aiohttp）保持 WARNING
    logging.basicConfig(
        level=logging.WARNING,
        handlers=log_handlers,
    )
    logging.getLogger("najie_ai_draw").setLevel(log_level)

    if settings.log_debug:
        logger.debug(f"Debug log: {settings.log_file}")


def main(argv: Sequence[str] | None = None) -> None:
    """主入口点。"""
    configure_logging()
    sys.exit(run_cli(argv))


if __name__ == "__main__":
    main()
