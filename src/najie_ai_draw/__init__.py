"""najie-ai-draw - 多厂商文生图服务。

环境变量:
    AIDRAW_HOME: 凭据配置目录（默认 ~/.najie/ai-draw）
    AIDRAW_LOG_DEBUG: 日志输出到临时文件 (默认 false)

用法:
    najie-ai-draw generate --prompt "a cat"
"""

__version__ = "0.1.0"

from .app import main

__all__ = ["__version__", "main"]
