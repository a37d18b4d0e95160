"""Web UI 模块。

najie-ai-draw webui v0.1.0
"""

from .server import ServerConfig, WebUIServer
from .template import PAGE_HTML, generate_html

__all__ = [
    "WebUIServer",
    "ServerConfig",
    "PAGE_HTML",
    "generate_html",
]
