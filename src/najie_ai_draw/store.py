"""凭据配置文件存储。

配置文件: <AIDRAW_HOME>/config.json

    {
      "provider": "hunyuan",
      "secretId": "...",
      "secretKey": "...",
      "region": "ap-guangzhou"
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .draw.types import ProviderConfig

__all__ = ["Credentials", "CredentialStore"]

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "hunyuan"
DEFAULT_REGION = "ap-guangzhou"


@dataclass
class Credentials:
    """本地保存的凭据。

    Attributes:
        provider: 提供商 ID
        secret_id: SecretId
        secret_key: SecretKey
        region: 地域
    """
    provider: str = DEFAULT_PROVIDER
    secret_id: str = ""
    secret_key: str = ""
    region: str = DEFAULT_REGION

    @property
    def is_configured(self) -> bool:
        """检查是否已配置 SecretId 和 SecretKey。"""
        return bool(self.secret_id and self.secret_key)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Credentials":
        return cls(
            provider=data.get("provider") or DEFAULT_PROVIDER,
            secret_id=data.get("secretId") or "",
            secret_key=data.get("secretKey") or "",
            region=data.get("region") or DEFAULT_REGION,
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "provider": self.provider,
            "secretId": self.secret_id,
            "secretKey": self.secret_key,
            "region": self.region,
        }

    def masked(self) -> dict[str, str]:
        """脱敏后的配置（用于展示）。"""
        return {
            "provider": self.provider,
            "secretId": f"{self.secret_id[:8]}***" if self.secret_id else "",
            "secretKey": "***" if self.secret_key else "",
            "region": self.region,
        }

    def provider_config(self) -> ProviderConfig:
        return ProviderConfig(
            secret_id=self.secret_id,
            secret_key=self.secret_key,
            region=self.region,
        )


class CredentialStore:
    """JSON 文件凭据存储。"""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Credentials:
        """读取凭据，文件不存在或损坏时返回默认值。"""
        if not self.path.exists():
            return Credentials()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load config from {self.path}: {e}")
            return Credentials()
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed config in {self.path}")
            return Credentials()
        return Credentials.from_dict(data)

    def save(self, credentials: Credentials) -> None:
        """写入凭据。

        Raises:
            OSError: 写入失败
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(credentials.to_dict(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        logger.info(
            f"Saved {credentials.provider} credentials "
            f"(secretId={credentials.masked()['secretId']}) to {self.path}"
        )
