"""生图历史记录（内存存储，进程退出即丢失）。"""

from __future__ import annotations

import threading
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any

__all__ = ["HistoryRecord", "HistoryStore"]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class HistoryRecord:
    """一次成功生图的记录。

    Attributes:
        id: 记录 ID（单调递增）
        prompt: 提示词
        model: 子模型
        resolution: 分辨率
        style: 风格
        tags: 逗号分隔的标签
        image_url: 图片 URL（或 base64 data URI）
        thumbnail_url: 缩略图 URL
        created_at: 创建时间（ISO 8601）
    """
    id: int
    prompt: str
    model: str
    resolution: str = ""
    style: str = ""
    tags: str = ""
    image_url: str | None = None
    thumbnail_url: str | None = None
    created_at: str = field(default_factory=_now_iso)

    @property
    def tag_list(self) -> list[str]:
        return [tag.strip() for tag in self.tags.split(",") if tag.strip()]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class HistoryStore:
    """线程安全的内存历史记录，最新记录在前。"""

    def __init__(self) -> None:
        self._records: list[HistoryRecord] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def add(
        self,
        prompt: str,
        model: str,
        image_url: str | None,
        resolution: str = "",
        style: str = "",
        tags: str = "",
    ) -> HistoryRecord:
        with self._lock:
            record = HistoryRecord(
                id=self._next_id,
                prompt=prompt,
                model=model,
                resolution=resolution,
                style=style,
                tags=tags,
                image_url=image_url,
                thumbnail_url=image_url,
            )
            self._next_id += 1
            self._records.insert(0, record)
            return record

    def list(self, tag: str | None = None) -> list[HistoryRecord]:
        """列出记录，可按标签过滤。"""
        with self._lock:
            records = list(self._records)
        if tag:
            records = [r for r in records if tag in r.tag_list]
        return records

    def delete(self, record_id: int) -> bool:
        """删除记录，返回是否存在。"""
        with self._lock:
            before = len(self._records)
            self._records = [r for r in self._records if r.id != record_id]
            return len(self._records) != before

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
