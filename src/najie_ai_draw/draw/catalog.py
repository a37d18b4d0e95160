"""子模型目录与参数选项。

najie-ai-draw draw v0.1.0

目录独立于适配器的路由表维护，check_catalog() 用于校验两者一致。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .registry import DEFAULT_REGISTRY, ProviderRegistry
from .types import ModelInfo

__all__ = [
    "MODEL_CATALOG",
    "MODEL_OPTIONS",
    "ASPECT_RATIO_OPTIONS",
    "SIZE_OPTIONS",
    "ModelOptions",
    "calculate_resolution",
    "check_catalog",
    "catalog_as_dict",
]

MODEL_CATALOG: list[ModelInfo] = [
    ModelInfo("hunyuan-rapid", "混元精简版", "hunyuan", "30种风格，速度快"),
    ModelInfo("hunyuan-light", "混元轻量版", "hunyuan", "27种风格，质量高"),
    ModelInfo("hunyuan-lite", "混元极速版", "hunyuan", "5种基础风格，速度最快"),
    ModelInfo("hunyuan-async", "混元异步版", "hunyuan", "18种风格，适合批量生成"),
]

ASPECT_RATIO_OPTIONS = ["1:1", "4:3", "3:4", "16:9", "9:16"]

SIZE_OPTIONS = [
    160, 200, 225, 256, 512, 520, 608, 768,
    1024, 1080, 1280, 1600, 1620, 1920, 2048,
    2400, 2560, 2592, 3440, 3840, 4096,
]

_FIXED_RESOLUTIONS = [
    "768:768", "768:1024", "1024:768", "1024:1024",
    "720:1280", "1280:720", "768:1280", "1280:768",
]


@dataclass
class ModelOptions:
    """子模型在 UI 中可用的参数。

    Attributes:
        has_style: 是否支持风格
        fixed_resolutions: 固定分辨率列表，空表示按宽高比 + 边长计算
        styles: (value, label) 风格列表
    """
    has_style: bool
    fixed_resolutions: list[str] = field(default_factory=list)
    styles: list[tuple[str, str]] = field(default_factory=list)

    @property
    def has_fixed_resolution(self) -> bool:
        return bool(self.fixed_resolutions)


MODEL_OPTIONS: dict[str, ModelOptions] = {
    "hunyuan-lite": ModelOptions(
        has_style=False,
        styles=[
            ("油画", "油画风格"), ("水彩", "水彩风格"), ("素描", "素描风格"),
            ("卡通", "卡通风格"), ("写实", "写实风格"),
        ],
    ),
    "hunyuan-rapid": ModelOptions(
        has_style=True,
        styles=[(str(i), label) for i, label in enumerate([
            "宫崎骏风格", "新海诚风格", "去旅行风格", "水彩风格", "像素风格",
            "童话世界风格", "奇趣卡通风格", "赛博朋克风格", "极简风格", "复古风格",
            "暗黑系风格", "波普风风格", "糖果色风格", "胶片电影风格", "素描风格",
            "水墨画风格", "油画风格", "粉笔风格", "粘土风格", "毛毡风格",
            "刺绣风格", "彩铅风格", "莫奈风格", "毕加索风格", "穆夏风格",
            "古风二次元风格", "都市二次元风格", "悬疑风格", "校园风格", "都市异能风格",
        ], start=1)],
    ),
    "hunyuan-light": ModelOptions(
        has_style=True,
        fixed_resolutions=list(_FIXED_RESOLUTIONS),
        styles=[
            ("000", "不限定风格"), ("101", "水墨画"), ("102", "概念艺术"), ("103", "油画1"),
            ("118", "油画2（梵高）"), ("104", "水彩画"), ("105", "像素画"), ("106", "厚涂风格"),
            ("107", "插图"), ("108", "剪纸风格"), ("109", "印象派1（莫奈）"), ("119", "印象派2"),
            ("110", "2.5D"), ("111", "古典肖像画"), ("112", "黑白素描画"), ("113", "赛博朋克"),
            ("114", "科幻风格"), ("115", "暗黑风格"), ("116", "3D"), ("117", "蒸汽波"),
            ("201", "日系动漫"), ("202", "怪兽风格"), ("203", "唯美古风"), ("204", "复古动漫"),
            ("301", "游戏卡通手绘"), ("401", "通用写实风格"),
        ],
    ),
    "hunyuan-async": ModelOptions(
        has_style=True,
        fixed_resolutions=list(_FIXED_RESOLUTIONS),
        styles=[
            ("riman", "日漫动画"), ("shuimo", "水墨画"), ("monai", "莫奈"), ("bianping", "扁平插画"),
            ("xiangsu", "像素插画"), ("ertonghuiben", "儿童绘本"), ("3dxuanran", "3D 渲染"),
            ("manhua", "漫画"), ("heibaimanhua", "黑白漫画"), ("xieshi", "写实"), ("dongman", "动漫"),
            ("bijiasuo", "毕加索"), ("saibopengke", "赛博朋克"), ("youhua", "油画"),
            ("masaike", "马赛克"), ("qinghuaci", "青花瓷"), ("xinnianjianzhi", "新年剪纸画"),
            ("xinnianhuayi", "新年花艺"),
        ],
    ),
}


def calculate_resolution(aspect_ratio: str, size: int | str) -> str:
    """将宽高比 + 边长换算为 "W:H" 分辨率。

    长边等于 size，短边按比例四舍五入。

    Args:
        aspect_ratio: 宽高比（如 "16:9"）
        size: 长边像素

    Returns:
        分辨率（如 "1024:576"）

    Raises:
        ValueError: 宽高比格式错误
    """
    try:
        width_ratio, height_ratio = (int(part) for part in aspect_ratio.split(":"))
    except ValueError as e:
        raise ValueError(f"Invalid aspect ratio: {aspect_ratio!r}, expected W:H") from e
    if width_ratio <= 0 or height_ratio <= 0:
        raise ValueError(f"Invalid aspect ratio: {aspect_ratio!r}")

    base = int(size)
    if width_ratio >= height_ratio:
        return f"{base}:{round(base * height_ratio / width_ratio)}"
    return f"{round(base * width_ratio / height_ratio)}:{base}"


def check_catalog(registry: ProviderRegistry | None = None) -> list[str]:
    """校验目录与各提供商的子模型路由是否一致。

    Returns:
        不一致描述列表，空列表表示一致
    """
    registry = registry or DEFAULT_REGISTRY
    problems: list[str] = []

    for entry in registry.entries():
        declared = set(entry.provider_type.sub_models)
        cataloged = {m.id for m in MODEL_CATALOG if m.provider == entry.id}
        for sub_model in sorted(declared - cataloged):
            problems.append(f"{entry.id}: sub-model {sub_model} missing from catalog")
        for sub_model in sorted(cataloged - declared):
            problems.append(f"{entry.id}: cataloged sub-model {sub_model} has no route")

    known = set(registry.ids())
    for model in MODEL_CATALOG:
        if model.provider not in known:
            problems.append(f"{model.id}: unknown provider {model.provider}")
        if model.id not in MODEL_OPTIONS:
            problems.append(f"{model.id}: missing UI options")

    return problems


def catalog_as_dict() -> dict[str, Any]:
    """目录和参数选项（供 Web UI 使用）。"""
    models = []
    for model in MODEL_CATALOG:
        options = MODEL_OPTIONS[model.id]
        item = model.to_dict()
        item.update({
            "hasStyle": options.has_style,
            "hasFixedResolution": options.has_fixed_resolution,
            "fixedResolutions": options.fixed_resolutions,
            "styles": [{"value": value, "label": label} for value, label in options.styles],
        })
        models.append(item)
    return {
        "models": models,
        "aspectRatios": ASPECT_RATIO_OPTIONS,
        "sizes": SIZE_OPTIONS,
    }
