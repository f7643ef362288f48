"""
派生字段引擎 - 计算派生字段

职责：
1. 由原图文件名派生报告标题与输出文件名
2. 由原图宽高比派生纸张方向
3. 填充ReportContext.derived

依赖：
- report_layout.yaml: default_title / file_suffix

测试要点：
- test_derive_title_from_file_name: 文件名 → 标题
- test_derive_file_name: 标题 → 输出文件名
- test_derive_orientation: 宽 > 高 为横向
"""

from __future__ import annotations

import re

from ..config import LayoutSpec, load_spec
from ..models import DerivedFields, ReportContext
from .geometry import orientation_for


class DerivationEngine:
    """派生字段计算引擎"""

    def __init__(self, spec: LayoutSpec | None = None):
        self.spec = spec or load_spec()

    def compute(self, ctx: ReportContext) -> DerivedFields:
        """计算所有派生字段"""
        derived = DerivedFields()

        # === 标题派生 ===
        if ctx.params.title:
            derived.title = ctx.params.title
        elif ctx.params.photo_name:
            derived.title = self.title_from_file_name(ctx.params.photo_name)
        if not derived.title:
            derived.title = self.spec.default_title

        # === 文件名派生 ===
        derived.file_name = self.file_name_for(derived.title)

        # === 方向派生 ===
        if ctx.params.orientation is not None:
            derived.orientation = ctx.params.orientation
        else:
            derived.orientation = orientation_for(ctx.photo.width, ctx.photo.height)

        return derived

    @staticmethod
    def title_from_file_name(name: str) -> str:
        """
        文件名 → 标题

        去掉最后一个扩展名，'-'/'_' 换为空格，各词首字母大写：
        "my_garden-roses.png" -> "My Garden Roses"
        """
        base = ".".join(name.split(".")[:-1]) or name
        words = re.sub(r"[-_]", " ", base).lower().split(" ")
        return " ".join(word[:1].upper() + word[1:] for word in words)

    def file_name_for(self, title: str) -> str:
        """标题 → 输出文件名（空白换为下划线）"""
        return re.sub(r"\s", "_", title) + self.spec.file_suffix
