"""
页面几何 - 按方向解析纸张尺寸与页边距

依赖：
- report_layout.yaml: page.portrait / page.landscape / page.margin
"""

from __future__ import annotations

from ..config import LayoutSpec, load_spec
from ..models import Orientation, PageGeometry


def orientation_for(width: float, height: float) -> Orientation:
    """按原图宽高判断方向：宽 > 高 为横向"""
    return Orientation.LANDSCAPE if width > height else Orientation.PORTRAIT


def resolve(orientation: Orientation | str, spec: LayoutSpec | None = None) -> PageGeometry:
    """解析页面几何"""
    spec = spec or load_spec()
    orientation = Orientation(orientation)
    size = spec.get_page_size(orientation.value)
    return PageGeometry(
        width=size.width,
        height=size.height,
        margin=spec.page.margin,
        orientation=orientation,
    )
