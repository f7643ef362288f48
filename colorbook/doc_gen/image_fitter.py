"""
图像适配 - 保持宽高比将位图缩放到目标框内并居中

算法：
1. 比较源宽高比与框宽高比
2. 源更宽 → 宽度贴合框宽，高度按比例推算；否则高度贴合框高
3. 在框内水平居中；垂直方向居中或顶对齐

测试要点：
- test_fit_within_box: 结果不超出目标框
- test_fit_preserves_aspect: 宽高比保持
- test_degenerate_box: 退化框报 InvalidGeometry
"""

from __future__ import annotations

from typing import Literal

from ..interfaces import InvalidGeometry
from ..models import Bitmap, Box


def fit(
    source_aspect_ratio: float,
    box: Box,
    valign: Literal["center", "top"] = "center",
) -> Box:
    """计算位图在目标框内的放置框"""
    if box.width <= 0 or box.height <= 0:
        raise InvalidGeometry(f"目标框退化: {box.width}x{box.height}")
    if source_aspect_ratio <= 0:
        raise InvalidGeometry(f"源宽高比无效: {source_aspect_ratio}")

    if source_aspect_ratio > box.width / box.height:
        final_w = box.width
        final_h = final_w / source_aspect_ratio
    else:
        final_h = box.height
        final_w = final_h * source_aspect_ratio

    x = box.x + (box.width - final_w) / 2
    y = box.y if valign == "top" else box.y + (box.height - final_h) / 2
    return Box(x=x, y=y, width=final_w, height=final_h)


def fit_bitmap(bitmap: Bitmap, box: Box, valign: Literal["center", "top"] = "center") -> Box:
    """按位图尺寸适配（尺寸<=0 报 InvalidGeometry）"""
    return fit(bitmap.aspect_ratio, box, valign=valign)
