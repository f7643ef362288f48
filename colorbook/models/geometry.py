"""
几何模型 - 纸张/放置框/写入游标

坐标约定：单位英寸，原点为页面左上角，y 轴向下
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, model_validator

from ..interfaces import InvalidGeometry


class Orientation(str, Enum):
    """纸张方向"""
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class PageGeometry(BaseModel):
    """页面几何（一份文档内不可变）"""
    width: float
    height: float
    margin: float
    orientation: Orientation = Orientation.PORTRAIT

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_margin(self) -> PageGeometry:
        if not (0 <= self.margin < self.width / 2 and self.margin < self.height / 2):
            # 非 ValueError，pydantic 原样抛出
            raise InvalidGeometry(
                f"页边距超出范围: margin={self.margin}, page={self.width}x{self.height}"
            )
        return self

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def content_height(self) -> float:
        return self.height - 2 * self.margin

    @property
    def top(self) -> float:
        return self.margin

    @property
    def bottom(self) -> float:
        """内容区下边界"""
        return self.height - self.margin

    def content_box(self) -> Box:
        """内容区"""
        return Box(x=self.margin, y=self.margin, width=self.content_width, height=self.content_height)


class Box(BaseModel):
    """放置框"""
    x: float
    y: float
    width: float
    height: float

    model_config = {"frozen": True}

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, other: Box, tol: float = 1e-6) -> bool:
        """判断other是否完全位于本框内"""
        return (
            other.x >= self.x - tol
            and other.y >= self.y - tol
            and other.right <= self.right + tol
            and other.bottom <= self.bottom + tol
        )


class Cursor(BaseModel):
    """写入位置（页序号 + 当前y）；按值传递，每次移动返回新游标"""
    page: int = 0
    y: float = 0.0

    model_config = {"frozen": True}

    def advance(self, dy: float) -> Cursor:
        return Cursor(page=self.page, y=self.y + dy)

    def next_page(self, top: float) -> Cursor:
        """换页：页序号+1，y 回到上边距"""
        return Cursor(page=self.page + 1, y=top)
