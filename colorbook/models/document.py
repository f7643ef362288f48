"""
文档模型 - 分页绘制指令

排版结果按页保存绘制指令，交由PDF编码器输出最终文件：
- place_image: 放置位图
- text_run:    指南折行中的一段（按强调选择字重）
- text_line:   独立文字行（标题/表头/单元格，可对齐）
- fill_rect:   填充矩形（色卡色块）
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .content import Bitmap
from .geometry import Box, PageGeometry

RGB = tuple[int, int, int]


class PlaceImage(BaseModel):
    """放置位图"""
    kind: Literal["place_image"] = "place_image"
    image_key: str
    box: Box


class DrawTextRun(BaseModel):
    """绘制富文本段"""
    kind: Literal["text_run"] = "text_run"
    text: str
    x: float
    y: float                       # 基线
    font_size: float
    emphasized: bool = False


class DrawTextLine(BaseModel):
    """绘制独立文字行"""
    kind: Literal["text_line"] = "text_line"
    text: str
    x: float                       # align=center 时为中心点
    y: float                       # 基线
    font_size: float
    bold: bool = False
    align: Literal["left", "center"] = "left"


class FillRect(BaseModel):
    """填充矩形"""
    kind: Literal["fill_rect"] = "fill_rect"
    box: Box
    color: RGB


DrawCommand = Annotated[
    Union[PlaceImage, DrawTextRun, DrawTextLine, FillRect],
    Field(discriminator="kind"),
]


class Page(BaseModel):
    """单页"""
    index: int
    commands: list[DrawCommand] = Field(default_factory=list)

    def find(self, kind: str) -> list[DrawCommand]:
        """按类型筛选指令"""
        return [c for c in self.commands if c.kind == kind]


class ReportDocument(BaseModel):
    """排版完成的报告文档"""
    title: str
    file_name: str
    geometry: PageGeometry
    pages: list[Page] = Field(default_factory=list)
    images: dict[str, Bitmap] = Field(default_factory=dict)

    # 告警标记（不中断）
    flags: list[str] = Field(default_factory=list)

    # 各段起始页序号
    sections: dict[str, int] = Field(default_factory=dict)

    @property
    def page_count(self) -> int:
        return len(self.pages)
