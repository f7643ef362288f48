"""
内容模型 - 位图/富文本/色卡条目

位图与色卡由外部协作方提供，排版模块只读取
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from ..interfaces import InvalidGeometry


class Bitmap(BaseModel):
    """已解码的位图（排版只关心宽高比，像素源透传给编码器）"""
    width: int
    height: int
    source: Any = Field(default=None, repr=False, exclude=True)
    name: str = ""

    model_config = {"arbitrary_types_allowed": True}

    @property
    def aspect_ratio(self) -> float:
        if self.width <= 0 or self.height <= 0:
            raise InvalidGeometry(f"位图尺寸无效: {self.name} {self.width}x{self.height}")
        return self.width / self.height


class TextSpan(BaseModel):
    """同一强调状态的连续文本"""
    text: str
    emphasized: bool = False

    model_config = {"frozen": True}


class SourceLine(BaseModel):
    """一行源文本（列表标记 + 文本段）"""
    is_bullet: bool = False
    spans: list[TextSpan] = Field(default_factory=list)

    @property
    def plain_text(self) -> str:
        """去掉强调标记后的内容"""
        return "".join(span.text for span in self.spans)


class GuideLineKind(str, Enum):
    """指南行类型"""
    INTRO = "intro"      # 首行引言（非列表）
    BULLET = "bullet"
    PROSE = "prose"


class GuideLine(BaseModel):
    """指南中的一行（带类型）"""
    kind: GuideLineKind
    line: SourceLine


class LineSegment(BaseModel):
    """排版后一行中的一段"""
    text: str
    emphasized: bool = False
    x_offset: float
    width: float


class RenderedLine(BaseModel):
    """折行结果中的一行"""
    segments: list[LineSegment] = Field(default_factory=list)
    width: float = 0.0           # 行尾累计x（含缩进）
    first: bool = True           # 是否为源行的第一行

    @property
    def text(self) -> str:
        return "".join(seg.text for seg in self.segments)


class ColorEntry(BaseModel):
    """色卡条目（兼容生成服务的JSON字段名）"""
    number: str = ""
    picture_part: str = Field("", alias="picturePart")
    hex_code: str = Field(..., alias="hex")
    reference_color_name: str = Field("", alias="fbPencilColor")
    reference_color_id: str = Field("", alias="fbNumber")
    swatch_color: str | None = Field(None, description="色块颜色，缺省取hex_code")

    # 生成服务的 number/fbNumber 可能是数字
    model_config = {"frozen": True, "populate_by_name": True, "coerce_numbers_to_str": True}

    @property
    def swatch_hex(self) -> str:
        return self.swatch_color or self.hex_code
