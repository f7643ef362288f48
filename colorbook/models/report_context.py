"""
报告生成上下文 - 文档组装模块的输入结构

组装模块只消费这个结构化数据，与图像获取/生成服务完全解耦
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from .content import Bitmap, ColorEntry
from .geometry import Orientation


class ReportParams(BaseModel):
    """报告参数（前端输入）"""

    photo_name: str | None = None           # 上传原图文件名，用于派生标题
    title: str | None = None                # 显式标题（优先于文件名）
    orientation: Orientation | None = None  # 显式方向（缺省按原图宽高比）


class DerivedFields(BaseModel):
    """派生字段（由规则计算）"""

    title: str | None = None
    file_name: str | None = None
    orientation: Orientation = Orientation.PORTRAIT


class ReportContext(BaseModel):
    """报告生成上下文（组装模块的唯一输入）"""

    params: ReportParams = Field(default_factory=ReportParams)

    # 派生字段
    derived: DerivedFields = Field(default_factory=DerivedFields)

    # 外部协作方产出
    cover: Bitmap
    photo: Bitmap
    instructions: str = ""
    colors: list[ColorEntry] = Field(default_factory=list)

    # 生成选项
    options: dict[str, Any] = Field(default_factory=dict)
