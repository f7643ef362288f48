"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- PageGeometry/Box/Cursor: 页面几何与写入位置
- Bitmap/SourceLine/RenderedLine/ColorEntry: 排版输入与中间结果
- ReportDocument: 分页绘制指令（排版输出）
- ReportContext: 报告生成上下文
- ReportJob: 任务状态与生命周期
"""

from .content import (
    Bitmap,
    ColorEntry,
    GuideLine,
    GuideLineKind,
    LineSegment,
    RenderedLine,
    SourceLine,
    TextSpan,
)
from .document import (
    DrawCommand,
    DrawTextLine,
    DrawTextRun,
    FillRect,
    Page,
    PlaceImage,
    ReportDocument,
)
from .geometry import Box, Cursor, Orientation, PageGeometry
from .job import JobArtifacts, JobInputs, JobProgress, JobStatus, ReportJob
from .report_context import DerivedFields, ReportContext, ReportParams

__all__ = [
    "Orientation",
    "PageGeometry",
    "Box",
    "Cursor",
    "Bitmap",
    "TextSpan",
    "SourceLine",
    "GuideLine",
    "GuideLineKind",
    "LineSegment",
    "RenderedLine",
    "ColorEntry",
    "DrawCommand",
    "PlaceImage",
    "DrawTextRun",
    "DrawTextLine",
    "FillRect",
    "Page",
    "ReportDocument",
    "ReportParams",
    "DerivedFields",
    "ReportContext",
    "ReportJob",
    "JobInputs",
    "JobArtifacts",
    "JobProgress",
    "JobStatus",
]
