"""
流水线模块 - 任务编排与执行

子模块：
- stages: 流水线各阶段定义
- ingest: 位图解码与色卡读取
- executor: 流水线执行器
- manifest: manifest生成
"""

from .executor import ReportExecutor
from .ingest import BitmapLoader, load_colors
from .manifest import ManifestWriter
from .stages import REPORT_STAGES, PipelineStage, StageEnum

__all__ = [
    "PipelineStage",
    "StageEnum",
    "REPORT_STAGES",
    "BitmapLoader",
    "load_colors",
    "ReportExecutor",
    "ManifestWriter",
]
