"""
流水线阶段定义

职责：
1. 定义各阶段的名称与进度区间
2. 执行器按阶段名分派
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StageEnum(str, Enum):
    """流水线阶段枚举"""
    INGEST = "INGEST"
    DERIVE = "DERIVE"
    ASSEMBLE = "ASSEMBLE"
    EXPORT_PDF = "EXPORT_PDF"
    MANIFEST = "MANIFEST"


@dataclass
class PipelineStage:
    """流水线阶段"""
    name: str
    progress_start: int  # 进度起点（0-100）
    progress_end: int    # 进度终点


# 报告生成流水线各阶段配置
REPORT_STAGES: list[PipelineStage] = [
    PipelineStage(StageEnum.INGEST.value, 0, 30),
    PipelineStage(StageEnum.DERIVE.value, 30, 35),
    PipelineStage(StageEnum.ASSEMBLE.value, 35, 70),
    PipelineStage(StageEnum.EXPORT_PDF.value, 70, 95),
    PipelineStage(StageEnum.MANIFEST.value, 95, 100),
]
