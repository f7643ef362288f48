"""
模块接口契约 - 定义各模块的抽象接口与异常

设计原则：
1. 模块间通过接口通信，不直接依赖具体实现
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换（测量函数/位图加载/PDF编码均可替换）

使用方式：
    from colorbook.interfaces import IPDFExporter

    class MyExporter(IPDFExporter):
        def export(self, document: ReportDocument, pdf_path: Path) -> Path:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Bitmap, ReportContext, ReportDocument


# 文本测量能力：(文本, 是否强调) -> 宽度（英寸）
TextMeasure = Callable[[str, bool], float]


# ============================================================================
# 位图加载接口
# ============================================================================

class IBitmapLoader(ABC):
    """位图加载器接口 - 解码外部提供的图像"""

    @abstractmethod
    def load(self, source: Path | bytes, name: str = "") -> Bitmap:
        """
        同步解码单张图像

        Args:
            source: 图像文件路径或原始字节
            name: 图像名（用于日志与报错）

        Returns:
            解码后的位图

        Raises:
            ImageUnavailable: 图像不存在或无法解码
        """
        ...

    @abstractmethod
    def load_all(self, sources: dict[str, Path | bytes]) -> dict[str, Bitmap]:
        """
        批量解码（可并行），每张图像的等待受超时约束

        Raises:
            ImageUnavailable: 任一图像不存在或无法解码
            DecodeTimeout: 任一图像解码超时
        """
        ...


# ============================================================================
# 文档生成模块接口
# ============================================================================

class IDocumentAssembler(ABC):
    """文档组装器接口 - 封面/指南/色卡三段排版"""

    @abstractmethod
    def assemble(
        self,
        ctx: ReportContext,
        cancel: Callable[[], bool] | None = None,
    ) -> ReportDocument:
        """
        组装完整文档（失败时整体中止，不返回半成品）

        Args:
            ctx: 报告生成上下文（派生字段已填充）
            cancel: 取消检查函数，在各段之间调用

        Returns:
            分页后的绘制指令文档

        Raises:
            InvalidGeometry / InvalidColorFormat / AssemblyCancelled
        """
        ...


class IPDFExporter(ABC):
    """PDF导出器接口"""

    @abstractmethod
    def export(self, document: ReportDocument, pdf_path: Path) -> Path:
        """将绘制指令文档编码为PDF"""
        ...


# ============================================================================
# 异常定义
# ============================================================================

class ColorbookError(Exception):
    """基础异常"""
    pass


class InvalidGeometry(ColorbookError):
    """几何错误（退化的框或宽高比）"""
    pass


class ImageUnavailable(ColorbookError):
    """图像不可用（不存在/无法解码）"""
    pass


class DecodeTimeout(ImageUnavailable):
    """图像解码超时"""
    pass


class InvalidColorFormat(ColorbookError):
    """颜色格式错误（非#RRGGBB）"""
    pass


class AssemblyCancelled(ColorbookError):
    """组装被取消"""
    pass


class GenerationError(ColorbookError):
    """生成错误（对外汇总的失败原因）"""
    pass


class ExportError(ColorbookError):
    """导出错误"""
    pass
