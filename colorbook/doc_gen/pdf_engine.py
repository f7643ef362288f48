"""
PDF导出引擎 - 绘制指令文档编码为PDF

职责：
1. 逐页回放绘制指令（位图/文字/填充矩形）
2. 坐标换算：英寸、左上原点 → pt、左下原点
3. 先写临时文件再改名，失败时不留下半成品

依赖：
- reportlab: canvas 绘制与 ImageReader

测试要点：
- test_export_pdf: 导出文件为有效PDF
- test_export_page_count: 页数与文档一致
- test_missing_image_fails: 缺少位图时报 ExportError 且不留文件
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import IO

from reportlab.lib.units import inch
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..config import LayoutSpec, get_config, load_spec
from ..interfaces import ExportError, IPDFExporter
from ..models import DrawCommand, ReportDocument

logger = logging.getLogger(__name__)


class PDFExporter(IPDFExporter):
    """PDF导出器实现"""

    def __init__(self, spec: LayoutSpec | None = None, author: str | None = None):
        self.spec = spec or load_spec()
        self.author = author or get_config().output.pdf_author

    def export(self, document: ReportDocument, pdf_path: Path) -> Path:
        """导出PDF文件"""
        pdf_path.parent.mkdir(parents=True, exist_ok=True)
        part_path = pdf_path.with_name(pdf_path.name + ".part")

        try:
            with open(part_path, "wb") as f:
                self._write(document, f)
            part_path.replace(pdf_path)
        except ExportError:
            part_path.unlink(missing_ok=True)
            raise
        except Exception as e:
            part_path.unlink(missing_ok=True)
            raise ExportError(f"PDF写出失败: {pdf_path}: {e}") from e

        logger.info(f"PDF已导出: {pdf_path} ({document.page_count}页)")
        return pdf_path

    def render_bytes(self, document: ReportDocument) -> bytes:
        """导出为内存字节"""
        buf = io.BytesIO()
        self._write(document, buf)
        return buf.getvalue()

    def _write(self, document: ReportDocument, target: IO[bytes]) -> None:
        if not document.pages:
            raise ExportError("文档没有任何页面")

        geometry = document.geometry
        page_h = geometry.height * inch

        pdf = canvas.Canvas(target, pagesize=(geometry.width * inch, page_h))
        pdf.setTitle(document.title)
        pdf.setAuthor(self.author)

        readers = {
            key: ImageReader(bitmap.source)
            for key, bitmap in document.images.items()
            if bitmap.source is not None
        }

        for page in document.pages:
            for command in page.commands:
                self._draw(pdf, command, page_h, readers)
            pdf.showPage()

        pdf.save()

    def _draw(
        self,
        pdf: canvas.Canvas,
        command: DrawCommand,
        page_h: float,
        readers: dict[str, ImageReader],
    ) -> None:
        """回放单条指令"""
        fonts = self.spec.fonts

        if command.kind == "place_image":
            reader = readers.get(command.image_key)
            if reader is None:
                raise ExportError(f"缺少位图: {command.image_key}")
            box = command.box
            pdf.drawImage(
                reader,
                box.x * inch,
                page_h - box.bottom * inch,
                width=box.width * inch,
                height=box.height * inch,
                mask="auto",
            )

        elif command.kind == "text_run":
            pdf.setFillColorRGB(0, 0, 0)
            pdf.setFont(fonts.bold if command.emphasized else fonts.regular, command.font_size)
            pdf.drawString(command.x * inch, page_h - command.y * inch, command.text)

        elif command.kind == "text_line":
            pdf.setFillColorRGB(0, 0, 0)
            pdf.setFont(fonts.bold if command.bold else fonts.regular, command.font_size)
            if command.align == "center":
                pdf.drawCentredString(command.x * inch, page_h - command.y * inch, command.text)
            else:
                pdf.drawString(command.x * inch, page_h - command.y * inch, command.text)

        elif command.kind == "fill_rect":
            r, g, b = command.color
            box = command.box
            pdf.setFillColorRGB(r / 255, g / 255, b / 255)
            pdf.rect(
                box.x * inch,
                page_h - box.bottom * inch,
                box.width * inch,
                box.height * inch,
                stroke=0,
                fill=1,
            )

        else:
            raise ExportError(f"未知绘制指令: {command.kind}")
