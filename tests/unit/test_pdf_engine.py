"""
PDF导出单元测试

每个模块完成后必须运行：pytest tests/unit/test_pdf_engine.py -v
"""

from pathlib import Path

import pytest

from colorbook.config import LayoutSpec
from colorbook.doc_gen import DocumentAssembler, PDFExporter
from colorbook.interfaces import ExportError
from colorbook.models import Bitmap, ReportContext, ReportDocument


def _count_pages(data: bytes) -> int:
    return data.count(b"/Type /Page") - data.count(b"/Type /Pages")


class TestPDFExporter:
    """PDF导出测试"""

    @pytest.fixture
    def exporter(self, spec: LayoutSpec) -> PDFExporter:
        return PDFExporter(spec, author="tester")

    @pytest.fixture
    def document(self, spec: LayoutSpec, report_context: ReportContext) -> ReportDocument:
        # 使用真实字体度量
        return DocumentAssembler(spec).assemble(report_context)

    def test_export_pdf(self, exporter: PDFExporter, document: ReportDocument, temp_dir: Path):
        """导出文件为有效PDF，不残留临时文件"""
        pdf_path = exporter.export(document, temp_dir / "out" / document.file_name)

        assert pdf_path.exists()
        data = pdf_path.read_bytes()
        assert data.startswith(b"%PDF")
        assert list(pdf_path.parent.glob("*.part")) == []

    def test_export_page_count(self, exporter: PDFExporter, document: ReportDocument):
        """页数与文档一致"""
        data = exporter.render_bytes(document)
        assert _count_pages(data) == document.page_count == 3

    def test_missing_image_fails(self, exporter: PDFExporter, document: ReportDocument, temp_dir: Path):
        """缺少位图时报 ExportError 且不留文件"""
        broken = document.model_copy(update={"images": {"cover": document.images["cover"]}})
        pdf_path = temp_dir / "broken.pdf"

        with pytest.raises(ExportError):
            exporter.export(broken, pdf_path)
        assert not pdf_path.exists()
        assert list(temp_dir.glob("*.part")) == []

    def test_image_without_pixels_fails(self, exporter: PDFExporter, document: ReportDocument, temp_dir: Path):
        images = dict(document.images)
        images["photo"] = Bitmap(width=300, height=400, name="photo")
        broken = document.model_copy(update={"images": images})

        with pytest.raises(ExportError):
            exporter.export(broken, temp_dir / "broken.pdf")

    def test_empty_document_fails(self, exporter: PDFExporter, document: ReportDocument):
        with pytest.raises(ExportError):
            exporter.render_bytes(document.model_copy(update={"pages": []}))

    def test_replaces_existing_file(self, exporter: PDFExporter, document: ReportDocument, temp_dir: Path):
        """目标已存在时整体替换"""
        pdf_path = temp_dir / document.file_name
        pdf_path.write_bytes(b"old")

        exporter.export(document, pdf_path)
        assert pdf_path.read_bytes().startswith(b"%PDF")
