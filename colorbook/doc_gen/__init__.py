"""
文档生成模块 - 上色页报告排版与导出

子模块：
- geometry: 页面几何
- image_fitter: 图像等比适配
- tokenizer: 富文本分词（列表/强调）
- line_wrapper: 贪心折行
- table_paginator: 表格分页（重复表头）
- colors: 十六进制颜色解析
- text_metrics: 文本测量
- derivation: 派生字段计算
- assembler: 三段文档组装
- pdf_engine: PDF导出引擎
"""

from .assembler import DocumentAssembler
from .colors import parse_hex
from .derivation import DerivationEngine
from .geometry import orientation_for, resolve
from .image_fitter import fit, fit_bitmap
from .line_wrapper import wrap_line
from .pdf_engine import PDFExporter
from .table_paginator import TableLayout, TablePaginator
from .text_metrics import FontMetrics
from .tokenizer import split_instructions, tokenize

__all__ = [
    "DocumentAssembler",
    "DerivationEngine",
    "PDFExporter",
    "FontMetrics",
    "TableLayout",
    "TablePaginator",
    "fit",
    "fit_bitmap",
    "orientation_for",
    "parse_hex",
    "resolve",
    "split_instructions",
    "tokenize",
    "wrap_line",
]
