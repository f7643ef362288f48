"""
文本测量 - 基于 reportlab 字体度量

排版算法只依赖 TextMeasure 能力 (文本, 是否强调) -> 宽度(英寸)，
生产环境由本模块提供，测试中可替换为等宽假实现。
"""

from __future__ import annotations

from reportlab.lib.units import inch
from reportlab.pdfbase import pdfmetrics


class FontMetrics:
    """reportlab 标准字体测量"""

    def __init__(self, regular_font: str, bold_font: str, font_size: float):
        self.regular_font = regular_font
        self.bold_font = bold_font
        self.font_size = font_size

    def font_for(self, emphasized: bool) -> str:
        return self.bold_font if emphasized else self.regular_font

    def __call__(self, text: str, emphasized: bool) -> float:
        return pdfmetrics.stringWidth(text, self.font_for(emphasized), self.font_size) / inch


def baseline(top: float, band: float, font_size: float) -> float:
    """在高度为band的行框内垂直居中大写字母时的基线位置"""
    cap_height = 0.7 * font_size / inch
    return top + (band + cap_height) / 2
