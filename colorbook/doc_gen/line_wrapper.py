"""
折行器 - 贪心填充富文本行

职责：
1. 按测量函数逐词累计x，放不下时换行并回到行首缩进
2. 以"前导空白+单词"为最小单位填充，而非整段文本段：
   一个文本段可跨行拆开，每行宽度因此不超过 max_width；
   同一行内相邻且强调相同的词合并回一个段
3. 单词自身超过可用宽度时独占一行（不做断字）

折行器不感知分页：以生成器逐行产出，由调用方在每行后判断是否换页。

测试要点：
- test_wrap_width_bound: 除超长单词行外，每行累计宽度不超过 max_width
- test_oversized_token_alone: 超长单词独占一行
- test_bullet_indent: 续行回到缩进位置
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from ..interfaces import InvalidGeometry, TextMeasure
from ..models import LineSegment, RenderedLine, SourceLine

# 前导空白 + 单词，或纯空白
_TOKEN_RE = re.compile(r"\s*\S+|\s+")

EPSILON = 1e-9


def _tokens(line: SourceLine) -> Iterator[tuple[str, bool]]:
    for span in line.spans:
        for match in _TOKEN_RE.finditer(span.text):
            yield match.group(0), span.emphasized


def wrap_line(
    line: SourceLine,
    measure: TextMeasure,
    max_width: float,
    indent: float = 0.0,
) -> Iterator[RenderedLine]:
    """
    将一行源文本折成若干渲染行

    Args:
        line: 分词后的源行
        measure: (文本, 是否强调) -> 宽度
        max_width: 行宽上限（含缩进）
        indent: 行首缩进（列表项为列表缩进，否则为0）

    Yields:
        RenderedLine，segments 的 x_offset 已含缩进
    """
    if max_width - indent <= 0:
        raise InvalidGeometry(f"可用行宽无效: max_width={max_width}, indent={indent}")

    segments: list[LineSegment] = []
    x = indent
    first = True

    for text, emphasized in _tokens(line):
        width = measure(text, emphasized)

        if segments and x + width > max_width + EPSILON:
            yield RenderedLine(segments=segments, width=x, first=first)
            segments, x, first = [], indent, False

        if not segments and not first:
            # 续行不保留前导空白
            stripped = text.lstrip()
            if not stripped:
                continue
            if stripped != text:
                text, width = stripped, measure(stripped, emphasized)

        last = segments[-1] if segments else None
        if last is not None and last.emphasized == emphasized:
            segments[-1] = LineSegment(
                text=last.text + text,
                emphasized=emphasized,
                x_offset=last.x_offset,
                width=last.width + width,
            )
        else:
            segments.append(LineSegment(text=text, emphasized=emphasized, x_offset=x, width=width))
        x += width

    if segments or first:
        yield RenderedLine(segments=segments, width=x, first=first)
