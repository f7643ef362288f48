"""
富文本分词 - 列表标记 + **强调** 的两遍扫描

职责：
1. 第一遍：识别并剥离列表标记（'-' 或 '*' 后跟空白或行尾）
2. 第二遍：有限状态扫描 '**' 定界符，切分为普通/强调文本段
3. 指南整体切行：去空行，首行非列表时作为引言

规则：
- 成对的 '**...**'（非贪婪）内为一个强调段
- 未闭合的 '**' 按字面文本保留
- 零长度文本段省略，相邻普通段合并

测试要点：
- test_bullet_with_emphasis: "- **Leaves:** Use green."
- test_unmatched_delimiter: 奇数个 '**' 按字面
- test_content_round_trip: 拼接文本段 == 去标记原文
"""

from __future__ import annotations

from enum import Enum

from ..models import GuideLine, GuideLineKind, SourceLine, TextSpan

BULLET_MARKERS = ("-", "*")
DELIMITER = "**"


class _ScanState(str, Enum):
    PLAIN = "plain"
    EMPHASIS = "emphasis"


def strip_bullet(raw_line: str) -> tuple[bool, str]:
    """第一遍：剥离列表标记，返回 (是否列表项, 剩余文本)"""
    text = raw_line.lstrip()
    if text[:1] in BULLET_MARKERS and (len(text) == 1 or text[1].isspace()):
        # 标记 + 一个分隔符
        return True, text[2:]
    return False, text


def scan_emphasis(text: str) -> list[TextSpan]:
    """第二遍：按 '**' 定界符切分文本段"""
    spans: list[TextSpan] = []
    state = _ScanState.PLAIN
    buf: list[str] = []
    i = 0

    while i < len(text):
        if text.startswith(DELIMITER, i):
            _append(spans, "".join(buf), emphasized=state == _ScanState.EMPHASIS)
            buf = []
            state = _ScanState.PLAIN if state == _ScanState.EMPHASIS else _ScanState.EMPHASIS
            i += len(DELIMITER)
            continue
        buf.append(text[i])
        i += 1

    if state == _ScanState.EMPHASIS:
        # 未闭合：定界符与其后文本按字面处理
        _append(spans, DELIMITER + "".join(buf), emphasized=False)
    else:
        _append(spans, "".join(buf), emphasized=False)

    return spans


def _append(spans: list[TextSpan], text: str, emphasized: bool) -> None:
    if not text:
        return
    if spans and not emphasized and not spans[-1].emphasized:
        spans[-1] = TextSpan(text=spans[-1].text + text, emphasized=False)
        return
    spans.append(TextSpan(text=text, emphasized=emphasized))


def tokenize(raw_line: str) -> SourceLine:
    """解析单行"""
    is_bullet, rest = strip_bullet(raw_line)
    return SourceLine(is_bullet=is_bullet, spans=scan_emphasis(rest))


def split_instructions(raw_text: str) -> list[GuideLine]:
    """
    切分整段指南

    去掉空白行；仅当第一行不是列表项时将其视为引言段，
    其余非列表行按普通正文处理。
    """
    lines = [line for line in raw_text.splitlines() if line.strip()]

    result: list[GuideLine] = []
    for index, raw in enumerate(lines):
        source = tokenize(raw)
        if source.is_bullet:
            kind = GuideLineKind.BULLET
        elif index == 0:
            kind = GuideLineKind.INTRO
        else:
            kind = GuideLineKind.PROSE
        result.append(GuideLine(kind=kind, line=source))
    return result
