"""
折行器单元测试（等宽假测量：每字符 0.1 英寸）

每个模块完成后必须运行：pytest tests/unit/test_line_wrapper.py -v
"""

import pytest

from colorbook.doc_gen import tokenize, wrap_line
from colorbook.interfaces import InvalidGeometry

PANGRAM = "The quick brown fox jumps over the lazy dog"


class TestWrapLine:
    """贪心折行测试"""

    def test_greedy_breaks(self, fake_measure):
        """在词边界换行，续行去掉前导空白"""
        lines = list(wrap_line(tokenize(PANGRAM), fake_measure, max_width=1.0))

        assert [line.text for line in lines] == [
            "The quick",
            "brown fox",
            "jumps over",
            "the lazy",
            "dog",
        ]
        assert [line.first for line in lines] == [True, False, False, False, False]

    @pytest.mark.parametrize("max_width", [0.8, 1.0, 1.7, 2.5, 10.0])
    def test_wrap_width_bound(self, fake_measure, max_width: float):
        """除超长单词行外，每行宽度不超过 max_width"""
        for line in wrap_line(tokenize(PANGRAM), fake_measure, max_width=max_width):
            assert line.width <= max_width + 1e-9

    def test_words_preserved(self, fake_measure):
        """以单空格重新拼接各行 == 原文"""
        lines = wrap_line(tokenize(PANGRAM), fake_measure, max_width=1.3)
        assert " ".join(line.text for line in lines) == PANGRAM

    def test_oversized_token_alone(self, fake_measure):
        """超长单词独占一行，不截断"""
        word = "supercalifragilisticexpialidocious"
        lines = list(wrap_line(tokenize(f"a {word} b"), fake_measure, max_width=1.0))

        assert [line.text for line in lines] == ["a", word, "b"]
        assert lines[1].width == pytest.approx(len(word) * 0.1)

    def test_bullet_indent(self, fake_measure):
        """首行与续行都从缩进位置开始"""
        lines = list(wrap_line(tokenize(PANGRAM), fake_measure, max_width=1.2, indent=0.2))

        assert len(lines) == 5
        for line in lines:
            assert line.segments[0].x_offset == pytest.approx(0.2)

    def test_emphasis_segments(self, fake_measure):
        """强调状态切换处分段，x_offset 连续"""
        (line,) = wrap_line(tokenize("- **Leaves:** Use green."), fake_measure, max_width=5.0)

        assert [(s.text, s.emphasized) for s in line.segments] == [
            ("Leaves:", True),
            (" Use green.", False),
        ]
        assert line.segments[0].x_offset == 0.0
        assert line.segments[1].x_offset == pytest.approx(0.7)
        assert line.width == pytest.approx(1.8)

    def test_emphasis_across_break(self, fake_measure):
        """强调段跨行时两行都保留强调"""
        lines = list(wrap_line(tokenize("**bold words here**"), fake_measure, max_width=1.0))

        assert [line.text for line in lines] == ["bold words", "here"]
        assert all(seg.emphasized for line in lines for seg in line.segments)

    def test_empty_line_yields_once(self, fake_measure):
        lines = list(wrap_line(tokenize(""), fake_measure, max_width=1.0))
        assert len(lines) == 1
        assert lines[0].segments == []

    @pytest.mark.parametrize("max_width,indent", [(0.0, 0.0), (0.2, 0.2), (-1.0, 0.0)])
    def test_no_room(self, fake_measure, max_width: float, indent: float):
        """可用宽度非正时报 InvalidGeometry"""
        with pytest.raises(InvalidGeometry):
            list(wrap_line(tokenize("text"), fake_measure, max_width=max_width, indent=indent))
