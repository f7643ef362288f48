"""
页面几何与图像适配单元测试

每个模块完成后必须运行：pytest tests/unit/test_geometry.py -v
"""

import pytest

from colorbook.config import LayoutSpec
from colorbook.doc_gen import fit, fit_bitmap, orientation_for, resolve
from colorbook.interfaces import InvalidGeometry
from colorbook.models import Bitmap, Box, Orientation


class TestResolve:
    """页面几何解析测试"""

    def test_portrait(self, spec: LayoutSpec):
        geometry = resolve(Orientation.PORTRAIT, spec)

        assert (geometry.width, geometry.height, geometry.margin) == (8.5, 11.0, 0.5)
        assert geometry.orientation == Orientation.PORTRAIT

    def test_landscape_from_string(self, spec: LayoutSpec):
        geometry = resolve("landscape", spec)

        assert (geometry.width, geometry.height) == (11.0, 8.5)
        assert geometry.content_width == 10.0

    @pytest.mark.parametrize(
        "width,height,expected",
        [
            (1600, 900, Orientation.LANDSCAPE),
            (900, 1600, Orientation.PORTRAIT),
            (1000, 1000, Orientation.PORTRAIT),  # 正方形按纵向
        ],
    )
    def test_orientation_for(self, width: int, height: int, expected: Orientation):
        assert orientation_for(width, height) == expected


class TestImageFitter:
    """图像等比适配测试"""

    BOX = Box(x=0.5, y=1.0, width=6.0, height=4.0)

    @pytest.mark.parametrize("aspect", [0.25, 0.75, 1.0, 1.5, 2.0, 4.0])
    def test_fit_within_box_and_preserves_aspect(self, aspect: float):
        """结果在框内、宽高比不变、至少一边贴合"""
        placed = fit(aspect, self.BOX)

        assert self.BOX.contains(placed)
        assert placed.width / placed.height == pytest.approx(aspect)
        assert (
            placed.width == pytest.approx(self.BOX.width)
            or placed.height == pytest.approx(self.BOX.height)
        )

    def test_wider_source_centered_vertically(self):
        """源更宽：宽度贴合，垂直居中"""
        placed = fit(3.0, self.BOX)

        assert placed.width == pytest.approx(6.0)
        assert placed.height == pytest.approx(2.0)
        assert placed.x == pytest.approx(0.5)
        assert placed.y == pytest.approx(2.0)

    def test_taller_source_centered_horizontally(self):
        """源更高：高度贴合，水平居中"""
        placed = fit(0.5, self.BOX)

        assert placed.height == pytest.approx(4.0)
        assert placed.width == pytest.approx(2.0)
        assert placed.x == pytest.approx(2.5)
        assert placed.y == pytest.approx(1.0)

    def test_top_alignment(self):
        """顶对齐时 y 等于框顶"""
        placed = fit(3.0, self.BOX, valign="top")
        assert placed.y == pytest.approx(self.BOX.y)

    @pytest.mark.parametrize(
        "box",
        [Box(x=0, y=0, width=0, height=3), Box(x=0, y=0, width=3, height=-1)],
    )
    def test_degenerate_box(self, box: Box):
        """退化框报 InvalidGeometry"""
        with pytest.raises(InvalidGeometry):
            fit(1.0, box)

    def test_degenerate_bitmap(self):
        with pytest.raises(InvalidGeometry):
            fit_bitmap(Bitmap(width=0, height=10), self.BOX)
