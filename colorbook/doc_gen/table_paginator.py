"""
表格分页器 - 固定列宽表格，跨页重复表头

职责：
1. 先绘制表头，再逐行绘制
2. 每行之前检查剩余高度（bottom - y < row_height 时换页）
3. 换页后在新页顶部重绘表头，再继续输出行

保证：含有本表数据行的每一页，本表在该页的第一项内容都是表头。

测试要点：
- test_header_per_page: P 页恰好 P 次表头
- test_break_after_crossing_row: 在越界行之前换页
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

from pydantic import BaseModel

from ..models import Cursor, PageGeometry

Row = TypeVar("Row")

EPSILON = 1e-6


class TableLayout(BaseModel):
    """表格列定义"""
    headers: list[str]
    column_widths: list[float]
    x: float = 0.0

    def column_x(self, index: int) -> float:
        """第index列左边界"""
        return self.x + sum(self.column_widths[:index])


class TablePaginator(Generic[Row]):
    """表格分页器"""

    def __init__(self, geometry: PageGeometry, header_height: float, row_height: float):
        self.geometry = geometry
        self.header_height = header_height
        self.row_height = row_height

    def has_room(self, cursor: Cursor, height: float) -> bool:
        """当前页剩余高度是否放得下"""
        return self.geometry.bottom - cursor.y >= height - EPSILON

    def render_table(
        self,
        table: TableLayout,
        rows: Sequence[Row],
        cursor: Cursor,
        *,
        page_break: Callable[[Cursor], Cursor],
        draw_header: Callable[[TableLayout, Cursor], None],
        draw_row: Callable[[TableLayout, Row, Cursor], None],
    ) -> Cursor:
        """
        绘制整张表

        Args:
            table: 列定义
            rows: 数据行
            cursor: 起始位置（行框顶部）
            page_break: 换页回调，返回新页游标
            draw_header: 表头绘制回调
            draw_row: 数据行绘制回调

        Returns:
            表格结束后的游标
        """
        # 表头后至少要能放一行
        if rows and not self.has_room(cursor, self.header_height + self.row_height):
            cursor = page_break(cursor)

        cursor = self._header(table, cursor, draw_header)

        for row in rows:
            if not self.has_room(cursor, self.row_height):
                cursor = page_break(cursor)
                cursor = self._header(table, cursor, draw_header)
            draw_row(table, row, cursor)
            cursor = cursor.advance(self.row_height)

        return cursor

    def _header(
        self,
        table: TableLayout,
        cursor: Cursor,
        draw_header: Callable[[TableLayout, Cursor], None],
    ) -> Cursor:
        draw_header(table, cursor)
        return cursor.advance(self.header_height)
