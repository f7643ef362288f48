"""
文档组装器 - 封面/上色指南/色卡三段排版

职责：
1. 按方向解析页面几何
2. 封面：标题 + 线稿（单页，适配内容区）
3. 指南：原图缩略图 + 标题 + 富文本折行（可跨页）
4. 色卡：标题 + 表格（跨页重复表头）
5. 各段之间检查取消；任一步失败整体中止，不产出半成品

写入游标按值在各步骤之间传递，不共享可变状态。

依赖：
- report_layout.yaml: 各段版式参数
- reportlab: 文本测量（可注入替换）

测试要点：
- test_three_sections_in_order: 封面→指南→色卡
- test_guide_paginates: 指南超长时换页
- test_key_header_repeats: 色卡跨页重复表头
- test_invalid_hex_aborts: 颜色格式错误时整体失败
- test_empty_inputs_flagged: 空指南/空色卡仅打标记
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from functools import partial

from ..config import LayoutSpec, load_spec
from ..interfaces import AssemblyCancelled, IDocumentAssembler, TextMeasure
from ..models import (
    Box,
    ColorEntry,
    Cursor,
    DrawCommand,
    DrawTextLine,
    DrawTextRun,
    FillRect,
    GuideLine,
    GuideLineKind,
    Page,
    PageGeometry,
    PlaceImage,
    ReportContext,
    ReportDocument,
)
from .colors import parse_hex
from .geometry import resolve
from .image_fitter import fit_bitmap
from .line_wrapper import wrap_line
from .table_paginator import EPSILON, TableLayout, TablePaginator
from .text_metrics import FontMetrics, baseline
from .tokenizer import split_instructions

logger = logging.getLogger(__name__)

COVER_IMAGE = "cover"
PHOTO_IMAGE = "photo"

FLAG_EMPTY_GUIDE = "EmptyInput:guide"
FLAG_EMPTY_KEY = "EmptyInput:key"

KeyRow = tuple[ColorEntry, tuple[int, int, int]]


class _PageBuffer:
    """单次组装独占的页缓冲"""

    def __init__(self, geometry: PageGeometry):
        self.geometry = geometry
        self.pages: list[Page] = [Page(index=0)]

    def emit(self, cursor: Cursor, command: DrawCommand) -> None:
        self.pages[cursor.page].commands.append(command)

    def page_break(self, cursor: Cursor) -> Cursor:
        self.pages.append(Page(index=len(self.pages)))
        return cursor.next_page(self.geometry.top)

    def has_room(self, cursor: Cursor, height: float) -> bool:
        return self.geometry.bottom - cursor.y >= height - EPSILON


class DocumentAssembler(IDocumentAssembler):
    """文档组装器实现"""

    def __init__(self, spec: LayoutSpec | None = None, measure: TextMeasure | None = None):
        self.spec = spec or load_spec()
        self.measure = measure or FontMetrics(
            self.spec.fonts.regular,
            self.spec.fonts.bold,
            self.spec.guide.font_size,
        )

    def assemble(
        self,
        ctx: ReportContext,
        cancel: Callable[[], bool] | None = None,
    ) -> ReportDocument:
        """组装完整文档"""
        geometry = resolve(ctx.derived.orientation, self.spec)

        # 颜色先行校验，格式错误直接中止
        rows = self._key_rows(ctx.colors)
        guide_lines = split_instructions(ctx.instructions)

        buffer = _PageBuffer(geometry)
        flags: list[str] = []
        sections: dict[str, int] = {}

        # 1. 封面
        self._check_cancel(cancel, "cover")
        cursor = Cursor(page=0, y=geometry.top)
        sections["cover"] = cursor.page
        cursor = self._layout_cover(buffer, ctx, cursor)

        # 2. 指南
        self._check_cancel(cancel, "guide")
        cursor = buffer.page_break(cursor)
        sections["guide"] = cursor.page
        cursor = self._layout_guide(buffer, ctx, guide_lines, cursor)
        if not guide_lines:
            flags.append(FLAG_EMPTY_GUIDE)

        # 3. 色卡
        self._check_cancel(cancel, "key")
        cursor = buffer.page_break(cursor)
        sections["key"] = cursor.page
        cursor = self._layout_key(buffer, rows, cursor)
        if not rows:
            flags.append(FLAG_EMPTY_KEY)

        logger.info(
            f"文档组装完成: {ctx.derived.title} 共{len(buffer.pages)}页 "
            f"(指南{len(guide_lines)}行, 色卡{len(rows)}行)"
        )

        return ReportDocument(
            title=ctx.derived.title or self.spec.default_title,
            file_name=ctx.derived.file_name or "",
            geometry=geometry,
            pages=buffer.pages,
            images={COVER_IMAGE: ctx.cover, PHOTO_IMAGE: ctx.photo},
            flags=flags,
            sections=sections,
        )

    # ------------------------------------------------------------------
    # 封面
    # ------------------------------------------------------------------

    def _layout_cover(self, buffer: _PageBuffer, ctx: ReportContext, cursor: Cursor) -> Cursor:
        geometry = buffer.geometry
        cover = self.spec.cover

        title = ctx.derived.title or self.spec.default_title
        buffer.emit(cursor, DrawTextLine(
            text=title,
            x=geometry.width / 2,
            y=baseline(cursor.y, cover.title_band, cover.title_size),
            font_size=cover.title_size,
            align="center",
        ))
        cursor = cursor.advance(cover.title_band)

        # 线稿占满标题下方的内容区
        box = Box(
            x=geometry.margin,
            y=cursor.y,
            width=geometry.content_width,
            height=geometry.bottom - cursor.y,
        )
        placed = fit_bitmap(ctx.cover, box)
        buffer.emit(cursor, PlaceImage(image_key=COVER_IMAGE, box=placed))
        return cursor.advance(box.height)

    # ------------------------------------------------------------------
    # 上色指南
    # ------------------------------------------------------------------

    def _layout_guide(
        self,
        buffer: _PageBuffer,
        ctx: ReportContext,
        lines: Sequence[GuideLine],
        cursor: Cursor,
    ) -> Cursor:
        geometry = buffer.geometry
        guide = self.spec.guide

        # 原图缩略图：长边固定，水平居中，顶对齐
        size = min(guide.thumbnail_max, geometry.content_width)
        box = Box(
            x=geometry.margin + (geometry.content_width - size) / 2,
            y=cursor.y,
            width=size,
            height=size,
        )
        placed = fit_bitmap(ctx.photo, box, valign="top")
        buffer.emit(cursor, PlaceImage(image_key=PHOTO_IMAGE, box=placed))
        cursor = cursor.advance(placed.height + guide.thumbnail_gap)

        cursor = self._heading(buffer, cursor, guide.heading, guide.heading_size, guide.heading_band)

        for guide_line in lines:
            is_bullet = guide_line.kind == GuideLineKind.BULLET
            indent = guide.bullet_indent if is_bullet else 0.0

            for rendered in wrap_line(guide_line.line, self.measure, geometry.content_width, indent):
                if not buffer.has_room(cursor, guide.line_height):
                    cursor = buffer.page_break(cursor)

                y = baseline(cursor.y, guide.line_height, guide.font_size)
                if is_bullet and rendered.first:
                    buffer.emit(cursor, DrawTextLine(
                        text=guide.bullet_glyph,
                        x=geometry.margin,
                        y=y,
                        font_size=guide.font_size,
                        bold=True,
                    ))
                for segment in rendered.segments:
                    buffer.emit(cursor, DrawTextRun(
                        text=segment.text,
                        x=geometry.margin + segment.x_offset,
                        y=y,
                        font_size=guide.font_size,
                        emphasized=segment.emphasized,
                    ))
                cursor = cursor.advance(guide.line_height)

            if guide_line.kind == GuideLineKind.INTRO:
                cursor = cursor.advance(guide.intro_gap)

        return cursor

    # ------------------------------------------------------------------
    # 色卡
    # ------------------------------------------------------------------

    def _layout_key(self, buffer: _PageBuffer, rows: Sequence[KeyRow], cursor: Cursor) -> Cursor:
        geometry = buffer.geometry
        key = self.spec.key

        cursor = self._heading(buffer, cursor, key.heading, key.heading_size, key.heading_band)

        table = TableLayout(
            headers=key.headers,
            column_widths=self.spec.get_column_widths(geometry.orientation.value),
            x=geometry.margin,
        )
        paginator: TablePaginator[KeyRow] = TablePaginator(geometry, key.header_height, key.row_height)
        return paginator.render_table(
            table,
            rows,
            cursor,
            page_break=buffer.page_break,
            draw_header=partial(self._draw_header, buffer),
            draw_row=partial(self._draw_key_row, buffer),
        )

    def _draw_header(self, buffer: _PageBuffer, table: TableLayout, cursor: Cursor) -> None:
        key = self.spec.key
        y = baseline(cursor.y, key.header_height, key.header_size)
        for index, header in enumerate(table.headers):
            buffer.emit(cursor, DrawTextLine(
                text=header,
                x=table.column_x(index),
                y=y,
                font_size=key.header_size,
                bold=True,
            ))

    def _draw_key_row(self, buffer: _PageBuffer, table: TableLayout, row: KeyRow, cursor: Cursor) -> None:
        key = self.spec.key
        entry, rgb = row

        # 色块
        buffer.emit(cursor, FillRect(
            box=Box(
                x=table.column_x(0) + key.swatch_inset,
                y=cursor.y + (key.row_height - key.swatch_size) / 2,
                width=key.swatch_size,
                height=key.swatch_size,
            ),
            color=rgb,
        ))

        y = baseline(cursor.y, key.row_height, key.row_size)
        cells = [entry.hex_code, entry.picture_part, entry.reference_color_name]
        for index, text in enumerate(cells, start=1):
            buffer.emit(cursor, DrawTextLine(text=text, x=table.column_x(index), y=y, font_size=key.row_size))

        # 铅笔编号在末列居中
        last = len(table.column_widths) - 1
        buffer.emit(cursor, DrawTextLine(
            text=entry.reference_color_id,
            x=table.column_x(last) + table.column_widths[last] / 2,
            y=y,
            font_size=key.row_size,
            align="center",
        ))

    # ------------------------------------------------------------------
    # 公共
    # ------------------------------------------------------------------

    def _heading(self, buffer: _PageBuffer, cursor: Cursor, text: str, size: float, band: float) -> Cursor:
        if not buffer.has_room(cursor, band):
            cursor = buffer.page_break(cursor)
        buffer.emit(cursor, DrawTextLine(
            text=text,
            x=buffer.geometry.width / 2,
            y=baseline(cursor.y, band, size),
            font_size=size,
            align="center",
        ))
        return cursor.advance(band)

    @staticmethod
    def _key_rows(colors: Sequence[ColorEntry]) -> list[KeyRow]:
        rows: list[KeyRow] = []
        for entry in colors:
            parse_hex(entry.hex_code)
            rows.append((entry, parse_hex(entry.swatch_hex)))
        return rows

    @staticmethod
    def _check_cancel(cancel: Callable[[], bool] | None, section: str) -> None:
        if cancel is not None and cancel():
            raise AssemblyCancelled(f"组装已取消（{section}之前）")
