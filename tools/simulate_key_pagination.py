"""
模拟色卡表格分页，用于核对每页行数与表头重复次数（不生成PDF）。

示例：
  python tools/simulate_key_pagination.py --rows 40
  python tools/simulate_key_pagination.py --rows 40 --orientation landscape --start-y 1.0
"""

from __future__ import annotations

import argparse

from colorbook.config import load_spec
from colorbook.doc_gen import TableLayout, TablePaginator, resolve
from colorbook.models import Cursor


def simulate(rows: int, orientation: str, start_y: float | None) -> dict[int, dict[str, int]]:
    spec = load_spec()
    geometry = resolve(orientation, spec)
    table = TableLayout(
        headers=spec.key.headers,
        column_widths=spec.get_column_widths(orientation),
        x=geometry.margin,
    )
    paginator: TablePaginator[int] = TablePaginator(geometry, spec.key.header_height, spec.key.row_height)

    pages: dict[int, dict[str, int]] = {}

    def _count(cursor: Cursor, key: str) -> None:
        counts = pages.setdefault(cursor.page, {"headers": 0, "rows": 0})
        counts[key] += 1

    paginator.render_table(
        table,
        list(range(rows)),
        Cursor(page=0, y=geometry.top if start_y is None else start_y),
        page_break=lambda cursor: cursor.next_page(geometry.top),
        draw_header=lambda _table, cursor: _count(cursor, "headers"),
        draw_row=lambda _table, _row, cursor: _count(cursor, "rows"),
    )
    return pages


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--rows", type=int, required=True)
    ap.add_argument("--orientation", choices=["portrait", "landscape"], default="portrait")
    ap.add_argument("--start-y", type=float, default=None, help="表格起始y（英寸），缺省为上边距")
    args = ap.parse_args()

    pages = simulate(args.rows, args.orientation, args.start_y)
    for index, counts in sorted(pages.items()):
        print(f"page {index}: headers={counts['headers']} rows={counts['rows']}")
    print(f"total pages: {len(pages)}")


if __name__ == "__main__":
    main()
