"""
本地生成一份上色页报告（跳过图像生成服务，直接使用已有素材）。

素材：
- 线稿图（封面）与原图（指南缩略图）
- 上色指南文本（支持 '- ' 列表与 **强调**）
- 色卡JSON（生成服务格式：picturePart/hex/fbPencilColor/fbNumber）

示例：
  python tools/render_report.py --cover out/line_art.png --photo my_garden.jpg \
      --instructions out/guide.txt --colors out/colors.json
  python tools/render_report.py --cover a.png --photo b.jpg --orientation landscape --title "Rose Garden"
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from colorbook.config import get_config, reload_config
from colorbook.interfaces import ColorbookError
from colorbook.pipeline import ReportExecutor, load_colors


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--cover", required=True, help="线稿图路径")
    ap.add_argument("--photo", required=True, help="原图路径")
    ap.add_argument("--instructions", default=None, help="上色指南文本文件")
    ap.add_argument("--colors", default=None, help="色卡JSON文件")
    ap.add_argument("--title", default=None)
    ap.add_argument("--orientation", choices=["portrait", "landscape"], default=None)
    ap.add_argument("--output-dir", default=None, help="PDF输出目录（缺省为任务目录/output）")
    ap.add_argument("--config", default=None, help="report_runtime.yaml 路径")
    args = ap.parse_args()

    config = reload_config(args.config) if args.config else get_config()
    logging.basicConfig(
        level=config.logging.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    instructions = ""
    if args.instructions:
        instructions = Path(args.instructions).read_text(encoding="utf-8")
    colors = load_colors(Path(args.colors)) if args.colors else []

    params = {}
    if args.title:
        params["title"] = args.title
    if args.orientation:
        params["orientation"] = args.orientation
    options = {"output_dir": args.output_dir} if args.output_dir else {}

    executor = ReportExecutor(config=config)
    job = executor.create_job(
        cover_path=Path(args.cover),
        photo_path=Path(args.photo),
        instructions=instructions,
        colors=colors,
        params=params,
        options=options,
    )

    try:
        pdf_path = executor.execute(job)
    except ColorbookError as e:
        print(f"生成失败: {e}", file=sys.stderr)
        return 1

    print(pdf_path)
    if job.flags:
        print("flags: " + ", ".join(job.flags))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
