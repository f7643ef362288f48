"""
manifest生成 - 记录一次报告生成的输入、派生结果与产物

测试要点：
- test_manifest_structure: manifest结构
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

from ..config import LayoutSpec, load_spec

if TYPE_CHECKING:
    from ..models import ReportDocument, ReportJob


class ManifestWriter:
    """manifest写出器"""

    def __init__(self, spec: LayoutSpec | None = None):
        self.spec = spec or load_spec()

    def build(self, job: ReportJob, document: ReportDocument | None = None) -> dict:
        """构建manifest内容"""
        derived = {}
        if document is not None:
            derived = {
                "title": document.title,
                "file_name": document.file_name,
                "orientation": "landscape"
                if document.geometry.width > document.geometry.height
                else "portrait",
                "page_count": document.page_count,
                "sections": document.sections,
            }

        return {
            "schema_version": "1.0",
            "job_id": job.job_id,
            "spec_version": f"report_layout.yaml@{self.spec.schema_version}",

            "inputs": {
                "cover": job.inputs.cover_path.name,
                "photo": job.inputs.photo_path.name,
                "color_count": len(job.inputs.colors),
                "options": job.options,
                "params": job.params,
            },

            "derived": derived,

            "artifacts": {
                "pdf_path": str(job.artifacts.pdf_path) if job.artifacts.pdf_path else None,
                "page_count": job.artifacts.page_count,
            },

            "flags": job.flags,
            "errors": job.errors,

            "timestamps": {
                "created_at": job.created_at.isoformat() if job.created_at else None,
                "started_at": job.started_at.isoformat() if job.started_at else None,
                "finished_at": job.finished_at.isoformat() if job.finished_at else None,
            },
        }

    def write(self, job: ReportJob, document: ReportDocument | None = None) -> Path:
        """写出manifest.json"""
        if not job.work_dir:
            raise ValueError("Job work_dir not set")

        manifest_path = job.work_dir / "manifest.json"
        with open(manifest_path, "w", encoding="utf-8") as f:
            json.dump(self.build(job, document), f, ensure_ascii=False, indent=2, default=str)

        return manifest_path
