"""
流水线执行器 - 编排报告生成各阶段

职责：
1. 按顺序执行各阶段（解码 → 派生 → 组装 → 导出 → manifest）
2. 更新任务进度并落盘 job.json
3. 任一阶段失败：任务标记失败，对外抛出单一的 GenerationError
4. 支持取消（阶段之间、组装的各段之间检查）

测试要点：
- test_execute_full_pipeline: 完整流水线执行
- test_stage_failure_handling: 阶段失败处理
- test_cancel_before_start: 取消后不产出PDF
- test_progress_tracking: 进度跟踪
"""

from __future__ import annotations

import json
import logging
import threading
import uuid
from pathlib import Path
from typing import Any

from ..config import LayoutSpec, RuntimeConfig, get_config, load_spec
from ..doc_gen import DerivationEngine, DocumentAssembler, PDFExporter
from ..interfaces import (
    AssemblyCancelled,
    GenerationError,
    IBitmapLoader,
    IDocumentAssembler,
    IPDFExporter,
)
from ..models import ColorEntry, JobInputs, ReportContext, ReportJob, ReportParams
from .ingest import BitmapLoader
from .manifest import ManifestWriter
from .stages import REPORT_STAGES, PipelineStage, StageEnum

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ReportExecutor:
    """报告生成执行器（一个实例对应一次生成）"""

    def __init__(
        self,
        config: RuntimeConfig | None = None,
        spec: LayoutSpec | None = None,
        loader: IBitmapLoader | None = None,
        assembler: IDocumentAssembler | None = None,
        exporter: IPDFExporter | None = None,
    ):
        self.config = config or get_config()
        if spec is None:
            spec = load_spec(self.config.spec_path) if self.config.spec_path.exists() else load_spec()
        self.spec = spec

        self.loader = loader or BitmapLoader(
            timeout=self.config.timeouts.bitmap_decode_sec,
            max_workers=self.config.concurrency.decode_workers,
        )
        self.derivation = DerivationEngine(self.spec)
        self.assembler = assembler or DocumentAssembler(self.spec)
        self.exporter = exporter or PDFExporter(self.spec, author=self.config.output.pdf_author)
        self.manifest = ManifestWriter(self.spec)

        self._cancelled = threading.Event()

    def create_job(
        self,
        cover_path: Path,
        photo_path: Path,
        instructions: str = "",
        colors: list[ColorEntry] | None = None,
        params: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> ReportJob:
        """创建任务"""
        return ReportJob(
            job_id=str(uuid.uuid4()),
            inputs=JobInputs(
                cover_path=cover_path,
                photo_path=photo_path,
                instructions=instructions,
                colors=colors or [],
            ),
            params=params or {},
            options=options or {},
        )

    def cancel(self) -> None:
        """请求取消（可从其他线程调用）"""
        self._cancelled.set()

    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()

    def execute(self, job: ReportJob) -> Path:
        """执行流水线，返回PDF路径"""
        job.mark_running()
        self.config.ensure_dirs()
        job.work_dir = self.config.get_job_dir(job.job_id)
        job.work_dir.mkdir(parents=True, exist_ok=True)
        handler = self._attach_log_file(job)
        self._update_progress(job, message="任务开始")

        try:
            context: dict[str, Any] = {}
            for stage in REPORT_STAGES:
                if self.is_cancelled():
                    raise AssemblyCancelled(f"任务已取消（{stage.name}之前）")
                self._execute_stage(job, stage, context)

            job.mark_succeeded()
            self._update_progress(job, message="任务完成")
            logger.info(f"[{job.job_id}] 报告已生成: {job.artifacts.pdf_path}")
            return job.artifacts.pdf_path

        except AssemblyCancelled as e:
            logger.warning(f"[{job.job_id}] {e}")
            self._discard_outputs(job)
            job.mark_cancelled()
            self._update_progress(job, message=str(e))
            raise

        except Exception as e:
            logger.exception(f"流水线执行失败: {job.job_id}")
            reason = f"{job.progress.stage}: {type(e).__name__}: {e}"
            self._discard_outputs(job)
            job.mark_failed(reason)
            self._update_progress(job, message=f"任务失败: {e}")
            raise GenerationError(reason) from e

        finally:
            self._detach_log_file(handler)

    def _execute_stage(self, job: ReportJob, stage: PipelineStage, context: dict) -> None:
        """执行单个阶段"""
        job.progress.stage = stage.name
        job.progress.percent = stage.progress_start
        logger.info(f"[{job.job_id}] 开始阶段: {stage.name}")
        self._update_progress(job, message=f"开始阶段: {stage.name}")

        try:
            if stage.name == StageEnum.INGEST.value:
                self._stage_ingest(job, context)

            elif stage.name == StageEnum.DERIVE.value:
                self._stage_derive(job, context)

            elif stage.name == StageEnum.ASSEMBLE.value:
                self._stage_assemble(job, context)

            elif stage.name == StageEnum.EXPORT_PDF.value:
                self._stage_export(job, context)

            elif stage.name == StageEnum.MANIFEST.value:
                self._stage_manifest(job, context)

        except AssemblyCancelled:
            raise
        except Exception as e:
            logger.error(f"[{job.job_id}] 阶段失败 {stage.name}: {e}")
            job.add_flag(f"阶段失败:{stage.name}")
            raise

        job.progress.percent = stage.progress_end
        self._update_progress(job, message=f"完成阶段: {stage.name}")

    def _stage_ingest(self, job: ReportJob, context: dict) -> None:
        """解码封面与原图"""
        context["bitmaps"] = self.loader.load_all(
            {"cover": job.inputs.cover_path, "photo": job.inputs.photo_path}
        )

    def _stage_derive(self, job: ReportJob, context: dict) -> None:
        """构建上下文并计算派生字段"""
        bitmaps = context["bitmaps"]
        params = ReportParams(**{"photo_name": job.inputs.photo_path.name, **job.params})

        report = ReportContext(
            params=params,
            cover=bitmaps["cover"],
            photo=bitmaps["photo"],
            instructions=job.inputs.instructions,
            colors=job.inputs.colors,
            options=job.options,
        )
        report.derived = self.derivation.compute(report)
        context["report"] = report

    def _stage_assemble(self, job: ReportJob, context: dict) -> None:
        """三段组装"""
        document = self.assembler.assemble(context["report"], cancel=self.is_cancelled)
        for flag in document.flags:
            job.add_flag(flag)
        context["document"] = document

    def _stage_export(self, job: ReportJob, context: dict) -> None:
        """导出PDF"""
        document = context["document"]
        output_dir = Path(job.options.get("output_dir") or job.work_dir / "output")
        pdf_path = self.exporter.export(document, output_dir / document.file_name)

        job.artifacts.pdf_path = pdf_path
        job.artifacts.page_count = document.page_count

    def _stage_manifest(self, job: ReportJob, context: dict) -> None:
        """写出manifest"""
        if not self.config.output.write_manifest:
            return
        job.artifacts.manifest_path = self.manifest.write(job, context.get("document"))

    def _discard_outputs(self, job: ReportJob) -> None:
        """取消或失败时删除已写出的PDF与manifest（不留半成品）"""
        artifacts = job.artifacts
        for path in (artifacts.pdf_path, artifacts.manifest_path):
            if path is not None:
                Path(path).unlink(missing_ok=True)
                logger.info(f"[{job.job_id}] 已删除产物: {path}")
        artifacts.pdf_path = None
        artifacts.manifest_path = None
        artifacts.page_count = None

    def _attach_log_file(self, job: ReportJob) -> logging.Handler | None:
        """任务日志写入工作目录 job.log"""
        if not self.config.logging.log_to_file:
            return None
        handler = logging.FileHandler(job.work_dir / "job.log", encoding="utf-8")
        handler.setLevel(self.config.logging.log_level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger = logging.getLogger("colorbook")
        if package_logger.level == logging.NOTSET:
            package_logger.setLevel(self.config.logging.log_level)
        package_logger.addHandler(handler)
        return handler

    def _detach_log_file(self, handler: logging.Handler | None) -> None:
        if handler is None:
            return
        logging.getLogger("colorbook").removeHandler(handler)
        handler.close()

    def _update_progress(self, job: ReportJob, *, message: str | None = None) -> None:
        if message is not None:
            job.progress.message = message
        self._persist_job(job)

    def _persist_job(self, job: ReportJob) -> None:
        job_dir = self.config.get_job_dir(job.job_id)
        job_dir.mkdir(parents=True, exist_ok=True)
        job_file = job_dir / "job.json"
        with open(job_file, "w", encoding="utf-8") as f:
            json.dump(job.model_dump(mode="json"), f, ensure_ascii=False, indent=2, default=str)
