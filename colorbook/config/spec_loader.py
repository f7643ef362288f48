"""
版式规范加载器 - 读取 documents/report_layout.yaml

职责：
- 解析YAML并提供类型安全访问
- 提供纸张尺寸、页边距、字体、各段排版参数、色卡表格列定义
- 缓存加载结果（避免重复解析）

使用方式：
    spec = SpecLoader.load("documents/report_layout.yaml")
    size = spec.get_page_size("landscape")
    widths = spec.get_column_widths("portrait")
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

DEFAULT_SPEC_PATH = "documents/report_layout.yaml"


class PageSize(BaseModel):
    """纸张尺寸（英寸）"""
    width: float
    height: float


class PageSpec(BaseModel):
    """纸张与页边距"""
    portrait: PageSize = Field(default_factory=lambda: PageSize(width=8.5, height=11.0))
    landscape: PageSize = Field(default_factory=lambda: PageSize(width=11.0, height=8.5))
    margin: float = 0.5


class FontSpec(BaseModel):
    """字体（reportlab标准字体名）"""
    regular: str = "Helvetica"
    bold: str = "Helvetica-Bold"


class CoverSpec(BaseModel):
    """封面页：标题 + 线稿"""
    title_size: float = 18
    title_band: float = 0.6      # 标题占用高度，线稿从其下方开始


class GuideSpec(BaseModel):
    """指南页：原图缩略图 + 上色指南"""
    heading: str = "Coloring Guide"
    heading_size: float = 18
    heading_band: float = 0.5
    thumbnail_max: float = 3.0   # 缩略图长边（英寸）
    thumbnail_gap: float = 0.3
    font_size: float = 11
    line_height: float = 0.25
    bullet_indent: float = 0.2
    bullet_glyph: str = "•"
    intro_gap: float = 0.1


class KeySpec(BaseModel):
    """色卡页：表格"""
    heading: str = "Color Key"
    heading_size: float = 18
    heading_band: float = 0.5
    header_size: float = 10
    row_size: float = 9
    header_height: float = 0.3
    row_height: float = 0.4
    swatch_size: float = 0.25
    swatch_inset: float = 0.05
    headers: list[str] = Field(
        default_factory=lambda: ["Swatch", "Hex", "Picture Part", "Faber-Castell Color", "FB #"]
    )
    column_widths: dict[str, list[float]] = Field(
        default_factory=lambda: {
            "portrait": [0.7, 1.0, 1.8, 3.3, 0.7],
            "landscape": [0.7, 1.0, 1.8, 5.8, 0.7],
        }
    )


class LayoutSpec(BaseModel):
    """版式规范（report_layout.yaml 的结构化表示）"""
    schema_version: str = "1.0"

    page: PageSpec = Field(default_factory=PageSpec)
    fonts: FontSpec = Field(default_factory=FontSpec)
    cover: CoverSpec = Field(default_factory=CoverSpec)
    guide: GuideSpec = Field(default_factory=GuideSpec)
    key: KeySpec = Field(default_factory=KeySpec)

    # 命名规则
    default_title: str = "Your Coloring Page"
    file_suffix: str = "_Coloring_Page.pdf"

    # === 便捷访问方法 ===

    def get_page_size(self, orientation: str) -> PageSize:
        """获取纸张尺寸"""
        if orientation == "landscape":
            return self.page.landscape
        return self.page.portrait

    def get_column_widths(self, orientation: str) -> list[float]:
        """获取色卡表格列宽"""
        widths = self.key.column_widths
        return list(widths.get(orientation) or widths["portrait"])


class SpecLoader:
    """规范加载器（单例模式+缓存）"""

    _instance: SpecLoader | None = None

    def __new__(cls) -> SpecLoader:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    @lru_cache(maxsize=4)
    def load(cls, spec_path: str | Path = DEFAULT_SPEC_PATH) -> LayoutSpec:
        """加载并缓存规范"""
        path = Path(spec_path)
        if not path.exists():
            raise FileNotFoundError(f"版式规范文件不存在: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return LayoutSpec(**data)


# 便捷函数
def load_spec(spec_path: str | Path | None = None) -> LayoutSpec:
    """加载版式规范（未指定路径且默认文件缺失时使用内置默认值）"""
    if spec_path is None:
        if not Path(DEFAULT_SPEC_PATH).exists():
            return LayoutSpec()
        spec_path = DEFAULT_SPEC_PATH
    return SpecLoader.load(spec_path)
