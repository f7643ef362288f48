"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(spec, fake_measure):
        assert spec.schema_version == "1.0"
"""

from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Generator

import pytest
from PIL import Image

from colorbook.config import LayoutSpec, RuntimeConfig, SpecLoader
from colorbook.models import (
    Bitmap,
    ColorEntry,
    DerivedFields,
    Orientation,
    ReportContext,
    ReportParams,
)


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture(scope="session")
def spec() -> LayoutSpec:
    """加载版式规范（会话级别缓存）"""
    # 尝试加载真实规范，失败则使用内置默认值
    try:
        return SpecLoader.load("documents/report_layout.yaml")
    except FileNotFoundError:
        return LayoutSpec()


@pytest.fixture
def runtime_config(temp_dir: Path) -> RuntimeConfig:
    """运行期配置（存储目录指向临时目录）"""
    return RuntimeConfig(storage_dir=temp_dir / "storage")


# ============================================================================
# 测量 Fixtures
# ============================================================================

@pytest.fixture
def fake_measure() -> Callable[[str, bool], float]:
    """等宽假测量：每个字符 0.1 英寸，与字重无关"""
    return lambda text, emphasized: len(text) * 0.1


# ============================================================================
# 数据模型 Fixtures
# ============================================================================

def _make_bitmap(width: int, height: int, name: str = "") -> Bitmap:
    image = Image.new("RGB", (width, height), "white")
    return Bitmap(width=width, height=height, source=image, name=name)


@pytest.fixture
def make_bitmap() -> Callable[..., Bitmap]:
    """构造带像素源的位图"""
    return _make_bitmap


@pytest.fixture
def cover_bitmap() -> Bitmap:
    return _make_bitmap(400, 500, "cover")


@pytest.fixture
def photo_bitmap() -> Bitmap:
    return _make_bitmap(300, 400, "photo")


@pytest.fixture
def sample_instructions() -> str:
    """示例上色指南"""
    return (
        "Here's a fun way to bring your garden to life!\n"
        "\n"
        "- **Leaves:** Use green.\n"
        "- **Petals:** Start with a light pink and layer a deeper rose toward the center.\n"
        "* Sky: keep it soft.\n"
        "Have fun and take your time.\n"
    )


@pytest.fixture
def sample_colors() -> list[ColorEntry]:
    """示例色卡"""
    return [
        ColorEntry(number="1", picture_part="Leaves", hex_code="#2E8B57",
                   reference_color_name="Leaf Green", reference_color_id="112"),
        ColorEntry(number="2", picture_part="Petals", hex_code="#FFC0CB",
                   reference_color_name="Pink Carmine", reference_color_id="127"),
        ColorEntry(number="3", picture_part="Sky", hex_code="87CEEB",
                   reference_color_name="Light Blue", reference_color_id="147"),
    ]


@pytest.fixture
def report_context(
    cover_bitmap: Bitmap,
    photo_bitmap: Bitmap,
    sample_instructions: str,
    sample_colors: list[ColorEntry],
) -> ReportContext:
    """示例报告上下文（派生字段已填好）"""
    return ReportContext(
        params=ReportParams(photo_name="my_garden.jpg"),
        derived=DerivedFields(
            title="My Garden",
            file_name="My_Garden_Coloring_Page.pdf",
            orientation=Orientation.PORTRAIT,
        ),
        cover=cover_bitmap,
        photo=photo_bitmap,
        instructions=sample_instructions,
        colors=sample_colors,
    )


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_png_paths(temp_dir: Path) -> tuple[Path, Path]:
    """示例线稿图与原图文件（PNG）"""
    cover_path = temp_dir / "line_art.png"
    photo_path = temp_dir / "my_garden.png"
    Image.new("L", (80, 100), 255).save(cover_path)
    Image.new("RGB", (120, 90), (200, 120, 80)).save(photo_path)
    return cover_path, photo_path
