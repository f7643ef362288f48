"""
素材接入单元测试

每个模块完成后必须运行：pytest tests/unit/test_ingest.py -v
"""

import io
import json
import threading
from pathlib import Path

import pytest
from PIL import Image
from pydantic import ValidationError

from colorbook.interfaces import DecodeTimeout, ImageUnavailable
from colorbook.models import Bitmap
from colorbook.pipeline import BitmapLoader, load_colors


class TestBitmapLoader:
    """位图加载测试"""

    @pytest.fixture
    def loader(self) -> BitmapLoader:
        return BitmapLoader(timeout=5.0, max_workers=2)

    def test_load_png(self, loader: BitmapLoader, sample_png_paths: tuple[Path, Path]):
        """正常解码，记录宽高与像素源"""
        cover_path, _ = sample_png_paths
        bitmap = loader.load(cover_path)

        assert (bitmap.width, bitmap.height) == (80, 100)
        assert bitmap.name == "line_art.png"
        assert isinstance(bitmap.source, Image.Image)

    def test_load_bytes(self, loader: BitmapLoader):
        buf = io.BytesIO()
        Image.new("RGB", (30, 20), "red").save(buf, format="JPEG")

        bitmap = loader.load(buf.getvalue(), name="upload")
        assert (bitmap.width, bitmap.height) == (30, 20)
        assert bitmap.aspect_ratio == pytest.approx(1.5)

    def test_missing_file(self, loader: BitmapLoader, temp_dir: Path):
        with pytest.raises(ImageUnavailable):
            loader.load(temp_dir / "missing.png")

    def test_corrupt_file(self, loader: BitmapLoader, temp_dir: Path):
        """非图像内容报 ImageUnavailable"""
        bad = temp_dir / "bad.png"
        bad.write_bytes(b"not an image at all")

        with pytest.raises(ImageUnavailable):
            loader.load(bad)

    def test_load_all(self, loader: BitmapLoader, sample_png_paths: tuple[Path, Path]):
        cover_path, photo_path = sample_png_paths
        bitmaps = loader.load_all({"cover": cover_path, "photo": photo_path})

        assert set(bitmaps) == {"cover", "photo"}
        assert (bitmaps["photo"].width, bitmaps["photo"].height) == (120, 90)

    def test_load_all_propagates_failure(self, loader: BitmapLoader, sample_png_paths, temp_dir: Path):
        cover_path, _ = sample_png_paths
        with pytest.raises(ImageUnavailable):
            loader.load_all({"cover": cover_path, "photo": temp_dir / "missing.jpg"})

    def test_decode_timeout(self, sample_png_paths: tuple[Path, Path], caplog):
        """解码等待超时报 DecodeTimeout（ImageUnavailable 的子类）"""
        release = threading.Event()

        class SlowLoader(BitmapLoader):
            def load(self, source, name=""):
                release.wait(5.0)
                return Bitmap(width=1, height=1, name=name)

        loader = SlowLoader(timeout=0.05, max_workers=1)
        cover_path, _ = sample_png_paths
        try:
            with pytest.raises(DecodeTimeout) as exc_info:
                loader.load_all({"cover": cover_path})
            assert isinstance(exc_info.value, ImageUnavailable)
            assert "解码线程仍在后台运行: cover" in caplog.text
        finally:
            release.set()


class TestLoadColors:
    """色卡JSON读取测试"""

    def test_load_service_json(self, temp_dir: Path):
        path = temp_dir / "colors.json"
        path.write_text(json.dumps([
            {"number": 1, "picturePart": "Leaves", "hex": "#2E8B57",
             "fbPencilColor": "Leaf Green", "fbNumber": "112"},
            {"number": 2, "picturePart": "Sky", "hex": "#87CEEB",
             "fbPencilColor": "Light Blue", "fbNumber": 147},
        ]), encoding="utf-8")

        colors = load_colors(path)

        assert [c.picture_part for c in colors] == ["Leaves", "Sky"]
        assert colors[1].reference_color_id == "147"

    def test_invalid_json_structure(self, temp_dir: Path):
        path = temp_dir / "colors.json"
        path.write_text(json.dumps({"colors": "nope"}), encoding="utf-8")

        with pytest.raises(ValidationError):
            load_colors(path)
