"""
素材接入 - 位图解码与色卡读取

职责：
1. 在线程池中解码位图（Pillow），每张图像有一个等待点
2. 等待超时报 DecodeTimeout，无法读取报 ImageUnavailable
3. 读取生成服务产出的色卡JSON

依赖：
- Pillow: 图像解码
- 运行期配置: timeouts.bitmap_decode_sec / concurrency.decode_workers

测试要点：
- test_load_png: 正常解码
- test_missing_file: 文件不存在
- test_corrupt_file: 非图像内容
- test_decode_timeout: 解码超时
"""

from __future__ import annotations

import io
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from pathlib import Path

from PIL import Image
from pydantic import TypeAdapter

from ..config import get_config
from ..interfaces import DecodeTimeout, IBitmapLoader, ImageUnavailable
from ..models import Bitmap, ColorEntry

logger = logging.getLogger(__name__)

_COLOR_LIST = TypeAdapter(list[ColorEntry])


class BitmapLoader(IBitmapLoader):
    """位图加载器实现"""

    def __init__(self, timeout: float | None = None, max_workers: int | None = None):
        if timeout is None or max_workers is None:
            config = get_config()
            timeout = timeout if timeout is not None else config.timeouts.bitmap_decode_sec
            max_workers = max_workers or config.concurrency.decode_workers
        self.timeout = timeout
        self.max_workers = max_workers

    def load(self, source: Path | bytes, name: str = "") -> Bitmap:
        """同步解码单张图像"""
        if isinstance(source, Path):
            name = name or source.name
            if not source.exists():
                raise ImageUnavailable(f"图像不存在: {source}")
            stream = source
        else:
            name = name or "<bytes>"
            stream = io.BytesIO(source)

        try:
            with Image.open(stream) as img:
                img.load()
                image = img.copy()
        except (OSError, Image.DecompressionBombError) as e:
            raise ImageUnavailable(f"图像无法解码: {name}: {e}") from e

        logger.debug(f"位图已解码: {name} {image.width}x{image.height} {image.mode}")
        return Bitmap(width=image.width, height=image.height, source=image, name=name)

    def load_all(self, sources: dict[str, Path | bytes]) -> dict[str, Bitmap]:
        """并行解码多张图像，逐张等待（各自受超时约束）"""
        pool = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="bitmap-decode")
        try:
            futures = {key: pool.submit(self.load, src, key) for key, src in sources.items()}
            return {key: self._await(key, future) for key, future in futures.items()}
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

    def _await(self, key: str, future: Future[Bitmap]) -> Bitmap:
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeout as e:
            # 解码线程无法中断，超时后任其在后台结束
            logger.warning(f"图像解码超时，解码线程仍在后台运行: {key}")
            raise DecodeTimeout(f"图像解码超时({self.timeout}s): {key}") from e


def load_colors(path: Path) -> list[ColorEntry]:
    """读取色卡JSON（字段名兼容生成服务：picturePart/hex/fbPencilColor/fbNumber）"""
    with open(path, "r", encoding="utf-8") as f:
        return _COLOR_LIST.validate_json(f.read())
