"""
配置层 - 加载版式规范与运行期配置

职责：
- 加载 documents/report_layout.yaml（版式规范）
- 加载 documents/report_runtime.yaml（运行期参数）
- 提供类型安全的配置访问接口
"""

from .runtime_config import RuntimeConfig, get_config, reload_config
from .spec_loader import LayoutSpec, SpecLoader, load_spec

__all__ = [
    "SpecLoader",
    "LayoutSpec",
    "load_spec",
    "RuntimeConfig",
    "get_config",
    "reload_config",
]
