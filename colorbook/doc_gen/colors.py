"""
颜色解析 - #RRGGBB → 24位RGB三元组

规则：
- 允许省略前导 '#'
- 必须为6位十六进制，否则报 InvalidColorFormat（不做静默兜底）
"""

from __future__ import annotations

import string

from ..interfaces import InvalidColorFormat

_HEX_DIGITS = frozenset(string.hexdigits)


def parse_hex(value: str) -> tuple[int, int, int]:
    """解析十六进制颜色"""
    if not isinstance(value, str):
        raise InvalidColorFormat(f"颜色值不是字符串: {value!r}")

    digits = value.strip()
    if digits.startswith("#"):
        digits = digits[1:]

    if len(digits) != 6 or not set(digits) <= _HEX_DIGITS:
        raise InvalidColorFormat(f"颜色格式错误: {value!r}")

    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
