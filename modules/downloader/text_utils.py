# -*- coding: utf-8 -*-
"""
文本工具 - 描述文字中使用的数字格式化与转义
"""

import math
import re
from typing import Any

_MARKDOWN_SPECIAL = re.compile(r'([_*\[\]()~`>#+\-=|{}.!])')


def _to_number(value: Any) -> float:
    """宽松的数值转换，无法转换时返回 0"""
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def _plain(number: float) -> str:
    return str(int(number)) if number == int(number) else str(number)


def format_number(value: Any) -> str:
    """格式化计数: 1500 -> 1.5K, 2300000 -> 2.3M"""
    number = _to_number(value)
    if number >= 1e9:
        return f"{number / 1e9:.1f}B"
    if number >= 1e6:
        return f"{number / 1e6:.1f}M"
    if number >= 1e3:
        return f"{number / 1e3:.1f}K"
    return _plain(number)


def format_size_units(value: Any) -> str:
    """格式化字节数: 1536000 -> 1.54 MB"""
    size = _to_number(value)
    if size >= 1e9:
        return f"{size / 1e9:.2f} GB"
    if size >= 1e6:
        return f"{size / 1e6:.2f} MB"
    if size >= 1e3:
        return f"{size / 1e3:.2f} KB"
    return f"{_plain(size)} B"


def escape_html(text: Any) -> str:
    if not isinstance(text, str):
        return ''
    return text.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')


def escape_markdown(text: Any) -> str:
    if not isinstance(text, str):
        return ''
    return _MARKDOWN_SPECIAL.sub(r'\\\1', text)
