# -*- coding: utf-8 -*-
"""
文件名处理模块

清理上游返回的文件名，确保可以安全地用作下载文件名
"""

import re
import logging

logger = logging.getLogger(__name__)


class FilenameProcessor:
    """文件名处理器"""

    def __init__(self):
        # 路径非法字符，直接移除
        self.invalid_chars = re.compile(r'[\\/:*?"<>|]')
        # 允许保留的字符之外的全部替换为空格
        self.disallowed_chars = re.compile(r'[^\w\s\-.()&@]')
        self.whitespace = re.compile(r'\s+')

    def sanitize_filename(self, filename: str) -> str:
        """清理文件名

        1. 移除 \\ / : * ? " < > |
        2. 其余非单词、非空白、非 . - ( ) & @ 的字符替换为空格
        3. 合并连续空白并去掉首尾空白
        """
        if not isinstance(filename, str):
            return ''

        cleaned = self.invalid_chars.sub('', filename)
        cleaned = self.disallowed_chars.sub(' ', cleaned)
        cleaned = self.whitespace.sub(' ', cleaned)
        cleaned = cleaned.strip()

        if cleaned != filename:
            logger.debug(f"🧹 文件名已清理: {filename!r} -> {cleaned!r}")
        return cleaned


# 全局文件名处理器实例
_filename_processor = None


def get_filename_processor() -> FilenameProcessor:
    """获取文件名处理器实例"""
    global _filename_processor
    if _filename_processor is None:
        _filename_processor = FilenameProcessor()
    return _filename_processor


def sanitize_filename(filename: str) -> str:
    """清理文件名的便捷函数"""
    return get_filename_processor().sanitize_filename(filename)
