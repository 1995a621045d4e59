"""
MediaFire 平台处理器

返回文档类型的直链，附带清理后的文件名与大小
"""

from typing import Dict, Any
from .base import BasePlatform
from ..filename_processor import sanitize_filename
from ..models import MEDIA_DOCUMENT, RESULT_DOCUMENT, NormalizedResult, Platform
from ..text_utils import format_size_units


class MediaFirePlatform(BasePlatform):
    """MediaFire 平台"""

    platform = Platform.MEDIAFIRE

    def __init__(self):
        super().__init__()
        self.supported_domains = ['mediafire.com']
        self.endpoint = 'mediafire'

    def normalize(self, payload: Dict[str, Any]) -> NormalizedResult:
        download = self.dig(payload, 'data', 'download')
        if not download:
            self.fail('File not found.')

        data = payload['data']
        filename = sanitize_filename(data.get('filename') or 'File') or 'File'
        filesize = data.get('size') or ''
        # 数值大小转换为可读格式，字符串原样保留
        if isinstance(filesize, (int, float)) and not isinstance(filesize, bool):
            filesize = format_size_units(filesize)

        size_part = f" ({filesize})" if filesize else ''
        caption = (
            "*MediaFire File:*\n"
            f"*{filename}*{size_part}\n\n"
            f"[Click to download]({download})"
        )

        return NormalizedResult(
            type=RESULT_DOCUMENT,
            media=[{'url': download, 'type': MEDIA_DOCUMENT}],
            caption=caption,
            filename=filename,
        )
