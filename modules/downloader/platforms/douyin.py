"""
抖音平台处理器（无水印地址）
"""

from typing import Dict, Any
from .base import BasePlatform, UNTITLED
from ..models import MEDIA_VIDEO, RESULT_VIDEO, NormalizedResult, Platform
from ..text_utils import escape_html


class DouyinPlatform(BasePlatform):
    """抖音平台"""

    platform = Platform.DOUYIN

    def __init__(self):
        super().__init__()
        self.supported_domains = ['douyin.com', 'v.douyin.com']
        self.endpoint = 'dou_douyin'

    def normalize(self, payload: Dict[str, Any]) -> NormalizedResult:
        video_url = self.dig(payload, 'result', 'result', 'download', 'no_watermark')
        if not video_url:
            self.fail('Video URL not found.')

        title = self.dig(payload, 'result', 'result', 'title') or UNTITLED
        caption = f"Douyin Downloader\n\n<b>Title:</b> {escape_html(title)}"

        return NormalizedResult(
            type=RESULT_VIDEO,
            media=[{'url': video_url, 'type': MEDIA_VIDEO}],
            caption=caption,
        )
