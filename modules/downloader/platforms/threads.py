"""
Threads 平台处理器

result 为字符串时是单个视频，为列表时是多张图片
"""

from typing import Dict, Any
from .base import BasePlatform
from ..models import (
    MEDIA_IMAGE, MEDIA_VIDEO, RESULT_PHOTO, RESULT_VIDEO,
    NormalizedResult, Platform,
)

CAPTION = 'Threads Media'


class ThreadsPlatform(BasePlatform):
    """Threads 平台"""

    platform = Platform.THREADS

    def __init__(self):
        super().__init__()
        self.supported_domains = ['threads.net', 'threads.com']
        self.endpoint = 'threads'

    def normalize(self, payload: Dict[str, Any]) -> NormalizedResult:
        if not self.dig(payload, 'success') or not self.dig(payload, 'result'):
            self.fail('Media not found.')

        result = payload['result']
        if isinstance(result, str):
            return NormalizedResult(
                type=RESULT_VIDEO,
                media=[{'url': result, 'type': MEDIA_VIDEO}],
                caption=CAPTION,
            )
        if isinstance(result, list):
            return NormalizedResult(
                type=RESULT_PHOTO,
                media=[{'url': url, 'type': MEDIA_IMAGE} for url in result],
                caption=CAPTION,
            )
        self.fail('No media.')
