"""
Xvideos 平台处理器
"""

from typing import Dict, Any
from .base import BasePlatform
from ..models import MEDIA_VIDEO, RESULT_VIDEO, NormalizedResult, Platform


class XvideosPlatform(BasePlatform):
    """Xvideos 平台"""

    platform = Platform.XVIDEOS

    def __init__(self):
        super().__init__()
        self.supported_domains = ['xvideos.com']
        self.endpoint = 'xvideos'

    def normalize(self, payload: Dict[str, Any]) -> NormalizedResult:
        video_url = (
            self.dig(payload, 'result', 'videos', 'high')
            or self.dig(payload, 'result', 'videos', 'low')
        )
        if not video_url:
            self.fail('Video URL not found.')

        return NormalizedResult(
            type=RESULT_VIDEO,
            media=[{'url': video_url, 'type': MEDIA_VIDEO}],
            caption='Xvideos Media',
        )
