"""
SnackVideo 平台处理器
"""

from typing import Dict, Any
from .base import BasePlatform
from ..models import MEDIA_VIDEO, RESULT_VIDEO, NormalizedResult, Platform


class SnackVideoPlatform(BasePlatform):
    """SnackVideo 平台"""

    platform = Platform.SNACKVIDEO

    def __init__(self):
        super().__init__()
        self.supported_domains = ['snackvideo.com', 's.snackvideo.com']
        self.endpoint = 'snackvideo'

    def normalize(self, payload: Dict[str, Any]) -> NormalizedResult:
        video_url = self.dig(payload, 'result', 'video', 'downloadUrl')
        if not video_url:
            self.fail('Video URL not found.')

        return NormalizedResult(
            type=RESULT_VIDEO,
            media=[{'url': video_url, 'type': MEDIA_VIDEO}],
            caption='*SnackVideo Downloader*',
        )
