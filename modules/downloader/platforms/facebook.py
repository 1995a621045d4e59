"""
Facebook 平台处理器

按 hd -> sd -> url -> video_url 的顺序选择视频地址
"""

from typing import Dict, Any
from .base import BasePlatform
from ..models import MEDIA_VIDEO, RESULT_VIDEO, NormalizedResult, Platform

VIDEO_FIELDS = ('hd', 'sd', 'url', 'video_url')


class FacebookPlatform(BasePlatform):
    """Facebook 平台"""

    platform = Platform.FACEBOOK

    def __init__(self):
        super().__init__()
        self.supported_domains = ['facebook.com', 'fb.watch', 'm.facebook.com']
        self.endpoint = 'facebook'

    def normalize(self, payload: Dict[str, Any]) -> NormalizedResult:
        if not self.dig(payload, 'success'):
            self.fail('Failed to get data.')

        data = payload.get('data') or payload
        if not isinstance(data, dict):
            self.fail('Failed to get data.')

        video_url = next((data[field] for field in VIDEO_FIELDS if data.get(field)), None)
        if not video_url:
            self.fail('Video URL not found.')

        title = data.get('title') or data.get('caption') or 'Video'
        return NormalizedResult(
            type=RESULT_VIDEO,
            media=[{'url': video_url, 'type': MEDIA_VIDEO}],
            caption=f"Facebook Video\n{title}",
            thumbnail=data.get('thumbnail') or None,
            title=data.get('title'),
        )
