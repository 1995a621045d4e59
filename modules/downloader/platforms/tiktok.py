"""
TikTok 平台处理器
"""

from typing import Dict, Any
from .base import BasePlatform, UNTITLED
from ..models import MEDIA_VIDEO, RESULT_VIDEO, NormalizedResult, Platform
from ..text_utils import escape_html, format_number


class TikTokPlatform(BasePlatform):
    """TikTok 平台"""

    platform = Platform.TIKTOK

    def __init__(self):
        super().__init__()
        self.supported_domains = ['tiktok.com', 'vm.tiktok.com']
        self.endpoint = 'tiktok'

    def normalize(self, payload: Dict[str, Any]) -> NormalizedResult:
        data = self.root(payload, 'data', 'TikTok data not found.')

        video_url = data.get('play') or ''
        if not video_url:
            self.fail('Video URL not found.')

        username = self.dig(data, 'author', 'unique_id') or '-'
        views = format_number(data.get('play_count') or 0)
        title = data.get('title') or UNTITLED
        caption = (
            f"<b>{escape_html(title)}</b>\n"
            f'By <a href="https://www.tiktok.com/@{username}">@{username}</a>\n'
            f"{views} Views"
        )

        return NormalizedResult(
            type=RESULT_VIDEO,
            media=[{'url': video_url, 'type': MEDIA_VIDEO}],
            caption=caption,
            title=data.get('title'),
        )
