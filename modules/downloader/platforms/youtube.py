"""
YouTube 平台处理器

dlink 列表去重后使用第一个链接
"""

from typing import Dict, Any, List
from .base import BasePlatform, UNTITLED
from ..models import MEDIA_VIDEO, RESULT_VIDEO, NormalizedResult, Platform
from ..text_utils import escape_markdown


class YouTubePlatform(BasePlatform):
    """YouTube 平台"""

    platform = Platform.YOUTUBE

    def __init__(self):
        super().__init__()
        self.supported_domains = ['youtube.com', 'youtu.be']
        self.endpoint = 'youtube'

    def normalize(self, payload: Dict[str, Any]) -> NormalizedResult:
        data = self.dig(payload, 'data') or {}
        if not isinstance(data, dict):
            self.fail('YouTube data not found.')

        dlinks = self._unique_links(data.get('dlink'))
        if not dlinks:
            self.fail('Video link not found.')

        title = data.get('title') or UNTITLED
        duration = str(data.get('duration') or '-')
        caption = (
            "*MP4 Downloader*\n\n"
            f"*Title:* {escape_markdown(title)}\n"
            f"*Duration:* `{escape_markdown(duration)}`"
        )

        return NormalizedResult(
            type=RESULT_VIDEO,
            media=[{'url': dlinks[0], 'type': MEDIA_VIDEO}],
            caption=caption,
            thumbnail=data.get('thumbnail') or None,
            title=data.get('title'),
        )

    @staticmethod
    def _unique_links(links: Any) -> List[str]:
        if not isinstance(links, list):
            return []
        # 保持原顺序去重
        return list(dict.fromkeys(link for link in links if isinstance(link, str)))
