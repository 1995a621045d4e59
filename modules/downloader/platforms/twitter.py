"""
Twitter/X 平台处理器

按 HD -> SEMI_HD -> SD 的顺序选择视频质量
"""

from typing import Dict, Any
from .base import BasePlatform, UNTITLED
from ..models import MEDIA_VIDEO, RESULT_VIDEO, NormalizedResult, Platform
from ..text_utils import escape_html

# (字段, 展示名称)
QUALITY_TIERS = (
    ('HD', 'HD'),
    ('SEMI_HD', 'SEMI HD'),
    ('SD', 'SD'),
)


class TwitterPlatform(BasePlatform):
    """Twitter/X 平台"""

    platform = Platform.TWITTER

    def __init__(self):
        super().__init__()
        self.supported_domains = ['twitter.com', 'x.com']
        self.endpoint = 'twitter'

    def normalize(self, payload: Dict[str, Any]) -> NormalizedResult:
        result = self.root(payload, 'result', 'Twitter data not found.')

        video_url = None
        quality = None
        for field, label in QUALITY_TIERS:
            video_url = self.dig(result, field, 'url')
            if video_url:
                quality = label
                break

        if not video_url:
            self.fail('Video URL not found.')

        title = payload.get('title') or UNTITLED
        caption = (
            "Twitter Downloader\n\n"
            f"<b>Title:</b> {escape_html(title)}\n"
            f"<b>Quality:</b> {quality}"
        )

        return NormalizedResult(
            type=RESULT_VIDEO,
            media=[{'url': video_url, 'type': MEDIA_VIDEO}],
            caption=caption,
            title=payload.get('title'),
        )
