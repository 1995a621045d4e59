"""
Instagram 平台处理器

支持单视频帖子和多图轮播（slides）
"""

from typing import Dict, Any, List
from .base import BasePlatform, UNTITLED
from ..models import (
    MEDIA_IMAGE, MEDIA_VIDEO, RESULT_PHOTO, RESULT_VIDEO,
    NormalizedResult, Platform,
)
from ..text_utils import format_number

IMAGE_EXTENSIONS = {'jpg', 'jpeg', 'png', 'webp', 'heic'}


class InstagramPlatform(BasePlatform):
    """Instagram 平台"""

    platform = Platform.INSTAGRAM

    def __init__(self):
        super().__init__()
        self.supported_domains = ['instagram.com']
        self.endpoint = 'instagram'

    def normalize(self, payload: Dict[str, Any]) -> NormalizedResult:
        data = self.root(payload, 'data', 'Instagram data not found.')

        metadata = data.get('metadata') or {}
        username = data.get('username') or metadata.get('username') or '-'
        likes = format_number(data.get('likeCount') or metadata.get('likeCount') or 0)
        title = metadata.get('title') or UNTITLED
        caption = f"{title}\nBy @{username}\n{likes} Likes"

        video_url, photo_urls = self._extract_media(data)

        if video_url:
            return NormalizedResult(
                type=RESULT_VIDEO,
                media=[{'url': video_url, 'type': MEDIA_VIDEO}],
                caption=caption,
                thumbnail=data.get('thumbnail') or video_url,
            )
        if photo_urls:
            return NormalizedResult(
                type=RESULT_PHOTO,
                media=[{'url': url, 'type': MEDIA_IMAGE} for url in photo_urls],
                caption=caption,
                thumbnail=photo_urls[0],
            )
        # 既没有视频也没有图片：交给 DownloadManager 报告 NoMediaFound
        return NormalizedResult(type=RESULT_PHOTO, media=[], caption=caption)

    def _extract_media(self, data: Dict[str, Any]):
        """优先使用 videoUrls，否则遍历 slides；找到视频的那一页之后停止"""
        video_urls = data.get('videoUrls') or []
        if video_urls and isinstance(video_urls[0], dict) and video_urls[0].get('url'):
            return video_urls[0]['url'], []

        video_url = ''
        photo_urls: List[str] = []
        for slide in data.get('slides') or []:
            if not isinstance(slide, dict):
                continue
            for media in slide.get('mediaUrls') or []:
                if not isinstance(media, dict):
                    continue
                ext = str(media.get('ext') or '').lower()
                if ext == 'mp4' and not video_url:
                    video_url = media.get('url') or ''
                elif ext in IMAGE_EXTENSIONS and media.get('url'):
                    photo_urls.append(media['url'])
            if video_url:
                break
        return video_url, photo_urls
