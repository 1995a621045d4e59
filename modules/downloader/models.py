# -*- coding: utf-8 -*-
"""
下载数据模型

平台识别结果、上游请求以及统一的媒体输出结构
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlparse


class Platform(str, Enum):
    """支持的平台（值即展示名称）"""

    INSTAGRAM = 'Instagram'
    TIKTOK = 'TikTok'
    TWITTER = 'Twitter'
    DOUYIN = 'Douyin'
    SNACKVIDEO = 'SnackVideo'
    MEDIAFIRE = 'MediaFire'
    SOUNDCLOUD = 'SoundCloud'
    THREADS = 'Threads'
    XVIDEOS = 'Xvideos'
    SPOTIFY = 'Spotify'
    YOUTUBE = 'YouTube'
    FACEBOOK = 'Facebook'


# 结果类型
RESULT_VIDEO = 'video'
RESULT_PHOTO = 'photo'
RESULT_AUDIO = 'audio'
RESULT_DOCUMENT = 'document'

# 媒体类型
MEDIA_VIDEO = 'video'
MEDIA_IMAGE = 'image'
MEDIA_AUDIO = 'audio'
MEDIA_DOCUMENT = 'document'

MEDIA_TYPES = (MEDIA_VIDEO, MEDIA_IMAGE, MEDIA_AUDIO, MEDIA_DOCUMENT)


def infer_media_type(url: str) -> str:
    """根据扩展名推断媒体类型（.mp4 视为视频，其余视为图片）"""
    return MEDIA_VIDEO if '.mp4' in (url or '') else MEDIA_IMAGE


def is_absolute_url(url: Any) -> bool:
    if not isinstance(url, str) or not url.strip():
        return False
    parsed = urlparse(url.strip())
    return bool(parsed.scheme and parsed.netloc)


@dataclass(frozen=True)
class PlatformRule:
    """平台匹配规则"""

    match_domains: Tuple[str, ...]
    platform: Platform
    endpoint: str

    def matches(self, url: str) -> bool:
        lowered = (url or '').lower()
        return any(domain in lowered for domain in self.match_domains)


@dataclass(frozen=True)
class UpstreamRequest:
    """单次上游请求"""

    platform: Platform
    full_url: str
    api_key: str = field(default='', repr=False)

    @property
    def redacted_url(self) -> str:
        """隐藏 API Key 的 URL，用于日志"""
        if not self.api_key:
            return self.full_url
        return self.full_url.replace(self.api_key, '***')


@dataclass(frozen=True)
class MediaItem:
    url: str
    type: str = MEDIA_IMAGE

    def to_dict(self) -> Dict[str, str]:
        return {'url': self.url, 'type': self.type}


@dataclass
class NormalizedResult:
    """平台处理器的输出

    media 中的元素可以是 URL 字符串、{'url', 'type'} 字典或 MediaItem，
    由 DownloadManager 统一规范化。
    """

    type: str
    media: List[Any] = field(default_factory=list)
    caption: str = ''
    thumbnail: Optional[str] = None
    title: Optional[str] = None
    filename: Optional[str] = None
    success: bool = True


@dataclass
class MediaResponse:
    """规范化后的最终结果"""

    platform: Platform
    type: str
    media: List[MediaItem]
    caption: str
    thumbnail: str
    filename: Optional[str] = None

    def to_client_payload(self) -> Dict[str, Any]:
        """转换为 /api/download 的 data 字段"""
        payload = {
            'media': [dict(item.to_dict(), resolution='HD') for item in self.media],
            'preview': self.thumbnail or self.media[0].url,
            'caption': self.caption or '',
            'type': self.type,
            'platform': self.platform.value,
        }
        if self.filename:
            payload['filename'] = self.filename
        return payload
