"""
平台处理器模块

支持的平台（按匹配顺序）：
- Instagram
- TikTok
- Twitter/X
- Douyin
- SnackVideo
- MediaFire
- SoundCloud
- Threads
- Xvideos
- Spotify
- YouTube
- Facebook

同一张注册表同时用于平台识别和响应处理器分发
"""

from typing import Dict, Optional, Tuple

from ..models import Platform, PlatformRule
from .base import BasePlatform
from .instagram import InstagramPlatform
from .tiktok import TikTokPlatform
from .twitter import TwitterPlatform
from .douyin import DouyinPlatform
from .snackvideo import SnackVideoPlatform
from .mediafire import MediaFirePlatform
from .soundcloud import SoundCloudPlatform
from .threads import ThreadsPlatform
from .xvideos import XvideosPlatform
from .spotify import SpotifyPlatform
from .youtube import YouTubePlatform
from .facebook import FacebookPlatform

# 平台注册表，顺序即匹配优先级
PLATFORM_REGISTRY: Tuple[BasePlatform, ...] = (
    InstagramPlatform(),
    TikTokPlatform(),
    TwitterPlatform(),
    DouyinPlatform(),
    SnackVideoPlatform(),
    MediaFirePlatform(),
    SoundCloudPlatform(),
    ThreadsPlatform(),
    XvideosPlatform(),
    SpotifyPlatform(),
    YouTubePlatform(),
    FacebookPlatform(),
)

PLATFORM_RULES: Tuple[PlatformRule, ...] = tuple(handler.rule for handler in PLATFORM_REGISTRY)

# 平台 -> 处理器
PLATFORM_MAPPING: Dict[Platform, BasePlatform] = {
    handler.platform: handler for handler in PLATFORM_REGISTRY
}


def detect_platform(url: str) -> Optional[PlatformRule]:
    """根据 URL 识别平台，未匹配时返回 None"""
    if not isinstance(url, str):
        return None
    for rule in PLATFORM_RULES:
        if rule.matches(url):
            return rule
    return None


def get_platform(platform: Platform) -> Optional[BasePlatform]:
    """根据平台获取响应处理器"""
    return PLATFORM_MAPPING.get(platform)


def get_platform_for_url(url: str) -> Optional[BasePlatform]:
    """根据 URL 获取对应的平台处理器"""
    rule = detect_platform(url)
    return get_platform(rule.platform) if rule else None


__all__ = [
    'BasePlatform',
    'InstagramPlatform',
    'TikTokPlatform',
    'TwitterPlatform',
    'DouyinPlatform',
    'SnackVideoPlatform',
    'MediaFirePlatform',
    'SoundCloudPlatform',
    'ThreadsPlatform',
    'XvideosPlatform',
    'SpotifyPlatform',
    'YouTubePlatform',
    'FacebookPlatform',
    'PLATFORM_REGISTRY',
    'PLATFORM_RULES',
    'PLATFORM_MAPPING',
    'detect_platform',
    'get_platform',
    'get_platform_for_url',
]
