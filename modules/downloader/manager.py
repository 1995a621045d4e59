# -*- coding: utf-8 -*-
"""
下载管理器

识别平台 -> 调用上游下载 API -> 平台处理器规范化 -> 统一媒体列表校验
"""

import json
import logging
import threading
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import quote

import requests

from .errors import (
    MissingApiKey, NoHandler, NoMediaFound, NormalizerFailure,
    UnsupportedPlatform, UpstreamHttpError, UpstreamInvalidJson, UpstreamRequestError,
)
from .models import (
    MEDIA_TYPES, MediaItem, MediaResponse, NormalizedResult, PlatformRule, UpstreamRequest,
    infer_media_type, is_absolute_url,
)
from .platforms import detect_platform, get_platform

logger = logging.getLogger(__name__)

DEFAULT_CAPTION = 'Media'
USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36'
)


def normalize_media_entries(entries: Any) -> List[MediaItem]:
    """把处理器返回的 media 规范化为 MediaItem 列表

    - 字符串: 包含 .mp4 视为视频，否则视为图片
    - 字典/MediaItem: 缺少类型时按 url 推断
    - url 为空或不是绝对地址的条目被丢弃
    """
    if isinstance(entries, (str, dict, MediaItem)):
        entries = [entries]
    if not isinstance(entries, Iterable):
        return []

    items: List[MediaItem] = []
    for entry in entries:
        if isinstance(entry, MediaItem):
            url, media_type = entry.url, entry.type
        elif isinstance(entry, str):
            url, media_type = entry, None
        elif isinstance(entry, dict):
            url, media_type = entry.get('url'), entry.get('type')
        else:
            continue

        if not is_absolute_url(url):
            logger.debug(f"🔍 丢弃无效媒体地址: {url!r}")
            continue

        url = url.strip()
        if media_type not in MEDIA_TYPES:
            media_type = infer_media_type(url)
        items.append(MediaItem(url=url, type=media_type))
    return items


class DownloadManager:
    """下载管理器"""

    def __init__(self, api_base: Optional[str] = None, api_key: Optional[str] = None,
                 timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        self._api_base = api_base
        self._api_key = api_key
        self._timeout = timeout
        self.session = session or self._create_session()
        self.lock = threading.Lock()

        self.stats = {
            'total_requests': 0,
            'successful_requests': 0,
            'failed_requests': 0,
        }

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({
            'User-Agent': USER_AGENT,
            'Accept': 'application/json, text/plain, */*',
        })
        from core.proxy_helper import get_requests_proxy_config
        proxies = get_requests_proxy_config("下载管理器")
        if proxies:
            session.proxies.update(proxies)
        return session

    # ==================== 配置 ====================

    @property
    def api_base(self) -> str:
        if self._api_base is not None:
            return self._api_base
        from core.config import get_config
        return get_config('downloader.api_base')

    @property
    def api_key(self) -> str:
        if self._api_key is not None:
            return self._api_key
        from core.config import get_config
        return (get_config('downloader.api_key', '') or '').strip()

    @property
    def timeout(self) -> float:
        if self._timeout is not None:
            return self._timeout
        from core.config import get_config
        return get_config('downloader.timeout', 15)

    # ==================== 主流程 ====================

    def build_request(self, url: str, rule: PlatformRule) -> UpstreamRequest:
        """构建上游请求 URL"""
        api_key = self.api_key
        full_url = (
            f"{self.api_base.rstrip('/')}/{rule.endpoint}"
            f"?link={quote(url, safe='')}&apikey={api_key}"
        )
        return UpstreamRequest(platform=rule.platform, full_url=full_url, api_key=api_key)

    def fetch(self, url: str) -> MediaResponse:
        """获取并规范化指定链接的媒体信息"""
        self._count('total_requests')
        try:
            response = self._fetch(url)
        except Exception:
            self._count('failed_requests')
            raise
        self._count('successful_requests')
        return response

    def _fetch(self, url: str) -> MediaResponse:
        if not self.api_key:
            raise MissingApiKey()

        rule = detect_platform(url)
        if rule is None:
            raise UnsupportedPlatform()

        logger.info(f"🎯 识别平台: {rule.platform.value} -> {url}")
        upstream_request = self.build_request(url, rule)
        payload = self._call_upstream(upstream_request)

        handler = get_platform(rule.platform)
        if handler is None:
            raise NoHandler()

        result = handler.normalize(payload)
        if not isinstance(result, NormalizedResult) or not result.success:
            raise NormalizerFailure()

        # 即使处理器报告成功，也以最终媒体列表为准
        media = normalize_media_entries(result.media)
        if not media:
            raise NoMediaFound()

        logger.info(f"✅ {rule.platform.value} 解析成功: {len(media)} 个媒体, 首个: {media[0].url}")
        return MediaResponse(
            platform=rule.platform,
            type=result.type or media[0].type,
            media=media,
            caption=result.caption or result.title or DEFAULT_CAPTION,
            thumbnail=result.thumbnail or media[0].url,
            filename=result.filename,
        )

    def _call_upstream(self, upstream_request: UpstreamRequest) -> Any:
        """执行一次上游 GET 请求并解析 JSON"""
        logger.info(f"📡 请求上游 API [{upstream_request.platform.value}]: {upstream_request.redacted_url}")
        try:
            response = self.session.get(upstream_request.full_url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise UpstreamRequestError(f"Downloader API timed out after {self.timeout}s.") from e
        except requests.exceptions.RequestException as e:
            message = str(e).replace(upstream_request.api_key, '***') if upstream_request.api_key else str(e)
            raise UpstreamRequestError(f"Failed to contact the downloader API: {message}") from e

        if not 200 <= response.status_code < 300:
            raise UpstreamHttpError(response.status_code)

        text = response.text
        try:
            return json.loads(text)
        except ValueError as e:
            logger.error(f"❌ 上游响应不是 JSON: {text[:200]}")
            raise UpstreamInvalidJson() from e

    def _count(self, key: str):
        with self.lock:
            self.stats[key] += 1

    def get_stats(self) -> Dict[str, int]:
        with self.lock:
            return dict(self.stats)


# 全局下载管理器实例
_download_manager = None


def get_download_manager() -> DownloadManager:
    """获取下载管理器实例"""
    global _download_manager
    if _download_manager is None:
        _download_manager = DownloadManager()
    return _download_manager


def reset_download_manager():
    """重置下载管理器（配置变化后使用）"""
    global _download_manager
    _download_manager = None
