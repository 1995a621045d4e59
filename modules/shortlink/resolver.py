# -*- coding: utf-8 -*-
"""
短链解析代理

调用外部短链服务；当服务报告"网页内容类型错误"时，直接转发原链接的字节流
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

import requests
from urllib3.exceptions import HTTPError as Urllib3HTTPError

from modules.downloader.errors import RelayFetchFailure, ShortlinkUpstreamError

logger = logging.getLogger(__name__)

# 短链服务无法识别内容类型时返回的错误信息
FALLBACK_PATTERN = re.compile(r'wrong type of the web page content|not a valid video file', re.IGNORECASE)

DEFAULT_CONTENT_TYPE = 'video/mp4'
RELAY_DISPOSITION = 'inline; filename="video.mp4"'


@dataclass
class RelayStream:
    """转发中的上游响应"""

    response: requests.Response
    content_type: str
    content_length: Optional[str]
    chunk_size: int
    content_encoding: Optional[str] = None

    @property
    def headers(self) -> Dict[str, str]:
        headers = {'Content-Disposition': RELAY_DISPOSITION}
        if self.content_encoding:
            headers['Content-Encoding'] = self.content_encoding
        if self.content_length:
            headers['Content-Length'] = self.content_length
        return headers

    def _chunks(self) -> Iterator[bytes]:
        if self.content_encoding:
            # 压缩内容原样转发，保证 Content-Length 与实际字节数一致
            return self.response.raw.stream(self.chunk_size, decode_content=False)
        return self.response.iter_content(chunk_size=self.chunk_size)

    def iter_chunks(self) -> Iterator[bytes]:
        """逐块读取上游内容，出错时终止响应而不是挂起"""
        try:
            for chunk in self._chunks():
                if chunk:
                    yield chunk
        except Urllib3HTTPError as e:
            logger.error(f"❌ 转发流中断: {e}")
            raise requests.exceptions.ChunkedEncodingError(e) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"❌ 转发流中断: {e}")
            raise
        finally:
            self.response.close()

    def close(self):
        self.response.close()


@dataclass
class ShortlinkOutcome:
    """解析结果：JSON 原样转发或字节流转发，二选一"""

    payload: Any = None
    relay: Optional[RelayStream] = None


def should_relay(payload: Any) -> bool:
    """是否属于需要转发原链接的已知错误"""
    if not isinstance(payload, dict) or payload.get('status') != 'error':
        return False
    return bool(FALLBACK_PATTERN.search(str(payload.get('message') or '')))


class ShortlinkResolver:
    """短链解析器"""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 chunk_size: Optional[int] = None, session: Optional[requests.Session] = None):
        from core.config import get_config
        self.base_url = base_url or get_config('shortlink.base_url')
        self.timeout = timeout if timeout is not None else get_config('shortlink.timeout', 15)
        self.chunk_size = chunk_size or get_config('shortlink.chunk_size', 64 * 1024)
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        from core.proxy_helper import get_requests_proxy_config
        proxies = get_requests_proxy_config("短链解析")
        if proxies:
            session.proxies.update(proxies)
        return session

    def resolve(self, send_url: str, source: Optional[str] = None) -> ShortlinkOutcome:
        """解析短链"""
        payload = self._query_service(send_url, source or '')

        if should_relay(payload):
            logger.warning("⚠️ 检测到非直链视频内容，尝试直接转发...")
            return ShortlinkOutcome(relay=self._open_relay(send_url))

        return ShortlinkOutcome(payload=payload)

    def _query_service(self, send_url: str, source: str) -> Any:
        params = {'send': send_url, 'source': source}
        logger.info(f"🔗 请求短链服务: {send_url} (source={source or '-'})")
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise ShortlinkUpstreamError(f"Failed to connect to get.php: {e}") from e

        text = response.text
        try:
            return json.loads(text)
        except ValueError as e:
            logger.error(f"❌ 短链服务响应不是 JSON: {text[:200]}")
            raise ShortlinkUpstreamError("Invalid shortlink response (not JSON).") from e

    def _open_relay(self, send_url: str) -> RelayStream:
        try:
            response = self.session.get(send_url, stream=True, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise RelayFetchFailure(f"Relay fallback failed: {e}") from e

        if response.status_code >= 400:
            response.close()
            raise RelayFetchFailure(f"Relay fallback failed: HTTP {response.status_code}")

        content_type = response.headers.get('Content-Type') or DEFAULT_CONTENT_TYPE
        content_encoding = (response.headers.get('Content-Encoding') or '').strip()
        if content_encoding.lower() == 'identity':
            content_encoding = ''
        logger.info(f"📤 开始转发: {send_url} ({content_type}{', ' + content_encoding if content_encoding else ''})")
        return RelayStream(
            response=response,
            content_type=content_type,
            content_length=response.headers.get('Content-Length'),
            chunk_size=self.chunk_size,
            content_encoding=content_encoding or None,
        )


# 全局短链解析器实例
_resolver = None


def get_shortlink_resolver() -> ShortlinkResolver:
    """获取短链解析器实例"""
    global _resolver
    if _resolver is None:
        _resolver = ShortlinkResolver()
    return _resolver


def reset_shortlink_resolver():
    global _resolver
    _resolver = None
