# -*- coding: utf-8 -*-
"""
下载错误类型

所有错误都在请求边界被转换为 JSON 错误响应
"""


class DownloaderError(Exception):
    """下载相关错误基类"""

    status_code = 500
    default_message = 'Download failed.'

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnsupportedPlatform(DownloaderError):
    status_code = 400
    default_message = 'Platform not recognized.'


class MissingApiKey(DownloaderError):
    status_code = 500
    default_message = 'Downloader API key is not configured.'


class UpstreamRequestError(DownloaderError):
    """网络错误或超时"""

    default_message = 'Failed to contact the downloader API.'


class UpstreamHttpError(DownloaderError):
    def __init__(self, status: int):
        self.status = status
        super().__init__(f'Downloader API responded with HTTP {status}.')


class UpstreamInvalidJson(DownloaderError):
    default_message = 'Invalid API response (not JSON).'


class NoHandler(DownloaderError):
    default_message = 'No handler found for this platform.'


class NormalizerFailure(DownloaderError):
    status_code = 400
    default_message = 'Failed to read media from the API response.'

    def __init__(self, reason: str = None):
        self.reason = reason or self.default_message
        super().__init__(self.reason)


class NoMediaFound(DownloaderError):
    status_code = 400
    default_message = 'No media found.'


class ShortlinkUpstreamError(DownloaderError):
    default_message = 'Failed to connect to the shortlink service.'


class RelayFetchFailure(DownloaderError):
    default_message = 'Relay fallback failed.'
