# -*- coding: utf-8 -*-
"""
错误处理 - 把下载/代理错误转换为 JSON 响应，并统计错误次数
"""

import logging
import threading
import traceback
import functools
from typing import Callable, Dict, Any
from flask import jsonify

from modules.downloader.errors import DownloaderError

logger = logging.getLogger(__name__)


class ErrorHandler:
    """错误处理器"""

    def __init__(self):
        self.error_counts: Dict[str, int] = {}
        self._lock = threading.Lock()

    def record_error(self, error: Exception, context: str = "") -> None:
        """记录错误次数"""
        error_key = f"{type(error).__name__}:{context}"
        with self._lock:
            self.error_counts[error_key] = self.error_counts.get(error_key, 0) + 1

    def get_error_stats(self) -> Dict[str, int]:
        """获取错误统计"""
        with self._lock:
            return self.error_counts.copy()

    def reset(self) -> None:
        with self._lock:
            self.error_counts.clear()


# 全局错误处理器
_error_handler = ErrorHandler()


def get_error_handler() -> ErrorHandler:
    """获取错误处理器实例"""
    return _error_handler


def _download_envelope(message: str) -> Dict[str, Any]:
    return {"success": False, "error": message}


def _proxy_envelope(message: str) -> Dict[str, Any]:
    return {"status": "error", "message": message}


def _handle(func: Callable, envelope: Callable[[str], Dict[str, Any]], unexpected_prefix: str) -> Callable:
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DownloaderError as e:
            get_error_handler().record_error(e, func.__name__)
            if e.status_code >= 500:
                logger.error(f"❌ {type(e).__name__} [{func.__name__}]: {e.message}")
            else:
                logger.warning(f"⚠️ {type(e).__name__} [{func.__name__}]: {e.message}")
            return jsonify(envelope(e.message)), e.status_code
        except ValueError as e:
            get_error_handler().record_error(e, func.__name__)
            logger.warning(f"⚠️ 参数错误 [{func.__name__}]: {e}")
            return jsonify(envelope(f"Invalid parameter: {e}")), 400
        except Exception as e:
            get_error_handler().record_error(e, func.__name__)
            logger.error(f"❌ API错误 [{func.__name__}]: {e}")
            logger.error(f"详细信息: {traceback.format_exc()}")

            body = envelope(f"{unexpected_prefix}{e}")
            # 在调试模式下返回详细错误信息
            from core.config import get_config
            if get_config('app.debug', False):
                body.update({"type": type(e).__name__, "traceback": traceback.format_exc()})
            return jsonify(body), 500

    return wrapper


def api_error_handler(func: Callable) -> Callable:
    """API错误处理装饰器，错误格式为 {success: false, error}"""
    return _handle(func, _download_envelope, "Server error: ")


def proxy_error_handler(func: Callable) -> Callable:
    """代理错误处理装饰器，错误格式为 {status: "error", message}"""
    return _handle(func, _proxy_envelope, "Proxy error: ")
