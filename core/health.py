# -*- coding: utf-8 -*-
"""
健康检查模块 - /api/config 使用的系统状态

不返回任何密钥，只报告是否已配置
"""

import logging
import time
import psutil
from typing import Dict, Any

logger = logging.getLogger(__name__)


class HealthChecker:
    """健康检查器"""

    def __init__(self):
        self.start_time = time.time()

    def get_system_health(self) -> Dict[str, Any]:
        """获取系统健康状态"""
        health_data = {
            "status": "healthy",
            "timestamp": int(time.time()),
            "uptime": int(time.time() - self.start_time),
            "checks": {
                "api_key": self._check_api_key(),
                "platforms": self._check_platforms(),
                "memory": self._check_memory(),
            }
        }

        failed_checks = [name for name, check in health_data["checks"].items()
                         if not check.get("healthy", False)]
        if failed_checks:
            health_data["status"] = "degraded"
            health_data["failed_checks"] = failed_checks

        return health_data

    def _check_api_key(self) -> Dict[str, Any]:
        """检查下载 API Key 是否已配置"""
        from .config import get_config
        configured = bool((get_config('downloader.api_key', '') or '').strip())
        return {
            "healthy": configured,
            "message": "Downloader API key configured" if configured else "Downloader API key missing",
        }

    def _check_platforms(self) -> Dict[str, Any]:
        from modules.downloader.platforms import PLATFORM_REGISTRY
        return {
            "healthy": len(PLATFORM_REGISTRY) > 0,
            "message": f"{len(PLATFORM_REGISTRY)} platforms registered",
            "count": len(PLATFORM_REGISTRY),
        }

    def _check_memory(self) -> Dict[str, Any]:
        """检查当前进程内存使用"""
        try:
            rss_mb = psutil.Process().memory_info().rss / (1024 ** 2)
            memory = psutil.virtual_memory()
            # 系统内存使用率超过90%认为不健康
            return {
                "healthy": memory.percent < 90.0,
                "message": f"Process RSS {rss_mb:.1f}MB, system memory {memory.percent:.1f}% used",
                "rss_mb": round(rss_mb, 1),
                "used_percent": round(memory.percent, 1),
            }
        except (psutil.Error, OSError) as e:
            logger.warning(f"⚠️ 内存检查失败: {e}")
            return {
                "healthy": False,
                "message": f"Memory check failed: {e}",
            }


# 全局健康检查器实例
_health_checker = None


def get_health_checker() -> HealthChecker:
    """获取健康检查器实例"""
    global _health_checker
    if _health_checker is None:
        _health_checker = HealthChecker()
    return _health_checker
