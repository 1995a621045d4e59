#!/usr/bin/env python3
"""
代理配置助手 - 统一的出站代理获取接口
下载管理器和短链解析器共用
"""

import logging
from typing import Optional, Dict

logger = logging.getLogger(__name__)


class ProxyHelper:
    """代理配置助手"""

    @staticmethod
    def get_proxy_url(module_name: str = "Unknown") -> Optional[str]:
        """获取配置的代理URL，未配置时返回 None"""
        from core.config import get_config
        proxy = (get_config('network.proxy', '') or '').strip()
        if not proxy:
            return None
        if '://' not in proxy:
            logger.warning(f"⚠️ {module_name}代理配置缺少协议，按 http 处理: {proxy}")
            proxy = f"http://{proxy}"
        return proxy

    @staticmethod
    def get_requests_proxy(module_name: str = "Unknown") -> Optional[Dict[str, str]]:
        """
        获取适用于requests库的代理配置

        Returns:
            dict: {'http': 'proxy_url', 'https': 'proxy_url'}
            None: 无代理
        """
        proxy = ProxyHelper.get_proxy_url(module_name)
        if not proxy:
            return None
        logger.debug(f"🌐 {module_name}使用代理: {proxy}")
        return {'http': proxy, 'https': proxy}


def get_requests_proxy_config(module_name: str = "Unknown") -> Optional[Dict[str, str]]:
    """获取requests代理配置的便捷函数"""
    return ProxyHelper.get_requests_proxy(module_name)
