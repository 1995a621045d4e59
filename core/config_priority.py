"""
统一的配置优先级管理器

优先级顺序（从高到低）：
1. 环境变量 (最高优先级)
2. 配置文件 (config.yml)
3. 默认值 (最低优先级)
"""

import os
import logging
from typing import Any, Optional, Dict
from pathlib import Path

logger = logging.getLogger(__name__)

# 常见的环境变量别名
ENV_ALIASES: Dict[str, tuple] = {
    'app.host': ('HOST',),
    'app.port': ('PORT',),
    'app.debug': ('DEBUG',),
    'downloader.api_key': ('DOWNLOADER_API_KEY', 'API_KEY'),
    'downloader.api_base': ('DOWNLOADER_API_BASE',),
    'network.proxy': ('DOWNLOADER_PROXY',),
    'logging.level': ('LOG_LEVEL',),
    'logging.file': ('LOG_FILE',),
    'logging.file_in_container': ('ENABLE_FILE_LOGGING',),
}

# 不允许出现在日志中的配置键
SECRET_KEYS = {'downloader.api_key'}


class ConfigPriorityManager:
    """统一的配置优先级管理器"""

    def __init__(self):
        self._cache = {}
        self._cache_enabled = True

    def get_value(self, key: str, default: Any = None, value_type: type = None) -> Any:
        """
        按优先级获取配置值

        Args:
            key: 配置键（支持点号分隔，如 'downloader.api_key'）
            default: 默认值
            value_type: 期望的值类型（用于类型转换）

        Returns:
            配置值
        """
        cache_key = f"{key}:{type(default).__name__}"
        if self._cache_enabled and cache_key in self._cache:
            return self._cache[cache_key]

        env_value = self._get_from_env(key)
        file_value = self._get_from_config_file(key)
        if env_value is not None:
            value, source = env_value, "environment"
        elif file_value is not None:
            value, source = file_value, "config_file"
        else:
            value, source = default, "default"

        # 类型转换
        if value is not None and value_type is not None:
            value = self._convert_type(value, value_type, key)
        elif value is not None and default is not None:
            value = self._convert_type(value, type(default), key)

        if self._cache_enabled:
            self._cache[cache_key] = value

        shown = '***' if key in SECRET_KEYS and value else value
        logger.debug(f"🔧 配置获取: {key} = {shown} (来源: {source})")
        return value

    def _get_from_env(self, key: str) -> Optional[str]:
        """从环境变量获取值

        例如: downloader.api_key -> DOWNLOADER_API_KEY，另外检查别名
        """
        for alias in ENV_ALIASES.get(key, ()):
            alias_value = os.environ.get(alias)
            if alias_value is not None:
                return alias_value

        return os.environ.get(key.upper().replace('.', '_'))

    def _get_from_config_file(self, key: str) -> Optional[Any]:
        """从配置文件获取值"""
        from . import config as config_module
        return config_module.config.get_file_value(key)

    def _convert_type(self, value: Any, target_type: type, key: str) -> Any:
        """类型转换"""
        if value is None:
            return None

        try:
            if isinstance(value, target_type):
                return value

            if isinstance(value, str):
                if target_type == bool:
                    return value.strip().lower() in ('true', '1', 'yes', 'on', 'enabled')
                elif target_type == int:
                    return int(value)
                elif target_type == float:
                    return float(value)
                elif target_type == Path:
                    return Path(value)
                elif target_type == str:
                    return value

            return target_type(value)

        except (ValueError, TypeError) as e:
            logger.warning(f"⚠️ 配置类型转换失败 {key}: {value} -> {target_type.__name__}: {e}")
            return value

    def clear_cache(self):
        """清除所有缓存"""
        self._cache.clear()
        logger.debug("🧹 配置缓存已清除")

    def get_config_source(self, key: str) -> str:
        """获取配置值的来源"""
        if self._get_from_env(key) is not None:
            return "environment"
        if self._get_from_config_file(key) is not None:
            return "config_file"
        return "default"


# 全局实例
_priority_manager = ConfigPriorityManager()


def get_config_value(key: str, default: Any = None, value_type: type = None) -> Any:
    """统一的配置获取函数"""
    return _priority_manager.get_value(key, default, value_type)


def get_config_source(key: str) -> str:
    """获取配置值的来源"""
    return _priority_manager.get_config_source(key)


def clear_config_cache():
    """清除配置缓存"""
    _priority_manager.clear_cache()


# /api/config 中展示的配置项
SUMMARY_KEYS = (
    'app.port',
    'downloader.api_base',
    'downloader.api_key',
    'downloader.timeout',
    'shortlink.base_url',
    'network.proxy',
)

# 只报告是否已设置，不展示具体值（代理地址可能包含账号密码）
MASKED_KEYS = SECRET_KEYS | {'network.proxy'}


def get_config_summary(keys: tuple = SUMMARY_KEYS) -> Dict[str, Dict[str, Any]]:
    """配置值及其来源"""
    from .config import get_config
    summary = {}
    for key in keys:
        value = get_config(key)
        if key in MASKED_KEYS:
            value = bool(value)
        summary[key] = {'value': value, 'source': get_config_source(key)}
    return summary
