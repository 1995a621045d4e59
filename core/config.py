# -*- coding: utf-8 -*-
"""
配置模块 - 默认值 + config.yml

实际取值请使用 get_config()，它按 环境变量 > 配置文件 > 默认值 的优先级解析
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    'app': {
        'name': 'Social Media Downloader',
        'version': '1.0.0',
        'host': '0.0.0.0',
        'port': 3000,
        'debug': False,
    },
    'downloader': {
        'api_base': 'https://api.ferdev.my.id/downloader',
        'api_key': '',
        'timeout': 15,
    },
    'shortlink': {
        'base_url': 'https://shtl.pw/getmylink/get.php',
        'timeout': 15,
        'chunk_size': 64 * 1024,
    },
    'network': {
        'proxy': '',
    },
    'cors': {
        'origins': '*',
    },
    'logging': {
        'level': 'INFO',
        'file': 'app.log',
        'dir': 'data/logs',
        'file_in_container': False,
    },
}


class Config:
    """配置文件管理器"""

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = Path(config_file or os.environ.get('CONFIG_FILE', 'config.yml'))
        self._data = copy.deepcopy(DEFAULT_CONFIG)
        self._file_data: Dict[str, Any] = {}
        self.load()

    def load(self):
        """加载配置文件，文件不存在时只使用默认值"""
        if not self.config_file.exists():
            logger.debug(f"🔍 配置文件不存在，使用默认配置: {self.config_file}")
            return

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"❌ 配置文件加载失败 {self.config_file}: {e}")
            return

        if not isinstance(loaded, dict):
            logger.warning(f"⚠️ 配置文件格式无效: {self.config_file}")
            return

        self._file_data = loaded
        self._merge(self._data, loaded)
        logger.info(f"✅ 配置文件已加载: {self.config_file}")

    def _merge(self, base: Dict[str, Any], override: Dict[str, Any]):
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                self._merge(base[key], value)
            else:
                base[key] = value

    @staticmethod
    def _lookup(data: Dict[str, Any], key: str) -> Optional[Any]:
        current: Any = data
        for part in key.split('.'):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current

    def get(self, key: str, default: Any = None) -> Any:
        """获取配置文件或默认配置中的值（不含环境变量）"""
        value = self._lookup(self._data, key)
        return default if value is None else value

    def get_file_value(self, key: str) -> Optional[Any]:
        """只从配置文件中获取值"""
        return self._lookup(self._file_data, key)


# 全局配置实例
config = Config()


def reload_config(config_file: Optional[str] = None) -> Config:
    """重新加载配置（测试或热更新时使用）"""
    global config
    config = Config(config_file)
    from .config_priority import clear_config_cache
    clear_config_cache()
    return config


def get_config(key: str, default: Any = None) -> Any:
    """按优先级获取配置值"""
    from .config_priority import get_config_value
    if default is None:
        default = config.get(key)
    return get_config_value(key, default)
