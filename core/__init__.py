# -*- coding: utf-8 -*-
"""
核心模块 - 应用工厂、配置、日志与错误处理
"""

from .app import create_app
from .config import Config, get_config

__all__ = ['create_app', 'Config', 'get_config']
