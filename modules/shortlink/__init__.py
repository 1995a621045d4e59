# -*- coding: utf-8 -*-
"""
短链模块 - 短链解析代理与视频流转发
"""

from .resolver import ShortlinkResolver, get_shortlink_resolver

__all__ = ['ShortlinkResolver', 'get_shortlink_resolver']
