# -*- coding: utf-8 -*-
"""
下载模块 - 平台识别、上游 API 调用与响应规范化
"""

from .manager import DownloadManager, get_download_manager
from .models import MediaItem, MediaResponse, NormalizedResult, Platform

__all__ = ['DownloadManager', 'get_download_manager', 'MediaItem', 'MediaResponse', 'NormalizedResult', 'Platform']
