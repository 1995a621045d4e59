#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Social Media Downloader - 应用入口点
"""

import sys
import logging

from core import create_app, get_config

# 配置日志
from core.logging_config import setup_application_logging
setup_application_logging()
logger = logging.getLogger(__name__)


def log_startup_summary():
    """启动时输出关键配置及其来源（密钥只显示是否已配置）"""
    from core.config_priority import get_config_summary
    from modules.downloader.platforms import PLATFORM_REGISTRY

    for key, item in get_config_summary().items():
        logger.info(f"🔧 {key} = {item['value']} ({item['source']})")
    logger.info(f"🧩 已注册 {len(PLATFORM_REGISTRY)} 个平台: {', '.join(p.name for p in PLATFORM_REGISTRY)}")

    if not (get_config('downloader.api_key', '') or '').strip():
        logger.warning("⚠️ 未配置 DOWNLOADER_API_KEY，/api/download 将返回 500")


def main():
    """主函数"""
    try:
        logger.info("🚀 启动 Social Media Downloader...")
        log_startup_summary()

        app = create_app()
        host = get_config('app.host', '0.0.0.0')
        port = get_config('app.port', 3000)

        logger.info(f"🌐 启动Web服务器: http://{host}:{port}")
        app.run(host=host, port=port, debug=get_config('app.debug', False), threaded=True)

    except KeyboardInterrupt:
        logger.info("👋 用户中断，正在退出...")
    except Exception as e:
        logger.error(f"❌ 应用启动失败: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
