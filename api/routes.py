# -*- coding: utf-8 -*-
"""
API路由 - 下载解析与状态接口
"""

import logging
from flask import Blueprint, request, jsonify

from core.error_handler import api_error_handler, get_error_handler

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__)


# ==================== 下载相关API ====================

@api_bp.route('/download', methods=['POST'])
@api_error_handler
def api_download():
    """解析链接，返回可下载的媒体列表"""
    data = request.get_json(silent=True) or {}
    url = data.get('url') if isinstance(data, dict) else None

    if not url or not isinstance(url, str) or not url.strip():
        return jsonify({"success": False, "error": "URL is required."}), 400

    url = url.strip()
    logger.info(f"📥 解析请求: {url}")

    from modules.downloader.manager import get_download_manager
    result = get_download_manager().fetch(url)

    return jsonify({
        "success": True,
        "data": result.to_client_payload(),
    })


@api_bp.route('/platforms', methods=['GET'])
def api_platforms():
    """支持的平台列表"""
    from modules.downloader.platforms import PLATFORM_RULES
    return jsonify({
        "success": True,
        "platforms": [
            {
                "name": rule.platform.value,
                "domains": list(rule.match_domains),
                "endpoint": rule.endpoint,
            }
            for rule in PLATFORM_RULES
        ],
    })


# ==================== 系统状态API ====================

@api_bp.route('/config', methods=['GET'])
def api_config():
    """服务状态，不包含任何密钥"""
    from core.config import get_config
    from core.config_priority import get_config_summary
    from core.health import get_health_checker
    from modules.downloader.manager import get_download_manager
    from modules.downloader.platforms import PLATFORM_RULES

    health = get_health_checker().get_system_health()
    return jsonify({
        "success": True,
        "status": health["status"],
        "app": get_config('app.name'),
        "version": get_config('app.version'),
        "uptime": health["uptime"],
        "api_key_configured": health["checks"]["api_key"]["healthy"],
        "platforms": [rule.platform.value for rule in PLATFORM_RULES],
        "checks": health["checks"],
        "config": get_config_summary(),
        "stats": get_download_manager().get_stats(),
        "errors": get_error_handler().get_error_stats(),
    })
