# -*- coding: utf-8 -*-
"""
Flask应用工厂 - 轻量化应用创建
"""

import logging
from pathlib import Path

from flask import Flask, jsonify
from flask_cors import CORS

logger = logging.getLogger(__name__)


def create_app(config_override=None):
    """创建Flask应用实例"""
    logger.info("🔧 创建Flask应用...")

    app_dir = Path(__file__).parent.parent
    static_dir = app_dir / "web" / "static"

    app = Flask(
        __name__,
        static_folder=str(static_dir),
        static_url_path="/static",
    )

    _configure_app(app, config_override)

    # 配置CORS
    from .config import get_config
    CORS(app, origins=get_config('cors.origins', '*'))

    _register_blueprints(app)
    _register_error_handlers(app)
    _register_security_headers(app)

    logger.info("✅ Flask应用创建完成")
    return app


def _configure_app(app: Flask, config_override=None):
    """配置Flask应用"""
    from .config import get_config

    app.config.update(
        {
            "DEBUG": get_config("app.debug", False),
            "APP_NAME": get_config("app.name"),
            "APP_VERSION": get_config("app.version"),
        }
    )
    # JSON配置
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    # 应用自定义配置覆盖
    if config_override:
        app.config.update(config_override)
        logger.info(f"✅ 应用自定义配置: {list(config_override.keys())}")


def _register_blueprints(app: Flask):
    """注册蓝图"""
    from web.routes import main_bp
    app.register_blueprint(main_bp)

    from api.routes import api_bp
    app.register_blueprint(api_bp, url_prefix="/api")

    from modules.shortlink.routes import proxy_bp
    app.register_blueprint(proxy_bp, url_prefix="/proxy")

    logger.info("✅ 蓝图注册完成")


def _register_error_handlers(app: Flask):
    """注册错误处理器，全部返回 JSON"""

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({"success": False, "error": "Not found."}), 404

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        return jsonify({"success": False, "error": "Method not allowed."}), 405

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"内部服务器错误: {error}")
        return jsonify({"success": False, "error": "Internal server error."}), 500


def _register_security_headers(app: Flask):
    """注册安全头部中间件"""

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'

        if response.mimetype == 'text/html':
            response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
        elif response.mimetype in ('text/css', 'application/javascript', 'text/javascript'):
            response.headers['Cache-Control'] = 'public, max-age=86400'

        return response
