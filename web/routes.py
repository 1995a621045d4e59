# -*- coding: utf-8 -*-
"""
页面路由 - 前端页面
"""

from flask import Blueprint, current_app

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """主页"""
    return current_app.send_static_file('index.html')
