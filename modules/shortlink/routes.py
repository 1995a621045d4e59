# -*- coding: utf-8 -*-
"""
短链代理路由 - /proxy/get.php
"""

import logging
from flask import Blueprint, Response, request, jsonify

from core.error_handler import proxy_error_handler
from .resolver import get_shortlink_resolver

logger = logging.getLogger(__name__)

proxy_bp = Blueprint('proxy', __name__)


@proxy_bp.route('/get.php', methods=['GET'])
@proxy_error_handler
def shortlink_get():
    """短链解析，必要时转发原始视频流"""
    send = (request.args.get('send') or '').strip()
    if not send:
        return jsonify({"status": "error", "message": "Missing 'send' parameter."}), 400

    outcome = get_shortlink_resolver().resolve(send, request.args.get('source'))

    if outcome.relay is not None:
        relay = outcome.relay
        response = Response(
            relay.iter_chunks(),
            status=200,
            content_type=relay.content_type,
            headers=relay.headers,
        )
        # HEAD 请求不会迭代生成器，上游连接需要在响应关闭时释放
        response.call_on_close(relay.close)
        return response

    return jsonify(outcome.payload)
