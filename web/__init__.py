# -*- coding: utf-8 -*-
"""
Web模块 - 前端页面与静态资源
"""
