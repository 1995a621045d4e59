# -*- coding: utf-8 -*-
"""
API模块
"""
