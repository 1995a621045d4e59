# -*- coding: utf-8 -*-
"""
功能模块
"""
