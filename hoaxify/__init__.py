"""Hoaxify：用户注册、激活、认证与列表服务"""
