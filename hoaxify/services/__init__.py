"""业务服务"""
