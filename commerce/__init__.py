# commerce/__init__.py
"""
订单管理后端：订单 / 地址 / 用户查询，按 JWT claims 做归属与管理员鉴权。
"""

__version__ = "1.0.0"
