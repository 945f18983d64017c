# commerce/api/__init__.py
"""
API package bootstrap.

- 路由聚合由 `commerce/main.py` 的 mount_routers 管理
"""

__all__ = []
