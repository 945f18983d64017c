# commerce/db/uow.py
"""
Unit of Work（UoW）：统一事务边界。

    async with UnitOfWork(session) as uow:
        uow.session.add(...)

- 无异常 -> commit
- 有异常 -> rollback，异常继续向外抛
- 只对自己创建的 session 负责 close；外部传入的现成 session 不关闭
"""

from __future__ import annotations

from typing import Callable, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

AsyncSessionFactory = Callable[[], AsyncSession]


class UnitOfWork:
    def __init__(self, session_or_factory: Union[AsyncSession, AsyncSessionFactory]) -> None:
        self._session_or_factory = session_or_factory
        self.session: Optional[AsyncSession] = None
        self._owns_session: bool = False

    async def __aenter__(self) -> "UnitOfWork":
        if isinstance(self._session_or_factory, AsyncSession):
            self.session = self._session_or_factory
            self._owns_session = False
        else:
            factory = self._session_or_factory
            if not callable(factory):
                raise TypeError("UnitOfWork 期望传入 AsyncSession 或 async_sessionmaker。")
            self.session = factory()
            self._owns_session = True

        if not isinstance(self.session, AsyncSession):
            raise TypeError("async with UnitOfWork(...) 需要 AsyncSession。")
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if self.session is None:
            return False

        try:
            if exc_type:
                await self.session.rollback()
            else:
                await self.session.commit()
        finally:
            if self._owns_session:
                try:
                    await self.session.close()
                finally:
                    self.session = None
        # False -> 异常继续向外抛
        return False
