# UnitOfWork：成功提交 / 异常回滚 / 只关闭自己创建的 session
import pytest
from sqlalchemy import select

from commerce.db.uow import UnitOfWork
from commerce.models.user import User


async def _emails(app):
    async with app.state.session_factory() as s:
        res = await s.execute(select(User.email).order_by(User.id))
        return list(res.scalars().all())


async def test_commit_on_success(app):
    async with UnitOfWork(app.state.session_factory) as uow:
        uow.session.add(User(id="alfred", email="alfred@wayneindustries.com"))

    assert uow.session is None
    assert await _emails(app) == ["alfred@wayneindustries.com"]


async def test_rollback_on_error(app):
    with pytest.raises(RuntimeError):
        async with UnitOfWork(app.state.session_factory) as uow:
            uow.session.add(User(id="alfred", email="alfred@wayneindustries.com"))
            await uow.session.flush()
            raise RuntimeError("boom")

    assert await _emails(app) == []


async def test_external_session_stays_open(app):
    async with app.state.session_factory() as s:
        async with UnitOfWork(s) as uow:
            uow.session.add(User(id="alfred", email="alfred@wayneindustries.com"))
        assert uow.session is s

        # 外部传入的 session 仍可继续使用
        user = await s.get(User, "alfred")
        assert user is not None


async def test_rejects_non_session():
    with pytest.raises(TypeError):
        async with UnitOfWork(42):
            pass
