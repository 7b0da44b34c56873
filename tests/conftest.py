"""
测试公共 fixture

每个测试使用独立的 SQLite 文件数据库（自增 id 从 1 开始），
邮件服务通过 dependency_overrides 替换为可控的假实现。
"""

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select

from hoaxify.config import DatabaseConfig, Settings
from hoaxify.core.database import Database
from hoaxify.core.exceptions import EmailDeliveryError
from hoaxify.core.security import hash_password
from hoaxify.dependencies import get_email_service
from hoaxify.main import create_app
from hoaxify.models.user import User

API = "/api/1.0"
PASSWORD = "P4ssword"
PASSWORD_HASH = hash_password(PASSWORD)


class FakeEmailService:
    """记录发送的激活邮件，fail=True 时模拟 SMTP 故障"""

    def __init__(self) -> None:
        self.sent: list[dict[str, str]] = []
        self.fail = False

    async def send_account_activation(
        self, email: str, activation_token: str, locale: str
    ) -> None:
        if self.fail:
            raise EmailDeliveryError()
        self.sent.append({"email": email, "token": activation_token, "locale": locale})


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        db=DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite'}"),
    )


@pytest.fixture
def email_service() -> FakeEmailService:
    return FakeEmailService()


@pytest_asyncio.fixture
async def app(settings: Settings, email_service: FakeEmailService) -> AsyncIterator[FastAPI]:
    application = create_app(settings)
    await application.state.db.create_all()
    application.dependency_overrides[get_email_service] = lambda: email_service
    yield application
    await application.state.db.dispose()


@pytest.fixture
def db(app: FastAPI) -> Database:
    return app.state.db


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac


async def add_user(
    db: Database,
    username: str = "user1",
    email: str = "user1@mail.com",
    inactive: bool = False,
    activation_token: str | None = None,
) -> User:
    """直接写库创建用户，密码为 P4ssword"""
    async with db.session_factory() as session:
        user = User(
            username=username,
            email=email,
            password_hash=PASSWORD_HASH,
            inactive=inactive,
            activation_token=activation_token,
        )
        session.add(user)
        await session.commit()
        return user


async def add_users(db: Database, active: int, inactive: int = 0) -> None:
    for index in range(active + inactive):
        await add_user(
            db,
            username=f"user{index + 1}",
            email=f"user{index + 1}@mail.com",
            inactive=index >= active,
            activation_token=f"{index:016d}" if index >= active else None,
        )


async def all_users(db: Database) -> list[User]:
    async with db.session_factory() as session:
        result = await session.execute(select(User).order_by(User.id))
        return list(result.scalars().all())
