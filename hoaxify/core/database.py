"""数据库配置

引擎与 Session 工厂由应用工厂显式创建并挂载到 app.state，
请求通过 get_db 依赖获取会话，便于测试替换。
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timezone

from fastapi import Request
from loguru import logger
from sqlalchemy import DateTime, MetaData, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from hoaxify.config import DatabaseConfig

# 命名约定（Alembic 自动生成迁移友好）
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# 整数列（主键、OFFSET）可表示的最大值，超出则驱动无法绑定参数
MAX_SQL_INTEGER = 2**63 - 1


def utc_now() -> datetime:
    """返回当前 UTC 时间（aware datetime）"""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    ORM 基类

    特性：
    - 自增整数主键
    - 自动时间戳（created_at, updated_at）
    """

    metadata = MetaData(naming_convention=convention)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
    )


class Database:
    """数据库句柄：持有引擎和 Session 工厂"""

    def __init__(self, config: DatabaseConfig) -> None:
        self.config = config
        self.engine: AsyncEngine = create_async_engine(
            config.url,
            echo=config.echo,
            pool_pre_ping=True,
        )
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """关闭连接池"""
        await self.engine.dispose()


async def init_database(db: Database) -> None:
    """初始化数据库：验证连接，按配置建表"""
    if db.config.create_tables:
        await db.create_all()
    await db.ping()
    logger.info("Database ready: {}", db.engine.url.render_as_string(hide_password=True))


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """数据库会话依赖，自动管理事务"""
    db: Database = request.app.state.db
    async with db.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
