"""用户数据访问层"""

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hoaxify.core.database import MAX_SQL_INTEGER
from hoaxify.models.user import User


def filter_activated(stmt: Select[tuple[User]]) -> Select[tuple[User]]:
    """只保留已激活用户"""
    return stmt.where(User.inactive.is_(False))


class UserRepository:
    """用户数据访问层

    注意：事务由调用方管理，Repository 只用 flush/refresh
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_active_by_id(self, user_id: int) -> User | None:
        return await self.db.scalar(
            filter_activated(select(User).where(User.id == user_id))
        )

    async def get_by_email(self, email: str) -> User | None:
        return await self.db.scalar(select(User).where(User.email == email))

    async def get_by_activation_token(self, token: str) -> User | None:
        return await self.db.scalar(
            select(User).where(User.activation_token == token)
        )

    async def list_active(
        self, page: int = 0, page_size: int = 10
    ) -> tuple[list[User], int]:
        """分页查询已激活用户（page 从 0 开始，按 id 排序）"""
        count_stmt = select(func.count()).select_from(
            filter_activated(select(User)).subquery()
        )
        total = await self.db.scalar(count_stmt) or 0

        offset = page * page_size
        if offset > MAX_SQL_INTEGER:
            return [], total

        stmt = filter_activated(
            select(User)
            .order_by(User.id)
            .offset(offset)
            .limit(page_size)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all()), total

    async def create(self, user: User) -> User:
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def update(self, user: User) -> User:
        await self.db.flush()
        await self.db.refresh(user)
        return user
