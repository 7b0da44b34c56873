"""开发环境预置数据"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hoaxify.core.security import generate_activation_token, hash_password
from hoaxify.models.user import User

SEED_PASSWORD = "P4ssword"


async def seed_users(session: AsyncSession, active: int, inactive: int = 0) -> int:
    """
    创建 user1..userN（前 active 个已激活），密码均为 P4ssword

    表中已有数据时跳过，返回实际创建的数量。
    """
    existing = await session.scalar(select(func.count(User.id))) or 0
    if existing:
        return 0

    hashed = hash_password(SEED_PASSWORD)
    for index in range(active + inactive):
        is_inactive = index >= active
        session.add(
            User(
                username=f"user{index + 1}",
                email=f"user{index + 1}@mail.com",
                password_hash=hashed,
                inactive=is_inactive,
                activation_token=generate_activation_token() if is_inactive else None,
            )
        )
    await session.commit()
    return active + inactive
