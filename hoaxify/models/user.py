"""用户模型"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from hoaxify.core.database import Base


class User(Base):
    """
    用户模型

    生命周期：注册（inactive=True，持有 activation_token）
    -> 激活（inactive=False，activation_token 清空）
    """

    __tablename__ = "app_user"

    username: Mapped[str] = mapped_column(String(32))
    email: Mapped[str] = mapped_column(String(255), unique=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    inactive: Mapped[bool] = mapped_column(Boolean, default=True)
    activation_token: Mapped[str | None] = mapped_column(
        String(32), default=None, index=True
    )

    def activate(self) -> None:
        """激活账户并消费 token"""
        self.inactive = False
        self.activation_token = None
