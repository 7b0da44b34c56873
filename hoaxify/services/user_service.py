"""用户服务：注册、激活、查询与更新"""

import math

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hoaxify.core.database import MAX_SQL_INTEGER
from hoaxify.core.exceptions import (
    EmailDeliveryError,
    ForbiddenError,
    ForbiddenReason,
    InvalidTokenError,
    UserNotFoundError,
    ValidationError,
)
from hoaxify.core.security import (
    generate_activation_token,
    hash_password,
    verify_password,
)
from hoaxify.core.validation import registration_chain, username_chain
from hoaxify.models.user import User
from hoaxify.repositories.user_repository import UserRepository
from hoaxify.schemas.user import (
    Credentials,
    UserCreate,
    UserPage,
    UserResponse,
    UserUpdate,
)
from hoaxify.services.email_service import EmailService


class UserService:
    """
    用户业务逻辑层

    注意：
    - 一般操作的事务由 get_db() 依赖自动管理
    - 注册例外：插入与发送激活邮件是一个整体，邮件发送成功后才提交，
      失败则回滚，保证不会残留未发送激活邮件的用户
    """

    def __init__(
        self,
        db: AsyncSession,
        repository: UserRepository,
        email_service: EmailService,
    ) -> None:
        self.db = db
        self.repository = repository
        self.email_service = email_service

    async def _email_available(self, email: str) -> bool:
        return await self.repository.get_by_email(email) is None

    async def register(self, user_in: UserCreate, locale: str) -> User:
        """注册新用户并发送激活邮件"""
        failures = await registration_chain(self._email_available).validate(
            user_in.model_dump()
        )
        if failures:
            raise ValidationError(failures)

        user = User(
            username=user_in.username,
            email=user_in.email,
            password_hash=hash_password(user_in.password),
            inactive=True,
            activation_token=generate_activation_token(),
        )
        try:
            user = await self.repository.create(user)
        except IntegrityError as e:
            # 并发注册同一邮箱：预检查通过但唯一约束冲突
            await self.db.rollback()
            logger.info("Concurrent registration rejected for {}", user_in.email)
            raise ValidationError({"email": "email_inuse"}) from e

        try:
            await self.email_service.send_account_activation(
                user.email, user.activation_token, locale
            )
        except EmailDeliveryError:
            await self.db.rollback()
            raise

        await self.db.commit()
        logger.info("User registered: id={}", user.id)
        return user

    async def activate(self, token: str) -> None:
        """使用激活 token 激活账户，token 只能使用一次"""
        user = await self.repository.get_by_activation_token(token)
        if not user:
            raise InvalidTokenError()
        user.activate()
        await self.repository.update(user)
        logger.info("User activated: id={}", user.id)

    async def get_list(self, page: int = 0, page_size: int = 10) -> UserPage:
        """分页查询已激活用户（page 从 0 开始）"""
        users, total = await self.repository.list_active(page, page_size)
        return UserPage(
            total_pages=math.ceil(total / page_size),
            current_page=page,
            page_size=page_size,
            users=[UserResponse.model_validate(u) for u in users],
        )

    async def get_one(self, user_id: int) -> UserResponse:
        """获取单个已激活用户"""
        if not 1 <= user_id <= MAX_SQL_INTEGER:
            raise UserNotFoundError(user_id)
        user = await self.repository.get_active_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return UserResponse.model_validate(user)

    async def update(
        self,
        user_id: int,
        user_in: UserUpdate,
        credentials: Credentials | None,
    ) -> UserResponse:
        """
        更新用户名

        守卫顺序：凭证存在 -> 邮箱对应用户 -> 是本人 -> 已激活 -> 密码正确，
        任一失败均为 403。
        """
        if credentials is None:
            raise ForbiddenError(ForbiddenReason.MISSING_CREDENTIALS)

        user = await self.repository.get_by_email(credentials.email)
        if not user:
            raise ForbiddenError(ForbiddenReason.UNKNOWN_EMAIL)
        if user.id != user_id:
            raise ForbiddenError(ForbiddenReason.ACCOUNT_MISMATCH)
        if user.inactive:
            raise ForbiddenError(ForbiddenReason.INACTIVE_ACCOUNT)
        if not verify_password(credentials.password, user.password_hash):
            raise ForbiddenError(ForbiddenReason.PASSWORD_MISMATCH)

        failures = await username_chain.validate(user_in.model_dump())
        if failures:
            raise ValidationError(failures)

        user.username = user_in.username
        user = await self.repository.update(user)
        return UserResponse.model_validate(user)
