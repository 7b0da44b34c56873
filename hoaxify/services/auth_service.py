"""认证服务"""

from hoaxify.core.exceptions import AuthenticationError, InactiveAccountError
from hoaxify.core.security import verify_password
from hoaxify.core.validation import is_email
from hoaxify.repositories.user_repository import UserRepository
from hoaxify.schemas.user import UserSummary


class AuthService:
    def __init__(self, user_repo: UserRepository) -> None:
        self.user_repo = user_repo

    async def authenticate(self, email: str | None, password: str | None) -> UserSummary:
        """
        校验用户凭证

        邮箱格式错误、用户不存在、密码错误返回同一个 AuthenticationError，
        避免泄露账户是否存在；未激活账户返回 403。
        """
        if not email or not is_email(email):
            raise AuthenticationError()

        user = await self.user_repo.get_by_email(email)
        if not user or not password or not verify_password(password, user.password_hash):
            raise AuthenticationError()

        if user.inactive:
            raise InactiveAccountError()

        return UserSummary.model_validate(user)
