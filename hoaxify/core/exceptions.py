"""业务异常定义

异常只携带消息 key，由异常处理器按请求语言解析为最终文本。
"""

from enum import StrEnum

from hoaxify.core.error_codes import ErrorCode


class ApiError(Exception):
    """业务异常基类"""

    def __init__(
        self,
        code: ErrorCode,
        message_key: str | None = None,
        status_code: int = 400,
        detail: dict | None = None,
    ) -> None:
        self.code = code
        self.message_key = message_key or code.name.lower()
        self.status_code = status_code
        self.detail = detail
        super().__init__(self.message_key)


class ValidationError(ApiError):
    """字段验证失败，failures 为 字段 -> 消息 key"""

    def __init__(self, failures: dict[str, str]) -> None:
        self.failures = failures
        super().__init__(
            ErrorCode.INVALID_PARAMETER,
            "validation_failure",
            status_code=400,
            detail=failures,
        )


class InvalidTokenError(ApiError):
    """激活 token 不存在或已使用"""

    def __init__(self) -> None:
        super().__init__(
            ErrorCode.INVALID_ACTIVATION_TOKEN,
            "account_activation_failure",
            status_code=400,
        )


class NotFoundError(ApiError):
    """资源不存在"""

    def __init__(
        self,
        code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND,
        message_key: str = "resource_not_found",
        detail: dict | None = None,
    ) -> None:
        super().__init__(code, message_key, status_code=404, detail=detail)


class UserNotFoundError(NotFoundError):
    """用户不存在（未激活用户同样视为不存在）"""

    def __init__(self, user_id: int) -> None:
        super().__init__(
            ErrorCode.USER_NOT_FOUND,
            "user_not_found",
            detail={"user_id": user_id},
        )


class AuthenticationError(ApiError):
    """凭证无效，不区分具体原因"""

    def __init__(self) -> None:
        super().__init__(
            ErrorCode.UNAUTHORIZED,
            "authentication_failure",
            status_code=401,
        )


class ForbiddenReason(StrEnum):
    MISSING_CREDENTIALS = "missing_credentials"
    UNKNOWN_EMAIL = "unknown_email"
    ACCOUNT_MISMATCH = "account_mismatch"
    INACTIVE_ACCOUNT = "inactive_account"
    PASSWORD_MISMATCH = "password_mismatch"


class ForbiddenError(ApiError):
    """
    权限不足

    对外统一返回 403，reason 仅用于日志与测试区分具体失败的守卫。
    """

    def __init__(
        self,
        reason: ForbiddenReason,
        message_key: str = "unauthorized_user_update",
        code: ErrorCode = ErrorCode.FORBIDDEN,
    ) -> None:
        self.reason = reason
        super().__init__(code, message_key, status_code=403)


class InactiveAccountError(ForbiddenError):
    """账户未激活，禁止登录"""

    def __init__(self) -> None:
        super().__init__(
            ForbiddenReason.INACTIVE_ACCOUNT,
            "inactive_authentication_failure",
            ErrorCode.USER_INACTIVE,
        )


class EmailDeliveryError(ApiError):
    """激活邮件发送失败"""

    def __init__(self) -> None:
        super().__init__(
            ErrorCode.EMAIL_DELIVERY_FAILED,
            "email_failure",
            status_code=502,
        )
