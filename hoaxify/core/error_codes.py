"""业务错误码"""

from enum import IntEnum


class ErrorCode(IntEnum):
    # 通用错误 1xxxx
    INVALID_PARAMETER = 10002
    RESOURCE_NOT_FOUND = 10003

    # 认证/授权 2xxxx
    UNAUTHORIZED = 20001
    FORBIDDEN = 20003
    USER_INACTIVE = 20004

    # 用户 3xxxx
    USER_NOT_FOUND = 30001
    INVALID_ACTIVATION_TOKEN = 30003

    # 外部依赖 5xxxx
    EMAIL_DELIVERY_FAILED = 50001
