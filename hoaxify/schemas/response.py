"""统一响应模型"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """
    所有响应 Schema 的基类

    特性：
    - from_attributes: 支持 ORM 模型转换
    - 字段以 camelCase 输出（totalPages、validationErrors 等）
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MessageResponse(BaseSchema):
    """仅包含提示信息的响应"""

    message: str


class ErrorResponse(BaseSchema):
    """错误响应"""

    path: str
    timestamp: int
    message: str
    validation_errors: dict[str, str] | None = None
