"""用户 Schema"""

from typing import NamedTuple

from pydantic import BaseModel

from hoaxify.schemas.response import BaseSchema


class Credentials(NamedTuple):
    """HTTP Basic 凭证（用户名位置为邮箱）"""

    email: str
    password: str


class UserCreate(BaseModel):
    """注册请求：字段规则由验证链检查，这里只做类型约束"""

    username: str | None = None
    email: str | None = None
    password: str | None = None


class UserUpdate(BaseModel):
    """更新请求：只有 username 可修改，其余字段被忽略"""

    username: str | None = None


class AuthRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserResponse(BaseSchema):
    """对外公开的用户信息"""

    id: int
    username: str
    email: str


class UserSummary(BaseSchema):
    """登录成功返回"""

    id: int
    username: str


class UserPage(BaseSchema):
    """分页列表响应"""

    total_pages: int
    current_page: int
    page_size: int
    users: list[UserResponse]
