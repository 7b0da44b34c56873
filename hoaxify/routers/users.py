"""用户路由"""

from fastapi import APIRouter

from hoaxify.core.i18n import Locale, translate
from hoaxify.core.pagination import PaginationDep
from hoaxify.dependencies import CredentialsDep, UserServiceDep
from hoaxify.schemas.response import MessageResponse
from hoaxify.schemas.user import UserCreate, UserPage, UserResponse, UserUpdate

router = APIRouter()


@router.post("", response_model=MessageResponse)
async def register_user(
    user_in: UserCreate,
    service: UserServiceDep,
    locale: Locale,
) -> MessageResponse:
    """注册用户并发送激活邮件"""
    await service.register(user_in, locale)
    return MessageResponse(message=translate("user_create_success", locale))


@router.post("/activation/{token}", response_model=MessageResponse)
async def activate_user(
    token: str,
    service: UserServiceDep,
    locale: Locale,
) -> MessageResponse:
    """激活账户"""
    await service.activate(token)
    return MessageResponse(message=translate("account_activation_success", locale))


@router.get("", response_model=UserPage)
async def list_users(
    service: UserServiceDep,
    pagination: PaginationDep,
) -> UserPage:
    """获取已激活用户列表"""
    return await service.get_list(page=pagination.page, page_size=pagination.size)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, service: UserServiceDep) -> UserResponse:
    """获取单个用户"""
    return await service.get_one(user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    service: UserServiceDep,
    credentials: CredentialsDep,
    user_in: UserUpdate | None = None,
) -> UserResponse:
    """更新用户名（HTTP Basic 认证，仅本人）"""
    return await service.update(user_id, user_in or UserUpdate(), credentials)
