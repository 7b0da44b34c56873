"""认证路由"""

from fastapi import APIRouter

from hoaxify.dependencies import AuthServiceDep
from hoaxify.schemas.user import AuthRequest, UserSummary

router = APIRouter()


@router.post("", response_model=UserSummary)
async def authenticate(
    credentials: AuthRequest,
    auth_service: AuthServiceDep,
) -> UserSummary:
    """校验邮箱和密码"""
    return await auth_service.authenticate(credentials.email, credentials.password)
