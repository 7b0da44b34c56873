"""共享依赖"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBasic
from sqlalchemy.ext.asyncio import AsyncSession

from hoaxify.core.database import get_db
from hoaxify.repositories.user_repository import UserRepository
from hoaxify.schemas.user import Credentials
from hoaxify.services.auth_service import AuthService
from hoaxify.services.email_service import EmailService
from hoaxify.services.user_service import UserService

# 数据库会话依赖（自动管理事务）
DBSession = Annotated[AsyncSession, Depends(get_db)]

# 凭证缺失时返回 None，由业务层返回 403
basic_auth = HTTPBasic(auto_error=False)


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service


def get_user_repository(db: DBSession) -> UserRepository:
    return UserRepository(db)


UserRepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]
EmailServiceDep = Annotated[EmailService, Depends(get_email_service)]


def get_user_service(
    db: DBSession,
    repository: UserRepositoryDep,
    email_service: EmailServiceDep,
) -> UserService:
    """创建 UserService 实例"""
    return UserService(db, repository, email_service)


def get_auth_service(repository: UserRepositoryDep) -> AuthService:
    return AuthService(repository)


async def get_credentials(request: Request) -> Credentials | None:
    """解析 HTTP Basic 凭证，无法解码的 Authorization 头视为未提供"""
    try:
        credentials = await basic_auth(request)
    except HTTPException:
        return None
    if credentials is None:
        return None
    return Credentials(email=credentials.username, password=credentials.password)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
CredentialsDep = Annotated[Credentials | None, Depends(get_credentials)]
