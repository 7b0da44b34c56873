"""
Hoaxify 用户账户服务

- create_app 工厂模式，配置显式传入，便于测试
- 数据库与邮件服务在工厂中创建并挂载到 app.state
- 三层结构：Router -> Service -> Repository
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from hoaxify.config import Settings, get_settings
from hoaxify.core.database import Database, init_database
from hoaxify.core.exception_handlers import setup_exception_handlers
from hoaxify.core.logging import setup_logging
from hoaxify.core.middlewares import setup_middlewares
from hoaxify.models.seed import seed_users
from hoaxify.routers import auth, users
from hoaxify.services.email_service import EmailService


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    db: Database = app.state.db

    # 启动：验证数据库连接，按需建表与预置数据
    await init_database(db)
    if settings.seed_users:
        async with db.session_factory() as session:
            created = await seed_users(session, settings.seed_users)
        logger.info("Seeded {} users", created)
    yield
    # 关闭：释放连接池
    await db.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """应用工厂函数"""
    settings = settings or get_settings()
    setup_logging(
        settings.log_level, json_format=settings.log_json, log_dir=settings.log_dir
    )

    application = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )
    application.state.settings = settings
    application.state.db = Database(settings.db)
    application.state.email_service = EmailService(settings.mail)

    # 中间件
    setup_middlewares(application, settings)

    # 路由
    application.include_router(
        users.router, prefix=f"{settings.api_prefix}/users", tags=["users"]
    )
    application.include_router(
        auth.router, prefix=f"{settings.api_prefix}/auth", tags=["auth"]
    )

    # 异常处理
    setup_exception_handlers(application)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    return application


def run() -> None:
    """命令行入口：uvicorn 启动"""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=3000, log_config=None)


if __name__ == "__main__":
    run()
