"""配置管理"""

from functools import lru_cache
from typing import Annotated

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class DatabaseConfig(BaseModel):
    """数据库配置"""

    url: str = "sqlite+aiosqlite:///./database.sqlite"
    echo: bool = False
    # 启动时自动建表（开发/测试环境）
    create_tables: bool = True


class MailConfig(BaseModel):
    """邮件发送配置（SMTP）"""

    host: str = "localhost"
    port: int = Field(default=8587, ge=1, le=65535)
    username: str | None = None
    password: SecretStr | None = None
    # STARTTLS 升级 / 直接 SSL 连接
    use_tls: bool = False
    use_ssl: bool = False
    sender: str = "info@coolapi.com"
    sender_name: str | None = "My Cool API"
    # SMTP 连接/发送超时（秒），超时视为发送失败
    timeout: int = Field(default=10, gt=0)
    activation_url: str = "http://localhost:8080/#/login"


class Settings(BaseSettings):
    """应用配置"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="_",
        env_nested_max_split=1,
        extra="ignore",
    )

    # 应用配置
    app_name: str = "Hoaxify"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = False
    # 日志文件目录（为空则只输出到 stderr）
    log_dir: str | None = None
    api_prefix: str = "/api/1.0"

    # 国际化
    default_locale: str = "en"
    supported_locales: Annotated[list[str], NoDecode] = ["en", "bg"]

    # 开发环境预置用户数量（0 = 不预置）
    seed_users: int = Field(default=0, ge=0)

    # 数据库（嵌套配置）
    db: DatabaseConfig = DatabaseConfig()

    # 邮件（嵌套配置）
    mail: MailConfig = MailConfig()

    # CORS
    cors_origins: Annotated[list[str], NoDecode] = []

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in allowed:
            msg = f"log_level must be one of {allowed}"
            raise ValueError(msg)
        return upper

    @field_validator("cors_origins", "supported_locales", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v


@lru_cache
def get_settings() -> Settings:
    """全局单例"""
    return Settings()
