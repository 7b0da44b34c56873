"""日志配置

所有日志携带 request_id（由 LoggingMiddleware 通过 contextualize 注入），
请求之外的日志使用默认值 "-"。
"""

import logging
import sys
from pathlib import Path
from typing import Literal

from loguru import logger

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[request_id]}</cyan> | "
    "{name}:{function}:{line} - <level>{message}</level>"
)

# 转发到 loguru 后降级的第三方日志
QUIET_LOGGERS = ("aiosqlite", "sqlalchemy.engine", "aiosmtplib", "uvicorn.access")


class InterceptHandler(logging.Handler):
    """拦截标准库日志并转发到 Loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(
    level: LogLevel = "INFO",
    *,
    json_format: bool = False,
    log_dir: str | Path | None = None,
) -> None:
    """
    配置日志

    Args:
        level: 日志级别
        json_format: 是否使用 JSON 格式（request_id 位于 record.extra）
        log_dir: 指定时额外写入 <log_dir>/hoaxify.log，按大小轮转
    """
    logger.remove()
    logger.configure(extra={"request_id": "-"})
    logger.add(sys.stderr, level=level, format=LOG_FORMAT, serialize=json_format)

    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        logger.add(
            Path(log_dir) / "hoaxify.log",
            level=level,
            format=LOG_FORMAT,
            serialize=json_format,
            enqueue=True,
            rotation="10 MB",
            retention="7 days",
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
