"""邮件服务：通过 SMTP 发送账户激活邮件"""

from aiosmtplib import SMTPException
from fastapi_mail import ConnectionConfig, FastMail, MessageSchema
from fastapi_mail.errors import ConnectionErrors
from loguru import logger

from hoaxify.config import MailConfig
from hoaxify.core.exceptions import EmailDeliveryError
from hoaxify.core.i18n import translate


def build_connection_config(config: MailConfig) -> ConnectionConfig:
    """MailConfig -> fastapi-mail 连接配置（未配置账号时不登录）"""
    password = config.password.get_secret_value() if config.password else ""
    return ConnectionConfig(
        MAIL_SERVER=config.host,
        MAIL_PORT=config.port,
        MAIL_USERNAME=config.username or "",
        MAIL_PASSWORD=password,
        MAIL_FROM=config.sender,
        MAIL_FROM_NAME=config.sender_name,
        MAIL_STARTTLS=config.use_tls,
        MAIL_SSL_TLS=config.use_ssl,
        USE_CREDENTIALS=bool(config.username and password),
        TIMEOUT=config.timeout,
    )


class EmailService:
    """
    SMTP 邮件发送（fastapi-mail / aiosmtplib）

    连接与收发受 config.timeout 限制，超时与其他传输错误一样
    转换为 EmailDeliveryError。
    """

    def __init__(self, config: MailConfig) -> None:
        self.config = config
        self.fast_mail = FastMail(build_connection_config(config))

    async def send(self, to: str, subject: str, body: str) -> None:
        message = MessageSchema(
            subject=subject,
            recipients=[to],
            body=body,
            subtype="html",
        )
        try:
            await self.fast_mail.send_message(message)
        except (ConnectionErrors, SMTPException, TimeoutError, OSError) as e:
            logger.warning("Email delivery to {} failed: {}", to, e)
            raise EmailDeliveryError() from e

    async def send_account_activation(
        self, email: str, activation_token: str, locale: str
    ) -> None:
        """发送激活邮件，正文包含收件邮箱与激活链接"""
        link = f"{self.config.activation_url}?token={activation_token}"
        body = (
            f"<h2>{translate('activation_email_heading', locale)}</h2>\n"
            f"<div><b>{translate('activation_email_body', locale, email=email)}</b></div>\n"
            f'<div><a href="{link}">{translate("activation_email_link", locale)}</a></div>\n'
        )
        await self.send(email, translate("activation_email_subject", locale), body)
