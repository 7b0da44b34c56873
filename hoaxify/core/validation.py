"""字段验证链

每个字段对应一组有序规则（谓词 + 消息 key），按字段顺序依次验证，
同一字段遇到第一条失败规则即停止，结果为 字段 -> 消息 key 的有序映射。
"""

import inspect
import re
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from email_validator import EmailNotValidError, validate_email

Check = Callable[[Any], bool | Awaitable[bool]]

PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).*$", re.DOTALL)


@dataclass(frozen=True)
class Rule:
    check: Check
    message_key: str


def not_empty(value: Any) -> bool:
    return value is not None and value != ""


def length_between(min_length: int, max_length: int) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return min_length <= len(str(value)) <= max_length

    return check


def is_email(value: Any) -> bool:
    """邮箱语法校验（不检查域名可达性）"""
    try:
        validate_email(str(value), check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def has_mixed_characters(value: Any) -> bool:
    """至少包含一个小写字母、一个大写字母和一个数字"""
    return PASSWORD_PATTERN.match(str(value)) is not None


USERNAME_RULES = [
    Rule(not_empty, "username_null"),
    Rule(length_between(4, 32), "username_size"),
]

EMAIL_FORMAT_RULES = [
    Rule(not_empty, "email_null"),
    Rule(is_email, "email_invalid"),
]

PASSWORD_RULES = [
    Rule(not_empty, "password_null"),
    Rule(length_between(8, 16), "password_size"),
    Rule(has_mixed_characters, "password_pattern"),
]


class ValidationChain:
    """按字段顺序执行的验证链"""

    def __init__(self, rules: Mapping[str, list[Rule]]) -> None:
        self.rules = rules

    async def validate(self, payload: Mapping[str, Any]) -> dict[str, str]:
        """返回失败字段映射，空字典表示验证通过"""
        failures: dict[str, str] = {}
        for field, rules in self.rules.items():
            value = payload.get(field)
            for rule in rules:
                result = rule.check(value)
                if inspect.isawaitable(result):
                    result = await result
                if not result:
                    failures[field] = rule.message_key
                    break
        return failures


def registration_chain(email_available: Check) -> ValidationChain:
    """
    注册验证链：username -> email -> password

    Args:
        email_available: 邮箱未被注册时返回 True（通常为一次数据库查询）
    """
    return ValidationChain(
        {
            "username": USERNAME_RULES,
            "email": [*EMAIL_FORMAT_RULES, Rule(email_available, "email_inuse")],
            "password": PASSWORD_RULES,
        }
    )


username_chain = ValidationChain({"username": USERNAME_RULES})
