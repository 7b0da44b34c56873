"""分页、国际化、日志与安全工具测试"""

import pytest
from loguru import logger

from hoaxify.core.i18n import negotiate_locale, translate
from hoaxify.core.logging import LOG_FORMAT, setup_logging
from hoaxify.core.pagination import Pagination, resolve_pagination
from hoaxify.core.security import (
    generate_activation_token,
    hash_password,
    verify_password,
)


@pytest.mark.parametrize(
    ("page", "size", "expected"),
    [
        (None, None, Pagination(0, 10)),
        ("2", "5", Pagination(2, 5)),
        ("-1", "10", Pagination(0, 10)),
        ("abc", "xyz", Pagination(0, 10)),
        ("0", "0", Pagination(0, 10)),
        ("0", "11", Pagination(0, 10)),
        ("0", "1", Pagination(0, 1)),
        (3, -2, Pagination(3, 10)),
    ],
)
def test_resolve_pagination(page, size, expected):
    assert resolve_pagination(page, size) == expected


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        (None, "en"),
        ("", "en"),
        ("bg", "bg"),
        ("bg-BG,bg;q=0.9,en;q=0.8", "bg"),
        ("fr-FR,fr;q=0.9", "en"),
        ("fr,bg;q=0.5", "bg"),
        ("EN", "en"),
    ],
)
def test_negotiate_locale(header, expected):
    assert negotiate_locale(header, ["en", "bg"]) == expected


def test_translate_falls_back_to_key_when_missing():
    assert translate("user_create_success", "en") == "User created"
    assert translate("no_such_key", "bg") == "no_such_key"


def test_translate_formats_parameters():
    body = translate("activation_email_body", "en", email="user1@mail.com")
    assert "user1@mail.com" in body


def test_activation_token_is_sixteen_hex_characters():
    tokens = {generate_activation_token() for _ in range(20)}
    assert len(tokens) == 20
    for token in tokens:
        assert len(token) == 16
        int(token, 16)


def test_password_hash_round_trip():
    hashed = hash_password("P4ssword")
    assert hashed != "P4ssword"
    assert verify_password("P4ssword", hashed)
    assert not verify_password("P4ssw0rd", hashed)


def test_log_records_carry_request_id():
    lines: list[str] = []
    setup_logging("INFO")
    sink_id = logger.add(lines.append, format=LOG_FORMAT)
    try:
        logger.info("outside")
        with logger.contextualize(request_id="req-1"):
            logger.info("inside")
    finally:
        logger.remove(sink_id)
    assert "| - |" in lines[0]
    assert "| req-1 |" in lines[1]


async def test_health_check(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
