"""分页参数"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 10


@dataclass(frozen=True)
class Pagination:
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE


def _to_int(raw: str | int | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def resolve_pagination(
    page: str | int | None = None,
    size: str | int | None = None,
) -> Pagination:
    """
    归一化分页参数（page 从 0 开始）

    - page: 负数或非数字 -> 0
    - size: 不在 [1, 10] 内或非数字 -> 10
    """
    page_number = _to_int(page)
    if page_number is None or page_number < 0:
        page_number = 0

    page_size = _to_int(size)
    if page_size is None or page_size < 1 or page_size > MAX_PAGE_SIZE:
        page_size = DEFAULT_PAGE_SIZE

    return Pagination(page=page_number, size=page_size)


def get_pagination(
    page: str | None = Query(default=None, description="页码（从 0 开始）"),
    size: str | None = Query(default=None, description="每页数量（1-10）"),
) -> Pagination:
    return resolve_pagination(page, size)


PaginationDep = Annotated[Pagination, Depends(get_pagination)]
