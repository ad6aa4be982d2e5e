# ------------------------------------------------------------
# pagination.py — page/limit 정규화와 totalPages 계산
# ------------------------------------------------------------

import math
from dataclasses import dataclass, field
from typing import Any, List, Optional

from . import config


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class MoviePageResult:
    """목록 조회 결과 봉투: 현재 페이지 항목 + 전체 페이지 수."""

    items: List[Any] = field(default_factory=list)
    total_pages: int = 0
    count: int = 0


def normalize(page: Optional[int] = None, limit: Optional[int] = None,
              max_limit: Optional[int] = None) -> PageRequest:
    """
    쿼리 파라미터를 PageRequest 로 정규화합니다.

    - page 가 없거나 0 이하 → 1
    - limit 이 없거나 0 이하 → DEFAULT_PAGE_LIMIT (10)
    - limit 이 max_limit 보다 크면 max_limit 으로 잘라냄
    - page 가 MAX_PAGE 보다 크면 MAX_PAGE 로 잘라냄 (결과는 빈 페이지)
    """
    if max_limit is None:
        max_limit = config.MAX_PAGE_LIMIT
    if page is None or page <= 0:
        page = config.DEFAULT_PAGE
    page = min(page, config.MAX_PAGE)
    if limit is None or limit <= 0:
        limit = config.DEFAULT_PAGE_LIMIT
    if max_limit > 0:
        limit = min(limit, max_limit)
    return PageRequest(page=page, limit=limit)


def total_pages(count: int, limit: int) -> int:
    # count == 0 이면 0 페이지
    if count <= 0:
        return 0
    return math.ceil(count / limit)
