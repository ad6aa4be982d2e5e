# ------------------------------------------------------------
# queries.py — 영화 조회 서비스 (검색/필터/페이지네이션/관련 영화/인기 영화)
# ------------------------------------------------------------

import logging
from contextlib import contextmanager
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from . import config
from .errors import NotFound, QueryError
from .models import Movie
from .pagination import MoviePageResult, normalize, total_pages

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(message: str):
    """SQLAlchemy 예외를 QueryError(message) 로 바꾸고 원본은 서버 로그에만 남긴다."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("%s: %s", message, exc)
        raise QueryError(message) from exc


class MovieQueryService:
    """
    영화 조회 전용 서비스.

    - 세션(db)은 생성자에서 주입받는다 (요청마다 get_db 가 만든 세션).
    - 목록 조회는 모두 created_at 내림차순(동률이면 id 내림차순),
      Genre/Country 를 joinedload 로 함께 로딩한다.
    """

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------
    # 내부 헬퍼
    # ------------------------------
    def _base(self, with_actor: bool = False):
        options = [joinedload(Movie.genre), joinedload(Movie.country)]
        if with_actor:
            options.append(joinedload(Movie.actor))
        return self.db.query(Movie).options(*options)

    @staticmethod
    def _recent_first(query):
        return query.order_by(Movie.created_at.desc(), Movie.id.desc())

    def _paginate(self, criteria, page: Optional[int], limit: Optional[int]) -> MoviePageResult:
        req = normalize(page, limit)

        # COUNT 는 joinedload 없이 조건만으로 계산
        count_query = self.db.query(Movie)
        if criteria is not None:
            count_query = count_query.filter(criteria)
        count = count_query.count()
        if count == 0:
            return MoviePageResult(items=[], total_pages=0, count=0)

        query = self._base()
        if criteria is not None:
            query = query.filter(criteria)
        items = self._recent_first(query).offset(req.offset).limit(req.limit).all()
        return MoviePageResult(items=items, total_pages=total_pages(count, req.limit), count=count)

    # ------------------------------
    # 목록 조회
    # ------------------------------
    def list_all(self, page: Optional[int] = None, limit: Optional[int] = None) -> MoviePageResult:
        with storage_errors("Error fetching movies"):
            return self._paginate(None, page, limit)

    def search(self, query: Optional[str], page: Optional[int] = None,
               limit: Optional[int] = None) -> MoviePageResult:
        """
        이름에 query 가 포함된 영화 (부분 일치, 대소문자 구분은 DB 기본값을 따름).

        - LIKE 와일드카드(%, _)는 autoescape 로 문자 그대로 비교
        - query 가 없으면 전체 영화와 같다
        """
        criteria = Movie.name.contains(query, autoescape=True) if query else None
        with storage_errors("Error searching for movies"):
            return self._paginate(criteria, page, limit)

    def list_by_genre(self, genre_id: int, page: Optional[int] = None,
                      limit: Optional[int] = None) -> MoviePageResult:
        with storage_errors("Error fetching movies by genre"):
            return self._paginate(Movie.genre_id == genre_id, page, limit)

    def list_by_country(self, country_id: int, page: Optional[int] = None,
                        limit: Optional[int] = None) -> MoviePageResult:
        with storage_errors("Error fetching movies by country"):
            return self._paginate(Movie.country_id == country_id, page, limit)

    def list_by_actor(self, actor_id: int, page: Optional[int] = None,
                      limit: Optional[int] = None) -> MoviePageResult:
        with storage_errors("Error fetching movies by actor"):
            return self._paginate(Movie.actor_id == actor_id, page, limit)

    # ------------------------------
    # 단건 조회
    # ------------------------------
    def get_by_id(self, movie_id: int) -> Movie:
        with storage_errors("Error fetching movie"):
            movie = self._base(with_actor=True).filter(Movie.id == movie_id).first()
        if movie is None:
            raise NotFound("Movie not found")
        return movie

    def get_related(self, movie_id: int, limit: int = config.RELATED_LIMIT) -> Tuple[Movie, List[Movie]]:
        """
        클릭한 영화와 관련 영화 목록을 반환합니다.

        1) 같은 장르 또는 같은 국가의 영화를 최신순으로 먼저 채우고
        2) 모자라면 나머지 영화 중 최신순으로 채운다
        클릭한 영화 자신은 절대 포함하지 않으며 최대 limit 건.
        """
        with storage_errors("Error fetching related movies"):
            clicked = self._base().filter(Movie.id == movie_id).first()
            if clicked is None:
                raise NotFound("Movie not found")

            others = self._base(with_actor=True).filter(Movie.id != clicked.id)

            affinity = []
            if clicked.genre_id is not None:
                affinity.append(Movie.genre_id == clicked.genre_id)
            if clicked.country_id is not None:
                affinity.append(Movie.country_id == clicked.country_id)

            related = []
            if affinity:
                related = self._recent_first(others.filter(or_(*affinity))).limit(limit).all()

            if len(related) < limit:
                fill = others
                if related:
                    fill = fill.filter(Movie.id.notin_([m.id for m in related]))
                related += self._recent_first(fill).limit(limit - len(related)).all()

        return clicked, related

    def top_viewed(self, limit: int = config.TOP_VIEWED_LIMIT) -> List[Movie]:
        # 조회수 내림차순, 동률이면 id 오름차순 (안정적인 순서)
        with storage_errors("Error fetching top viewed movies"):
            return self._base().order_by(Movie.view.desc(), Movie.id.asc()).limit(limit).all()
