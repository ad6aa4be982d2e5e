# ------------------------------------------------------------
# view_counter.py — 조회수 증가 / 조회수 상위 영화
# ------------------------------------------------------------

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import config
from .errors import NotFound, UpstreamFailure
from .models import Movie
from .queries import MovieQueryService

logger = logging.getLogger(__name__)


class ViewCounterService:
    def __init__(self, db: Session):
        self.db = db

    def increase_view(self, movie_id: int) -> None:
        """
        조회수를 정확히 1 증가시킵니다.

        읽고-더하고-저장하는 대신 한 번의 UPDATE 문으로 처리:
          UPDATE movies SET view_count = view_count + 1 WHERE id = :movie_id
        동시에 여러 요청이 와도 증가분이 유실되지 않는다.
        """
        try:
            updated = (
                self.db.query(Movie)
                .filter(Movie.id == movie_id)
                .update({Movie.view: Movie.view + 1}, synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Error increasing view for movie %s: %s", movie_id, exc)
            raise UpstreamFailure("Error increasing movie view") from exc

        if updated == 0:
            raise NotFound("Movie not found")

    def top_viewed(self, limit: int = config.TOP_VIEWED_LIMIT) -> List[Movie]:
        return MovieQueryService(self.db).top_viewed(limit)
