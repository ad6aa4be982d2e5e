# ------------------------------------------------------------
# mutations.py — 영화 생성/수정/삭제 서비스
# ------------------------------------------------------------

import logging
import re
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import NotFound, UpstreamFailure
from .media import MediaAsset, MediaUploader
from .models import Actor, Country, Genre, Movie

logger = logging.getLogger(__name__)

_ACTOR_PREFIX = re.compile(r"^\[ .*? \] ")


def display_name(actor_name: Optional[str], title: str) -> str:
    """저장용 이름: "[ 배우명 ] 제목" (배우가 없으면 제목 그대로)."""
    if not actor_name:
        return title
    return f"[ {actor_name} ] {title}"


def strip_actor_prefix(name: str) -> str:
    """
    display_name 의 역변환. 맨 앞의 "[ ... ] " 접두어를 떼어낸다.

    배우가 삭제됐거나(FK 가 NULL) 다른 배우 이름으로 저장된 경우에도
    접두어가 중복으로 쌓이지 않도록 현재 배우와 상관없이 제거한다.
    """
    return _ACTOR_PREFIX.sub("", name, count=1)


class MovieMutationService:
    """
    영화 쓰기 작업 서비스.

    NOTE: 업로드는 DB 쓰기보다 먼저 일어난다. 업로드 후 INSERT 가 실패한 요청을
          재시도하면 미디어 호스트에 같은 파일이 중복으로 남을 수 있다.
    """

    def __init__(self, db: Session, uploader: MediaUploader):
        self.db = db
        self.uploader = uploader

    def _require(self, model, entity_id: int, label: str):
        entity = self.db.get(model, entity_id)
        if entity is None:
            raise NotFound(f"{label} not found")
        return entity

    def _commit(self, movie: Movie, message: str) -> Movie:
        try:
            self.db.commit()
            self.db.refresh(movie)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("%s: %s", message, exc)
            raise UpstreamFailure(message) from exc
        return movie

    def create(self, name: str, genre_id: int, country_id: int, actor_id: int,
               image: MediaAsset, video: MediaAsset) -> Movie:
        try:
            actor = self._require(Actor, actor_id, "Actor")
            self._require(Genre, genre_id, "Genre")
            self._require(Country, country_id, "Country")
        except SQLAlchemyError as exc:
            logger.exception("Error creating movie: %s", exc)
            raise UpstreamFailure("Error creating movie") from exc

        # 두 URL 이 모두 있어야 INSERT 가능 → 업로드 실패 시 여기서 중단
        image_url = self.uploader.upload(image)
        video_url = self.uploader.upload(video)

        movie = Movie(
            name=display_name(actor.name, name),
            image_url=image_url,
            video_url=video_url,
            view=0,
            genre_id=genre_id,
            country_id=country_id,
            actor_id=actor_id,
        )
        self.db.add(movie)
        movie = self._commit(movie, "Error creating movie")
        logger.info("Created movie %s (%s)", movie.id, movie.name)
        return movie

    def update(self, movie_id: int, name: Optional[str] = None, genre_id: Optional[int] = None,
               country_id: Optional[int] = None, actor_id: Optional[int] = None,
               image: Optional[MediaAsset] = None, video: Optional[MediaAsset] = None) -> Movie:
        """
        전달된 필드만 수정합니다.

        - 이미지/영상은 새 파일이 있을 때만 업로드
        - name 또는 actor_id 가 바뀌면 create 와 같은 "[ 배우명 ] 제목" 규칙으로 이름을 다시 만든다
          (배우만 바뀐 경우 기존 이름 맨 앞의 "[ ... ] " 접두어를 떼어 제목을 복원)
        """
        try:
            movie = self._require(Movie, movie_id, "Movie")
            old_actor = movie.actor

            new_actor = old_actor
            if actor_id is not None:
                new_actor = self._require(Actor, actor_id, "Actor")
            if genre_id is not None:
                self._require(Genre, genre_id, "Genre")
            if country_id is not None:
                self._require(Country, country_id, "Country")
        except SQLAlchemyError as exc:
            logger.exception("Error updating movie %s: %s", movie_id, exc)
            raise UpstreamFailure("Error updating movie") from exc

        image_url = self.uploader.upload(image) if image is not None else None
        video_url = self.uploader.upload(video) if video is not None else None

        if name is not None or actor_id is not None:
            title = name
            if title is None:
                title = strip_actor_prefix(movie.name)
            movie.name = display_name(new_actor.name if new_actor else None, title)

        if genre_id is not None:
            movie.genre_id = genre_id
        if country_id is not None:
            movie.country_id = country_id
        if actor_id is not None:
            movie.actor_id = actor_id

        if image_url is not None:
            movie.image_url = image_url
        if video_url is not None:
            movie.video_url = video_url

        movie = self._commit(movie, "Error updating movie")
        logger.info("Updated movie %s", movie.id)
        return movie

    def delete(self, movie_id: int) -> None:
        try:
            deleted = self.db.query(Movie).filter(Movie.id == movie_id).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Error deleting movie %s: %s", movie_id, exc)
            raise UpstreamFailure("Error deleting movie") from exc

        if deleted == 0:
            raise NotFound("Movie not found")
        logger.info("Deleted movie %s", movie_id)
