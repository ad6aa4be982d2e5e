from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

# ------------------------------------------------------------
# 응답 JSON 키 규칙
# ------------------------------------------------------------
# - 파이썬 쪽 필드명은 snake_case, JSON 으로 나갈 때는 wire 이름 사용
#   (imageUrl / createdAt / GenreId / Genre / totalPages ...)
# - FastAPI 는 응답 모델을 by_alias=True 로 덤프한 뒤 다시 검증하므로
#   검증 시에는 snake_case 와 wire 이름을 모두 받아야 한다


def wire(field_name: str, wire_name: str, default=None, **kwargs):
    aliases = dict(validation_alias=AliasChoices(field_name, wire_name), serialization_alias=wire_name)
    if "default_factory" in kwargs:
        return Field(**aliases, **kwargs)
    return Field(default, **aliases, **kwargs)


# ------------------------------------------------------------
# 장르/국가/배우: id + name 만 가진 단순 엔티티
# ------------------------------------------------------------
class NamedEntityOut(BaseModel):
    id: int
    name: str

    class Config:
        # ORM 객체(SQLAlchemy 모델)로부터 필드 맵핑 허용
        from_attributes = True


class GenreOut(NamedEntityOut):
    pass


class CountryOut(NamedEntityOut):
    pass


class ActorOut(NamedEntityOut):
    pass


class NamedEntityIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


# ------------------------------------------------------------
# MovieOut: 목록/검색 응답의 영화 1건 (Genre, Country 포함)
# ------------------------------------------------------------
class MovieOut(BaseModel):
    id: int
    name: str
    image_url: Optional[str] = wire("image_url", "imageUrl", None)
    video_url: Optional[str] = wire("video_url", "videoUrl", None)
    view: int = 0
    created_at: Optional[datetime] = wire("created_at", "createdAt", None)
    updated_at: Optional[datetime] = wire("updated_at", "updatedAt", None)
    genre_id: Optional[int] = wire("genre_id", "GenreId", None)
    country_id: Optional[int] = wire("country_id", "CountryId", None)
    actor_id: Optional[int] = wire("actor_id", "ActorId", None)
    genre: Optional[GenreOut] = wire("genre", "Genre", None)
    country: Optional[CountryOut] = wire("country", "Country", None)

    class Config:
        from_attributes = True


# ------------------------------------------------------------
# MovieDetailOut: 단건/관련 영화 응답 (Actor 까지 포함)
# ------------------------------------------------------------
class MovieDetailOut(MovieOut):
    actor: Optional[ActorOut] = wire("actor", "Actor", None)


# ------------------------------------------------------------
# 페이지 봉투: { movies, totalPages }
# ------------------------------------------------------------
class MoviePage(BaseModel):
    movies: List[MovieOut]
    total_pages: int = wire("total_pages", "totalPages", 0)


class MovieListOut(MoviePage):
    # 전체 목록이 비었을 때만 "No movies found" 가 채워짐
    message: Optional[str] = None


class RelatedMoviesOut(BaseModel):
    clicked_movie: MovieOut = wire("clicked_movie", "clickedMovie", ...)
    related_movies: List[MovieDetailOut] = wire("related_movies", "relatedMovies", default_factory=list)


class MessageOut(BaseModel):
    message: str
