import io

import pytest

from movie_catalog.errors import QueryError, UpstreamFailure
from movie_catalog.media import MediaAsset
from movie_catalog.models import Genre, Movie
from movie_catalog.mutations import MovieMutationService
from movie_catalog.queries import MovieQueryService
from movie_catalog.view_counter import ViewCounterService


@pytest.fixture
def broken_store(engine, catalog):
    # 장르/국가/배우는 남기고 movies 테이블만 없애서 영화 관련 SQL 이 모두 실패하게 만든다
    Movie.__table__.drop(bind=engine)
    return catalog


@pytest.mark.parametrize("call", [
    lambda s: s.list_all(),
    lambda s: s.search("Matrix"),
    lambda s: s.list_by_genre(1),
    lambda s: s.list_by_country(1),
    lambda s: s.list_by_actor(1),
    lambda s: s.get_by_id(1),
    lambda s: s.get_related(1),
    lambda s: s.top_viewed(),
])
def test_queries_raise_query_error(db, broken_store, call):
    with pytest.raises(QueryError):
        call(MovieQueryService(db))


def test_query_error_carries_generic_message(db, broken_store):
    with pytest.raises(QueryError) as excinfo:
        MovieQueryService(db).list_by_genre(1)
    assert excinfo.value.message == "Error fetching movies by genre"


def test_failed_create_rolls_back(db, uploader, broken_store):
    service = MovieMutationService(db, uploader)

    with pytest.raises(UpstreamFailure) as excinfo:
        service.create(
            "Matrix", broken_store["action"].id, broken_store["usa"].id, broken_store["keanu"].id,
            MediaAsset("a.jpg", io.BytesIO(b"x")), MediaAsset("b.mp4", io.BytesIO(b"y")),
        )

    assert excinfo.value.message == "Error creating movie"
    assert not db.new
    # 롤백 후에도 세션은 계속 사용 가능
    assert db.query(Genre).count() == 2


def test_failed_delete_rolls_back(db, uploader, broken_store):
    with pytest.raises(UpstreamFailure) as excinfo:
        MovieMutationService(db, uploader).delete(1)

    assert excinfo.value.message == "Error deleting movie"
    assert db.query(Genre).count() == 2


def test_failed_view_increment_rolls_back(db, broken_store):
    with pytest.raises(UpstreamFailure) as excinfo:
        ViewCounterService(db).increase_view(1)

    assert excinfo.value.message == "Error increasing movie view"
    assert db.query(Genre).count() == 2


@pytest.mark.parametrize("method, path, message", [
    ("get", "/api/movies", "Error fetching movies"),
    ("get", "/api/movies/search?q=x", "Error searching for movies"),
    ("get", "/api/movies/genre/1", "Error fetching movies by genre"),
    ("get", "/api/movies/country/1", "Error fetching movies by country"),
    ("get", "/api/movies/actor/1", "Error fetching movies by actor"),
    ("get", "/api/movies/1", "Error fetching movie"),
    ("get", "/api/movies/1/related", "Error fetching related movies"),
    ("get", "/api/movies/top-viewed", "Error fetching top viewed movies"),
    ("post", "/api/movies/1/view", "Error increasing movie view"),
    ("delete", "/api/movies/1", "Error deleting movie"),
])
def test_routes_return_generic_500(client, broken_store, method, path, message):
    r = getattr(client, method)(path)
    assert r.status_code == 500
    assert r.json() == {"error": message}
