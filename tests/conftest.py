import os

# config.py 는 import 시점에 환경변수를 읽으므로 패키지 import 전에 고정
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DEFAULT_PAGE_LIMIT"] = "10"
os.environ["MAX_PAGE_LIMIT"] = "100"
os.environ["MAX_PAGE"] = "1000000"

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from movie_catalog.db import Base, make_engine, make_session_factory  # noqa: E402
from movie_catalog.errors import MediaUploadError  # noqa: E402
from movie_catalog.main import create_app  # noqa: E402
from movie_catalog.models import Actor, Country, Genre, Movie  # noqa: E402

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeUploader:
    """미디어 호스트 대신 업로드된 파일명을 기록하고 가짜 URL 을 돌려준다."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    def upload(self, asset):
        if self.fail:
            raise MediaUploadError("Error uploading media")
        self.calls.append(asset.filename)
        return f"https://media.test/{asset.filename}"


@pytest.fixture
def engine():
    # 인메모리 SQLite 를 모든 세션이 같은 커넥션으로 공유
    engine = make_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def catalog(db):
    """장르 2 / 국가 2 / 배우 2 기본 데이터."""
    action, drama = Genre(name="Action"), Genre(name="Drama")
    usa, korea = Country(name="USA"), Country(name="Korea")
    keanu, song = Actor(name="Keanu"), Actor(name="Song Kang-ho")
    db.add_all([action, drama, usa, korea, keanu, song])
    db.commit()
    return {
        "action": action, "drama": drama,
        "usa": usa, "korea": korea,
        "keanu": keanu, "song": song,
    }


@pytest.fixture
def make_movie(db):
    """호출할 때마다 1분씩 늦은 created_at 으로 영화를 만든다 (최신순 정렬 검증용)."""
    counter = {"n": 0}

    def _make(name, genre=None, country=None, actor=None, view=0):
        counter["n"] += 1
        movie = Movie(
            name=name,
            image_url=f"https://media.test/{name}.jpg",
            video_url=f"https://media.test/{name}.mp4",
            view=view,
            created_at=BASE_TIME + timedelta(minutes=counter["n"]),
            genre_id=genre.id if genre else None,
            country_id=country.id if country else None,
            actor_id=actor.id if actor else None,
        )
        db.add(movie)
        db.commit()
        return movie

    return _make


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def failing_uploader():
    return FakeUploader(fail=True)


@pytest.fixture
def client(engine, uploader):
    app = create_app(engine=engine, uploader=uploader)
    with TestClient(app) as c:
        yield c
