# -------------------------------------------------------
# db.py — SQLAlchemy 엔진/세션팩토리 생성 및 FastAPI 의존성 정의
# -------------------------------------------------------

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from . import config

# ----------------------------------------------
# Declarative Base
# ----------------------------------------------
# - 모든 ORM 모델이 상속받는 베이스 클래스 (models.py 참고)
Base = declarative_base()


def make_engine(url: str = None, **kwargs):
    """
    SQLAlchemy Engine 생성

    - pool_pre_ping=True: 풀에서 커넥션을 빌려오기 전에 ping으로 죽은 커넥션을 감지/재연결
    - pool_recycle=3600: 커넥션 수명 1시간 (MySQL wait_timeout 대응)
    - kwargs로 넘긴 값이 기본값보다 우선 (테스트에서 poolclass 등을 바꿀 때 사용)
    """
    options = {"pool_pre_ping": True, "pool_recycle": 3600}
    options.update(kwargs)
    return create_engine(url or config.DATABASE_URL, **options)


def make_session_factory(engine):
    # - autocommit=False: 명시적 commit() 전까지 커밋되지 않음
    # - autoflush=False: 요청 단위 트랜잭션에서 flush 시점을 예측 가능하게 유지
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    """
    FastAPI 의존성 주입용 DB 세션 제공자(Generator)

    세션팩토리는 전역 변수가 아니라 앱 팩토리(main.create_app)가
    app.state.session_factory 에 넣어둔 것을 사용한다.

    동작:
    1) 요청이 들어오면 session_factory()로 세션 생성
    2) 핸들러에 주입(yield)
    3) 응답 후 finally 블록에서 세션 종료(close)
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


# -------------------------------------------------------
# [참고]
# -------------------------------------------------------
# 1) 연결 계정/권한:
#    - 앱 전용 계정에 최소 권한만 부여
#      예) GRANT SELECT, INSERT, UPDATE, DELETE ON moviesdb.* TO 'fastapiid'@'%';
#
# 2) 커넥션 풀:
#    - 트래픽이 많으면 make_engine(pool_size=10, max_overflow=20) 처럼 조절
#
# 3) 로컬 개발:
#    - DATABASE_URL=sqlite:///./movies.db 로 MySQL 없이 실행 가능
