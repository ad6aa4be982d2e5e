# ------------------------------------------------------------
# main.py — FastAPI 앱 팩토리/미들웨어/라우터 등록 진입점
# ------------------------------------------------------------

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .db import Base, make_engine, make_session_factory
from .errors import register_exception_handlers
from .media import MediaUploader
from .routers import movies, taxonomy

logger = logging.getLogger(__name__)


def configure_logging(level: str = None):
    logging.basicConfig(
        level=(level or config.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(engine=None, uploader: MediaUploader = None) -> FastAPI:
    """
    앱 팩토리.

    - engine / uploader 를 넘기지 않으면 환경변수(config.py) 기준으로 생성
    - 세션팩토리와 업로더는 app.state 에 보관 → db.get_db / routers 의 의존성이 꺼내 씀
    """
    configure_logging()

    engine = engine if engine is not None else make_engine()

    # ORM 메타데이터 기준으로 "존재하지 않는 테이블만" 생성
    # (마이그레이션 도구 도입 전의 간편 초기화)
    Base.metadata.create_all(bind=engine)

    app = FastAPI(title="Movie Catalog API")
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.uploader = uploader if uploader is not None else MediaUploader()

    # -------------------------------
    # CORS 설정 (운영에서는 CORS_ORIGINS 로 도메인 제한)
    # -------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # -------------------------------
    # 라우터 등록
    # -------------------------------
    # - movies:    /api/movies
    # - genres:    /api/genres
    # - countries: /api/countries
    # - actors:    /api/actors
    app.include_router(movies.router)
    app.include_router(taxonomy.genres)
    app.include_router(taxonomy.countries)
    app.include_router(taxonomy.actors)

    # 헬스체크용 루트 엔드포인트
    @app.get("/")
    def root():
        return {"ok": True, "service": "movie-catalog"}

    logger.info("Movie catalog API ready (%s)", engine.url.render_as_string(hide_password=True))
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
