# ------------------------------------------------------------
# models.py — SQLAlchemy ORM 모델 정의 (movies/genres/countries/actors)
# ------------------------------------------------------------

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from .db import Base  # Declarative Base: 모든 ORM 모델의 베이스 클래스


def _utcnow():
    # 마이크로초 단위까지 저장되어 같은 초에 생성된 영화도 최신순 정렬이 안정적
    return datetime.now(timezone.utc)


# ------------------------------
# Genre: 장르 테이블
# ------------------------------
class Genre(Base):
    __tablename__ = "genres"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)

    # Movie.genre 와의 1:N 관계
    movies = relationship("Movie", back_populates="genre")


# ------------------------------
# Country: 국가 테이블
# ------------------------------
class Country(Base):
    __tablename__ = "countries"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)

    movies = relationship("Movie", back_populates="country")


# ------------------------------
# Actor: 배우 테이블
# ------------------------------
class Actor(Base):
    __tablename__ = "actors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)

    movies = relationship("Movie", back_populates="actor")


# ------------------------------
# Movie: 영화 테이블
# ------------------------------
class Movie(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, index=True)

    # 표시용 이름. 생성/수정 시 "[ 배우명 ] 제목" 형태로 저장됨 (mutations.py 참고)
    name = Column(String(255), nullable=False)

    # 외부 미디어 호스트에 업로드된 이미지/영상 URL
    image_url = Column(String(500))
    video_url = Column(String(500))

    # 조회수. VIEW 는 MySQL 예약어라 컬럼명은 view_count 로 둔다.
    # 증가는 view_counter.py 의 단일 UPDATE 문으로만 수행
    view = Column("view_count", Integer, nullable=False, default=0, server_default="0")

    # 목록 조회의 기본 정렬 키 (최신순)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    # 외래 키(FK). 참조 대상이 삭제되면 NULL 로 남김
    genre_id = Column(Integer, ForeignKey("genres.id", ondelete="SET NULL"), nullable=True, index=True)
    country_id = Column(Integer, ForeignKey("countries.id", ondelete="SET NULL"), nullable=True, index=True)
    actor_id = Column(Integer, ForeignKey("actors.id", ondelete="SET NULL"), nullable=True, index=True)

    # N:1 관계 매핑 (조회 시 서비스 레이어에서 joinedload 로 즉시 로딩)
    genre = relationship("Genre", back_populates="movies")
    country = relationship("Country", back_populates="movies")
    actor = relationship("Actor", back_populates="movies")

    __table_args__ = (CheckConstraint("view_count >= 0", name="ck_movies_view_nonneg"),)
