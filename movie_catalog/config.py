# -------------------------------------------------------
# config.py — 환경변수 기반 설정값 (DB / 페이지네이션 / 미디어 업로드 / 로깅)
# -------------------------------------------------------

import os
from dotenv import load_dotenv

# .env 파일의 환경변수를 현재 프로세스 환경에 주입
# - 이미 설정된 실제 환경변수는 덮어쓰지 않음
load_dotenv()

# -----------------------------
# DB 접속 정보 (기본값 포함)
# -----------------------------
# NOTE: 기본값은 로컬 개발용. 운영에서는 반드시 실제 비밀값으로 대체.
DB_USER = os.getenv("DB_USER", "fastapiid")
DB_PASSWORD = os.getenv("DB_PASSWORD", "fastapipw")
DB_HOST = os.getenv("DB_HOST", "127.0.0.1")
DB_PORT = os.getenv("DB_PORT", "3306")
DB_NAME = os.getenv("DB_NAME", "moviesdb")

# DATABASE_URL이 있으면 그대로 사용 (예: sqlite:///./movies.db)
# 없으면 PyMySQL 드라이버 + utf8mb4 문자셋으로 조립
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}?charset=utf8mb4",
)

# -----------------------------
# 페이지네이션
# -----------------------------
DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", "10"))
# 한 페이지에 내려줄 수 있는 최대 건수 (이 값을 넘는 limit 요청은 잘라냄)
MAX_PAGE_LIMIT = int(os.getenv("MAX_PAGE_LIMIT", "100"))
# page 상한. offset = (page - 1) * limit 이 DB 정수 범위를 넘지 않도록 잘라냄
MAX_PAGE = int(os.getenv("MAX_PAGE", "1000000"))

RELATED_LIMIT = 10
TOP_VIEWED_LIMIT = 15

# -----------------------------
# 미디어 업로드 (Cloudinary 호환 unsigned upload API)
# -----------------------------
MEDIA_UPLOAD_URL = os.getenv("MEDIA_UPLOAD_URL", "https://api.cloudinary.com/v1_1/demo/auto/upload")
MEDIA_UPLOAD_PRESET = os.getenv("MEDIA_UPLOAD_PRESET", "")
MEDIA_UPLOAD_FOLDER = os.getenv("MEDIA_UPLOAD_FOLDER", "")
# 업로드가 멈춰도 요청이 무한정 붙잡히지 않도록 초 단위 타임아웃
MEDIA_UPLOAD_TIMEOUT = float(os.getenv("MEDIA_UPLOAD_TIMEOUT", "30"))

# -----------------------------
# 로깅 / CORS
# -----------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
