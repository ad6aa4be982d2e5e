# ------------------------------------------------------------
# errors.py — 서비스 레이어 예외 정의 및 HTTP 응답 매핑
# ------------------------------------------------------------

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """클라이언트에 그대로 노출해도 되는 메시지와 HTTP 상태코드를 가진 예외."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(CatalogError):
    """id 에 해당하는 엔티티가 없음 (404)."""

    status_code = 404


class UpstreamFailure(CatalogError):
    """DB 또는 미디어 호스트 호출 실패 (500). 내부 상세는 서버 로그에만 남긴다."""

    status_code = 500


class QueryError(UpstreamFailure):
    pass


class MediaUploadError(UpstreamFailure):
    pass


async def catalog_error_handler(request: Request, exc: CatalogError):
    if exc.status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def register_exception_handlers(app: FastAPI):
    # 모든 CatalogError 는 {"error": "..."} 형태로 응답
    app.add_exception_handler(CatalogError, catalog_error_handler)
