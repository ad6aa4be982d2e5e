# ------------------------------------------------------------
# media.py — 외부 미디어 호스트(Cloudinary 호환) 업로드 클라이언트
# ------------------------------------------------------------

import logging
from typing import Any, NamedTuple, Optional

import httpx

from . import config
from .errors import MediaUploadError

logger = logging.getLogger(__name__)


class MediaAsset(NamedTuple):
    """업로드할 파일 1개 (FastAPI UploadFile 에서 만들어짐)."""

    filename: str
    content: Any            # bytes 또는 file-like 객체
    content_type: Optional[str] = None

    @classmethod
    def from_upload(cls, upload) -> Optional["MediaAsset"]:
        # 폼에서 파일 필드를 비워 보내면 filename 이 빈 문자열로 들어온다
        if upload is None or not upload.filename:
            return None
        return cls(upload.filename, upload.file, upload.content_type)


class MediaUploader:
    """
    파일을 미디어 호스트에 올리고 영구 URL 을 돌려받는다.

    - POST {upload_url}  multipart: file, upload_preset, (folder)
    - 응답 JSON 의 secure_url (없으면 url) 을 사용
    - timeout 초 안에 끝나지 않으면 MediaUploadError
    """

    def __init__(self, upload_url: str = None, upload_preset: str = None, folder: str = None,
                 timeout: float = None, transport: httpx.BaseTransport = None):
        self.upload_url = upload_url or config.MEDIA_UPLOAD_URL
        self.upload_preset = config.MEDIA_UPLOAD_PRESET if upload_preset is None else upload_preset
        self.folder = config.MEDIA_UPLOAD_FOLDER if folder is None else folder
        self.timeout = config.MEDIA_UPLOAD_TIMEOUT if timeout is None else timeout
        self.transport = transport

    def _form_data(self) -> dict:
        data = {}
        if self.upload_preset:
            data["upload_preset"] = self.upload_preset
        if self.folder:
            data["folder"] = self.folder
        return data

    def upload(self, asset: MediaAsset) -> str:
        files = {"file": (asset.filename, asset.content, asset.content_type or "application/octet-stream")}
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                r = client.post(self.upload_url, data=self._form_data(), files=files)
                r.raise_for_status()
                body = r.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.exception("Media upload failed for %s: %s", asset.filename, exc)
            raise MediaUploadError("Error uploading media") from exc

        url = body.get("secure_url") or body.get("url")
        if not url:
            logger.error("Media host returned no URL for %s: %s", asset.filename, body)
            raise MediaUploadError("Error uploading media")

        logger.info("Uploaded %s -> %s", asset.filename, url)
        return url
