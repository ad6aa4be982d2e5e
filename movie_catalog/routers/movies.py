# ---------------------------------------------
# movies.py — 영화 조회/검색/등록/수정/삭제/조회수 엔드포인트
# ---------------------------------------------

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, Response, UploadFile
from sqlalchemy.orm import Session

from ..db import get_db
from ..media import MediaAsset, MediaUploader
from ..mutations import MovieMutationService
from ..pagination import MoviePageResult
from ..queries import MovieQueryService
from ..schemas import (
    MessageOut,
    MovieDetailOut,
    MovieListOut,
    MovieOut,
    MoviePage,
    RelatedMoviesOut,
)
from ..view_counter import ViewCounterService

# 이 라우터의 모든 엔드포인트는 "/api/movies" 로 시작
router = APIRouter(prefix="/api/movies", tags=["movies"])


# -----------------------------
# 서비스 의존성
# -----------------------------
# 요청마다 get_db 가 연 세션을 서비스 생성자에 넘긴다
def get_query_service(db: Session = Depends(get_db)) -> MovieQueryService:
    return MovieQueryService(db)


def get_uploader(request: Request) -> MediaUploader:
    return request.app.state.uploader


def get_mutation_service(
    db: Session = Depends(get_db),
    uploader: MediaUploader = Depends(get_uploader),
) -> MovieMutationService:
    return MovieMutationService(db, uploader)


def get_view_counter(db: Session = Depends(get_db)) -> ViewCounterService:
    return ViewCounterService(db)


def _page(result: MoviePageResult) -> MoviePage:
    return MoviePage(
        movies=[MovieOut.model_validate(m) for m in result.items],
        total_pages=result.total_pages,
    )


# NOTE: "/search", "/top-viewed" 같은 고정 경로는 "/{movie_id}" 보다 먼저 등록해야 한다.

@router.get("/search", response_model=MoviePage)
def search_movies(
    q: Optional[str] = None,          # 부분 일치 검색어
    page: Optional[int] = None,       # 없거나 0 이하면 1
    limit: Optional[int] = None,      # 없거나 0 이하면 10, 최대 MAX_PAGE_LIMIT
    service: MovieQueryService = Depends(get_query_service),
):
    """
    이름에 q 가 포함된 영화를 최신순으로 페이지네이션해서 반환합니다.
    결과가 없으면 {"movies": [], "totalPages": 0}.
    """
    return _page(service.search(q, page, limit))


@router.get("", response_model=MovieListOut, response_model_exclude_unset=True)
def list_movies(
    page: Optional[int] = None,
    limit: Optional[int] = None,
    service: MovieQueryService = Depends(get_query_service),
):
    """
    전체 영화 목록 (최신순, Genre/Country 포함).

    - 영화가 하나도 없으면 message 필드에 "No movies found" 를 함께 내려준다.
    """
    result = service.list_all(page, limit)
    if result.count == 0:
        return MovieListOut(movies=[], total_pages=0, message="No movies found")
    page_out = _page(result)
    return MovieListOut(movies=page_out.movies, total_pages=page_out.total_pages)


@router.get("/top-viewed", response_model=List[MovieOut])
def top_viewed_movies(counter: ViewCounterService = Depends(get_view_counter)):
    """조회수 상위 15개 영화 (페이지 봉투 없이 리스트 그대로)."""
    return counter.top_viewed()


@router.get("/genre/{genre_id}", response_model=MoviePage)
def list_movies_by_genre(
    genre_id: int,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    service: MovieQueryService = Depends(get_query_service),
):
    return _page(service.list_by_genre(genre_id, page, limit))


@router.get("/country/{country_id}", response_model=MoviePage)
def list_movies_by_country(
    country_id: int,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    service: MovieQueryService = Depends(get_query_service),
):
    return _page(service.list_by_country(country_id, page, limit))


@router.get("/actor/{actor_id}", response_model=MoviePage)
def list_movies_by_actor(
    actor_id: int,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    service: MovieQueryService = Depends(get_query_service),
):
    return _page(service.list_by_actor(actor_id, page, limit))


@router.get("/{movie_id}", response_model=MovieDetailOut)
def get_movie(movie_id: int, service: MovieQueryService = Depends(get_query_service)):
    """영화 1건 (Genre/Country/Actor 포함). 없으면 404."""
    return service.get_by_id(movie_id)


@router.get("/{movie_id}/related", response_model=RelatedMoviesOut)
def related_movies(movie_id: int, service: MovieQueryService = Depends(get_query_service)):
    """
    클릭한 영화 + 관련 영화 최대 10개.

    같은 장르/국가 영화가 먼저, 부족하면 최신 영화로 채운다.
    """
    clicked, related = service.get_related(movie_id)
    return RelatedMoviesOut(
        clicked_movie=MovieOut.model_validate(clicked),
        related_movies=[MovieDetailOut.model_validate(m) for m in related],
    )


@router.post("", response_model=MovieOut, status_code=201)
def create_movie(
    name: str = Form(...),
    genre_id: int = Form(..., alias="genreId"),
    country_id: int = Form(..., alias="countryId"),
    actor_id: int = Form(..., alias="actorId"),
    image_file: UploadFile = File(..., alias="imageUrl"),   # 폼 필드명은 기존 클라이언트와 동일하게 imageUrl
    video_file: UploadFile = File(..., alias="videoUrl"),
    service: MovieMutationService = Depends(get_mutation_service),
):
    """
    multipart/form-data 로 영화를 등록합니다.

    동작 흐름:
    1) actorId/genreId/countryId 존재 확인 (없으면 404)
    2) 이미지/영상을 미디어 호스트에 업로드 (실패 시 500, 아무것도 저장하지 않음)
    3) 이름을 "[ 배우명 ] 제목" 으로 만들어 저장, view=0
    """
    image = MediaAsset.from_upload(image_file)
    video = MediaAsset.from_upload(video_file)
    if image is None or video is None:
        # 파일 필드는 왔지만 비어 있는 경우
        raise HTTPException(status_code=422, detail="imageUrl and videoUrl files are required")

    return service.create(
        name=name,
        genre_id=genre_id,
        country_id=country_id,
        actor_id=actor_id,
        image=image,
        video=video,
    )


@router.put("/{movie_id}", response_model=MovieOut)
def update_movie(
    movie_id: int,
    name: Optional[str] = Form(None),
    genre_id: Optional[int] = Form(None, alias="genreId"),
    country_id: Optional[int] = Form(None, alias="countryId"),
    actor_id: Optional[int] = Form(None, alias="actorId"),
    image_file: Optional[UploadFile] = File(None, alias="imageUrl"),
    video_file: Optional[UploadFile] = File(None, alias="videoUrl"),
    service: MovieMutationService = Depends(get_mutation_service),
):
    """보낸 필드만 수정. 파일은 새로 보낸 경우에만 다시 업로드."""
    return service.update(
        movie_id,
        name=name,
        genre_id=genre_id,
        country_id=country_id,
        actor_id=actor_id,
        image=MediaAsset.from_upload(image_file),
        video=MediaAsset.from_upload(video_file),
    )


@router.delete("/{movie_id}", status_code=204)
def delete_movie(movie_id: int, service: MovieMutationService = Depends(get_mutation_service)):
    service.delete(movie_id)
    return Response(status_code=204)


@router.post("/{movie_id}/view", response_model=MessageOut)
def increase_view(movie_id: int, counter: ViewCounterService = Depends(get_view_counter)):
    """조회수 +1. 없는 영화면 404."""
    counter.increase_view(movie_id)
    return {"message": "success"}
