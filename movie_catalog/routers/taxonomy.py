# -----------------------------------------------------------
# taxonomy.py — 장르/국가/배우 목록/단건/등록 엔드포인트
# -----------------------------------------------------------

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Actor, Country, Genre
from ..schemas import ActorOut, CountryOut, GenreOut, NamedEntityIn
from ..taxonomy import NamedEntityService


def build_router(model, schema, prefix: str, tag: str) -> APIRouter:
    """
    id/name 만 가진 엔티티용 라우터를 만든다.
      GET  {prefix}            전체 목록 (이름순)
      GET  {prefix}/{id}       단건 (없으면 404)
      POST {prefix}            등록 (JSON: {"name": "..."})
    """
    router = APIRouter(prefix=prefix, tags=[tag])

    def get_service(db: Session = Depends(get_db)) -> NamedEntityService:
        return NamedEntityService(db, model)

    @router.get("", response_model=List[schema])
    def list_entities(service: NamedEntityService = Depends(get_service)):
        return service.list_all()

    @router.get("/{entity_id}", response_model=schema)
    def get_entity(entity_id: int, service: NamedEntityService = Depends(get_service)):
        return service.get(entity_id)

    @router.post("", response_model=schema, status_code=201)
    def create_entity(payload: NamedEntityIn, service: NamedEntityService = Depends(get_service)):
        return service.create(payload.name)

    return router


genres = build_router(Genre, GenreOut, "/api/genres", "genres")
countries = build_router(Country, CountryOut, "/api/countries", "countries")
actors = build_router(Actor, ActorOut, "/api/actors", "actors")
