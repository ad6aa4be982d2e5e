# ------------------------------------------------------------
# taxonomy.py — 장르/국가/배우 같은 "이름만 있는" 엔티티 서비스
# ------------------------------------------------------------

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import NotFound, UpstreamFailure

logger = logging.getLogger(__name__)


class NamedEntityService:
    """model 은 Genre / Country / Actor 중 하나 (id, name 컬럼을 가진 모델)."""

    def __init__(self, db: Session, model):
        self.db = db
        self.model = model
        self.label = model.__name__

    def list_all(self):
        try:
            return self.db.query(self.model).order_by(self.model.name.asc(), self.model.id.asc()).all()
        except SQLAlchemyError as exc:
            logger.exception("Error listing %s: %s", self.label, exc)
            raise UpstreamFailure(f"Error fetching {self.label.lower()} list") from exc

    def get(self, entity_id: int):
        try:
            entity = self.db.get(self.model, entity_id)
        except SQLAlchemyError as exc:
            logger.exception("Error fetching %s %s: %s", self.label, entity_id, exc)
            raise UpstreamFailure(f"Error fetching {self.label.lower()}") from exc
        if entity is None:
            raise NotFound(f"{self.label} not found")
        return entity

    def create(self, name: str):
        entity = self.model(name=name)
        try:
            self.db.add(entity)
            self.db.commit()
            self.db.refresh(entity)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Error creating %s: %s", self.label, exc)
            raise UpstreamFailure(f"Error creating {self.label.lower()}") from exc
        logger.info("Created %s %s (%s)", self.label, entity.id, entity.name)
        return entity
