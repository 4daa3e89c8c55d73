# app/services/entity_gateway.py
# Általános CRUD réteg a táblák fölött (list / filter / create / bulk_create / update / delete)

import logging
from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.orm import Session

from app.core.exceptions import EntityNotFound

logger = logging.getLogger(__name__)


class EntityGateway:
    """Egy tábla CRUD műveletei egységes felületen.

    A rendezés a "-mező" konvenciót követi: a mínusz jel csökkenő sorrendet
    jelent (pl. "-date" a legújabb nap elöl). Minden módosító hívás azonnal
    commitol, a visszaadott objektum frissítve van.

    Args:
        db (Session): Aktív SQLAlchemy munkamenet.
        model: SQLAlchemy modell osztály.

    Examples:
        >>> gateway = EntityGateway(db, Distribution)
        >>> gateway.filter({"date": date(2025, 10, 20)}, order="order")
        >>> gateway.update(5, {"received_quantity": 3, "status": "discrepancy"})
    """

    def __init__(self, db: Session, model):
        self.db = db
        self.model = model

    def _apply_order(self, query, order: Optional[str]):
        if not order:
            return query
        for part in order.split(","):
            part = part.strip()
            if not part:
                continue
            descending = part.startswith("-")
            column = getattr(self.model, part.lstrip("-"))
            query = query.order_by(column.desc() if descending else column.asc())
        return query

    def list(self, order: Optional[str] = None, limit: Optional[int] = None) -> List[Any]:
        query = self._apply_order(self.db.query(self.model), order)
        if limit:
            query = query.limit(limit)
        return query.all()

    def filter(
        self,
        criteria: Dict[str, Any],
        order: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Any]:
        """Egyenlőség alapú szűrés a megadott mezőkre."""
        query = self.db.query(self.model)
        for field, value in criteria.items():
            query = query.filter(getattr(self.model, field) == value)
        query = self._apply_order(query, order)
        if limit:
            query = query.limit(limit)
        return query.all()

    def get(self, entity_id: int):
        entity = self.db.get(self.model, entity_id)
        if entity is None:
            raise EntityNotFound(self.model.__name__, entity_id)
        return entity

    def create(self, data: Dict[str, Any]):
        entity = self.model(**data)
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        logger.debug(f"{self.model.__name__} létrehozva: #{entity.id}")
        return entity

    def bulk_create(self, rows: Iterable[Dict[str, Any]]) -> List[Any]:
        entities = [self.model(**row) for row in rows]
        if not entities:
            return []
        self.db.add_all(entities)
        self.db.commit()
        for entity in entities:
            self.db.refresh(entity)
        logger.info(f"✅ {len(entities)} {self.model.__name__} rekord létrehozva")
        return entities

    def update(self, entity_id: int, patch: Dict[str, Any]):
        entity = self.get(entity_id)
        for field, value in patch.items():
            setattr(entity, field, value)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity_id: int) -> None:
        entity = self.get(entity_id)
        self.db.delete(entity)
        self.db.commit()

    def delete_many(self, entities: Iterable[Any]) -> int:
        count = 0
        for entity in entities:
            self.db.delete(entity)
            count += 1
        self.db.commit()
        if count:
            logger.info(f"{count} {self.model.__name__} rekord törölve")
        return count
