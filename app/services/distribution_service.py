# Elosztás (szállítólevél ellenőrzés): OCR import, napi nézet, mennyiség rögzítés
import logging
from collections import OrderedDict
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import ExtractionError
from app.models.distribution import Distribution
from app.services.calendar_helper import local_today
from app.services.classifiers import distribution_status, normalize_unit
from app.services.entity_gateway import EntityGateway
from app.services.extraction_schemas import DISTRIBUTION_SCHEMA
from app.services.ocr_service import IncomingFile, OcrService

logger = logging.getLogger(__name__)


def _to_int(value, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def distribution_rows(output: Dict[str, Any], image_url: str, day: date) -> List[Dict[str, Any]]:
    """Egy kiolvasott szállítólevél tételei adatbázis sorokká.

    A fő kategória hiányában a terület lesz a csoport, a sorszám hiányában a pozíció.
    """
    area = output.get("area")
    delivery_note_number = output.get("delivery_note_number") or "N/A"
    main_category = output.get("main_category") or area
    rows = []
    for index, item in enumerate(output.get("products") or []):
        if not isinstance(item, dict):
            continue
        rows.append({
            "date": day,
            "delivery_note_number": delivery_note_number,
            "main_category": main_category,
            "area": area,
            "product_name": item.get("product_name") or "Ismeretlen termék",
            "article_number": str(item.get("article_number") or "N/A"),
            "quantity": _to_int(item.get("quantity")),
            "unit": normalize_unit(item.get("unit")),
            "received_quantity": None,
            "status": "pending",
            "note": "",
            "image_url": image_url,
            "order": _to_int(item.get("order")) or index + 1,
        })
    return rows


class DistributionService:
    def __init__(self, db: Session, ocr: Optional[OcrService] = None):
        self.distributions = EntityGateway(db, Distribution)
        self.ocr = ocr

    async def import_delivery_notes(self, files: List[IncomingFile], day: Optional[date] = None) -> List[Distribution]:
        """Szállítólevél fotók beolvasása; a tételek a mai napra kerülnek."""
        day = day or local_today()
        results = await self.ocr.extract_from_files(files, DISTRIBUTION_SCHEMA, bucket="distributions")
        rows = [row for r in results for row in distribution_rows(r["output"], r["image_url"], day)]
        if not rows:
            raise ExtractionError()
        created = self.distributions.bulk_create(rows)
        logger.info(f"✅ Elosztás import: {len(created)} tétel ({day})")
        return created

    def day_view(self, day: date, search: Optional[str] = None) -> Dict[str, List[Distribution]]:
        """A nap tételei fő kategória szerint csoportosítva; opcionális cikkszám keresés."""
        items = self.distributions.filter({"date": day}, order="created_at,order,id")
        if search:
            needle = search.lower()
            items = [i for i in items if needle in (i.article_number or "").lower()]
        grouped: Dict[str, List[Distribution]] = OrderedDict()
        for item in items:
            grouped.setdefault(item.main_category or "", []).append(item)
        return grouped

    def set_received(self, distribution_id: int, received_quantity: Optional[int]) -> Distribution:
        """Beérkezett mennyiség rögzítése; negatív érték 0 lesz, None visszaállít."""
        item = self.distributions.get(distribution_id)
        if received_quantity is not None:
            received_quantity = max(0, received_quantity)
        return self.distributions.update(distribution_id, {
            "received_quantity": received_quantity,
            "status": distribution_status(received_quantity, item.quantity),
        })

    def mark_correct(self, distribution_id: int) -> Distribution:
        item = self.distributions.get(distribution_id)
        return self.distributions.update(distribution_id, {"received_quantity": item.quantity, "status": "ok"})

    def reset(self, distribution_id: int) -> Distribution:
        return self.distributions.update(distribution_id, {"received_quantity": None, "status": "pending"})

    def update_note(self, distribution_id: int, note: str) -> Distribution:
        return self.distributions.update(distribution_id, {"note": note})

    def delete_group(self, area: Optional[str], delivery_note_number: str, day: date) -> int:
        """Egy szállítólevél (terület + szám + nap) összes tételének törlése."""
        items = self.distributions.filter({"area": area, "delivery_note_number": delivery_note_number, "date": day})
        return self.distributions.delete_many(items)
