# NF visszaküldés: központi lista import, heti nézet, vonalkód olvasás, mennyiség gyűjtés
import logging
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import DomainError, ExtractionError
from app.models.return_item import ReturnItem
from app.services.classifiers import classify_return_section
from app.services.entity_gateway import EntityGateway
from app.services.extraction_schemas import BARCODE_SCHEMA, RETURN_LIST_SCHEMA
from app.services.ocr_service import IncomingFile, OcrService

logger = logging.getLogger(__name__)

BARCODE_ERROR = "Nem sikerült a vonalkódot beolvasni."
ITEM_NOT_FOUND_ERROR = "Nem található ilyen cikkszámú termék a listán."
INVALID_QUANTITY_ERROR = "Érvénytelen mennyiség vagy hiányzó termék."


def _planned(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def return_rows(items: List[Dict[str, Any]], week_number: int) -> List[Dict[str, Any]]:
    """A segédtáblázat sorai szekció szerint besorolva, a lista sorrendjében."""
    rows = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            continue
        return_type, custom_name = classify_return_section(item.get("section_title"))
        rows.append({
            "week_number": week_number,
            "return_type": return_type,
            "document_number": item.get("bizonylat_szam") or "Ismeretlen",
            "document_custom_name": custom_name,
            "barcode": str(item["cikkszam"]) if item.get("cikkszam") is not None else None,
            "product_name": item.get("megnevezes"),
            "planned_quantity": _planned(item.get("tervkeszlet")),
            "quantity": None,
            "manual": False,
            "order": index + 1,
        })
    return rows


class ReturnService:
    def __init__(self, db: Session, ocr: Optional[OcrService] = None):
        self.items = EntityGateway(db, ReturnItem)
        self.ocr = ocr

    async def import_central_list(self, week_number: int, files: List[IncomingFile]) -> List[ReturnItem]:
        results = await self.ocr.extract_from_files(files, RETURN_LIST_SCHEMA, bucket="returns")
        all_items = [item for r in results for item in (r["output"].get("items") or [])]
        rows = return_rows(all_items, week_number)
        if not rows:
            raise ExtractionError()
        created = self.items.bulk_create(rows)
        logger.info(f"✅ Visszáru lista: {len(created)} tétel a(z) {week_number}. hétre")
        return created

    def week_view(self, week_number: int, search: Optional[str] = None) -> Dict[str, List[ReturnItem]]:
        """A hét tételei bizonylatszám szerint csoportosítva, csoporton belül sorrend szerint."""
        items = self.items.filter({"week_number": week_number}, order="created_at,id")
        if search:
            needle = search.lower()
            items = [
                i for i in items
                if any(needle in (value or "").lower() for value in (
                    i.product_name, i.barcode, i.document_number, i.document_custom_name
                ))
            ]
        grouped: Dict[str, List[ReturnItem]] = OrderedDict()
        for item in items:
            grouped.setdefault(item.document_number, []).append(item)
        for key in grouped:
            grouped[key].sort(key=lambda i: i.order or 0)
        return grouped

    async def scan_barcode(self, file: IncomingFile) -> str:
        results = await self.ocr.extract_from_files([file], BARCODE_SCHEMA, bucket="barcodes")
        barcode = results[0]["output"].get("barcode") if results else None
        if not barcode:
            raise ExtractionError(BARCODE_ERROR)
        return str(barcode).strip()

    def find_by_barcode(self, week_number: int, barcode: str) -> ReturnItem:
        found = self.items.filter({"week_number": week_number, "barcode": barcode}, order="order", limit=1)
        if not found:
            raise DomainError(ITEM_NOT_FOUND_ERROR)
        return found[0]

    def add_quantity(self, week_number: int, barcode: str, quantity: Optional[int]) -> ReturnItem:
        """Összeszedett darabszám hozzáadása a meglévő mennyiséghez.

        Raises:
            DomainError: Ha a mennyiség nem pozitív vagy a vonalkód nincs a heti listán.
        """
        if not quantity or quantity <= 0 or not barcode:
            raise DomainError(INVALID_QUANTITY_ERROR)
        item = self.find_by_barcode(week_number, barcode)
        return self.items.update(item.id, {"quantity": (item.quantity or 0) + quantity})

    def set_quantity(self, item_id: int, quantity: Optional[int]) -> ReturnItem:
        return self.items.update(item_id, {"quantity": quantity})

    def delete_item(self, item_id: int) -> None:
        self.items.delete(item_id)

    def rename_document(self, week_number: int, document_number: str, custom_name: str) -> List[ReturnItem]:
        items = self.items.filter({"week_number": week_number, "document_number": document_number})
        return [self.items.update(item.id, {"document_custom_name": custom_name}) for item in items]

    def delete_document(self, week_number: int, document_number: str) -> int:
        items = self.items.filter({"week_number": week_number, "document_number": document_number})
        return self.items.delete_many(items)
