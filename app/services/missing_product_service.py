# Hiánycikkek: ártábla beolvasás, kézi felvitel, napi nézet szűrőkkel, állapotkezelés
import logging
from collections import Counter, OrderedDict
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import DomainError, ExtractionError
from app.models.missing_product import MissingProduct
from app.services.calendar_helper import local_today
from app.services.classifiers import CATEGORIES, normalize_category, normalize_missing_status
from app.services.entity_gateway import EntityGateway
from app.services.extraction_schemas import PRICE_LABEL_SCHEMA
from app.services.ocr_service import IncomingFile, OcrService

logger = logging.getLogger(__name__)

PRICE_LABEL_ERROR = "Nem sikerült egyetlen ártáblát sem beolvasni. Próbáld élesebb képekkel!"


def price_label_product(output: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Érvényes-e a kiolvasott ártábla: cikkszám és terméknév kötelező."""
    article_number = str(output.get("article_number") or "").strip()
    product_name = str(output.get("product_name") or "").strip()
    if not article_number or not product_name:
        return None
    return {
        "article_number": article_number,
        "product_name": product_name,
        "description": output.get("description") or None,
        "category": normalize_category(output.get("category")),
    }


class MissingProductService:
    def __init__(self, db: Session, ocr: Optional[OcrService] = None):
        self.products = EntityGateway(db, MissingProduct)
        self.ocr = ocr

    async def scan_price_labels(self, day: date, files: List[IncomingFile]) -> List[MissingProduct]:
        """Egy vagy több ártábla fotó; minden sikeres olvasás nyitott hiánycikk lesz.

        Raises:
            ExtractionError: Ha egyetlen ártábla sem olvasható.
        """
        results = await self.ocr.extract_from_files(files, PRICE_LABEL_SCHEMA, bucket="price_labels")
        rows = []
        for result in results:
            product = price_label_product(result["output"])
            if product is None:
                logger.warning(f"Ártábla hiányos adatokkal: {result['image_url']}")
                continue
            rows.append({**product, "date": day, "image_url": result["image_url"], "status": "open"})
        if not rows:
            raise ExtractionError(PRICE_LABEL_ERROR)
        return self.products.bulk_create(rows)

    def add_manual(
        self,
        day: date,
        article_number: str,
        product_name: str,
        description: Optional[str] = None,
        category: Optional[str] = None,
    ) -> MissingProduct:
        if not (article_number or "").strip() or not (product_name or "").strip():
            raise DomainError("A cikkszám és a terméknév megadása kötelező.")
        return self.products.create({
            "date": day,
            "article_number": article_number.strip(),
            "product_name": product_name.strip(),
            "description": description or None,
            "category": normalize_category(category),
            "status": "open",
        })

    def day_view(
        self,
        day: date,
        search: Optional[str] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Dict[str, Any]:
        """A nap hiánycikkei szűrve, darabszámokkal és kategória csoportokkal.

        A darabszámok a szűrés előtti napi listára vonatkoznak.
        """
        products = self.products.filter({"date": day}, order="-created_at,-id")
        filtered = products
        if search:
            needle = search.lower()
            filtered = [
                p for p in filtered
                if needle in (p.product_name or "").lower() or needle in (p.article_number or "").lower()
            ]
        if status and status != "all":
            filtered = [p for p in filtered if p.status == status]
        if category and category != "all":
            filtered = [p for p in filtered if p.category == category]

        groups: Dict[str, List[MissingProduct]] = OrderedDict((key, []) for key in CATEGORIES)
        for product in filtered:
            groups.setdefault(product.category, []).append(product)
        return {
            "date": day,
            "products": filtered,
            "status_counts": dict(Counter(p.status for p in products)),
            "category_counts": dict(Counter(p.category for p in products)),
            "groups": {key: items for key, items in groups.items() if items},
        }

    def all_days(self) -> List[Dict[str, Any]]:
        """Naptár jelölőkhöz: a nap és hogy megoldott-e a tétel."""
        return [
            {"date": p.date, "completed": p.status == "resolved"}
            for p in self.products.list(order="-created_at")
        ]

    def change_status(self, product_id: int, status: str, today: Optional[date] = None) -> MissingProduct:
        """Állapotváltás; az első "resolved" állapotnál rögzül a megoldás napja."""
        product = self.products.get(product_id)
        patch = {"status": normalize_missing_status(status)}
        if patch["status"] == "resolved" and not product.resolved_date:
            patch["resolved_date"] = today or local_today()
        return self.products.update(product_id, patch)

    def change_category(self, product_id: int, category: str) -> MissingProduct:
        return self.products.update(product_id, {"category": normalize_category(category)})

    def update_notes(self, product_id: int, notes: Optional[str]) -> MissingProduct:
        return self.products.update(product_id, {"notes": notes})

    def delete(self, product_id: int) -> None:
        self.products.delete(product_id)

    def delete_day(self, day: date) -> int:
        return self.products.delete_many(self.products.filter({"date": day}))
