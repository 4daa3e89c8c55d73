# Napi infó oldal: feladatok, dokumentum-helyőrzők, OCR importok, naptár jelölők
import asyncio
import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Set

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.core.exceptions import ExtractionError
from app.models.daily_info import Attachment, DailyInfo
from app.services.calendar_helper import holiday_name, is_weekend, iso_week, local_now
from app.services.deadline_service import DeadlineService
from app.services.entity_gateway import EntityGateway
from app.services.extraction_schemas import DOCUMENT_LIST_SCHEMA, TASK_LIST_SCHEMA
from app.services.ocr_service import IncomingFile, OcrService

logger = logging.getLogger(__name__)

TASK_LIST_PREFIX = "napi_info"
DEFAULT_TASK_TITLE = "Napi infó"


def compose_task_content(affected: Optional[str], body: Optional[str]) -> str:
    """A feladat szövege: opcionális "Érintett: ..." blokk, majd a tartalom."""
    prefix = f"Érintett: {affected}\n\n" if affected else ""
    return f"{prefix}{body or ''}"


def completion_percentage(infos: Iterable[DailyInfo]) -> int:
    infos = list(infos)
    if not infos:
        return 0
    done = sum(1 for info in infos if info.completed)
    return round(done / len(infos) * 100)


def sort_attachments(attachments: Iterable[Attachment]) -> List[Attachment]:
    """A napi_info kezdetű dokumentumok előre kerülnek, a többi sorrend marad."""
    return sorted(attachments, key=lambda a: 0 if (a.title or "").startswith(TASK_LIST_PREFIX) else 1)


def calendar_markers(infos: Iterable[DailyInfo], now: datetime) -> List[date]:
    """Azok a napok, amelyeket a naptárban jelölni kell.

    - Elvégzett feladat: a határidő napja, ennek hiányában a feladat napja.
    - Nyitott, határidős feladat: a határidő napja; ha az már elmúlt és nem
      ma van, akkor a mai nap.
    - Nyitott feladat határidő nélkül: nincs jelölés.
    """
    today = now.date()
    days: Set[date] = set()
    for info in infos:
        if info.completed:
            days.add(info.deadline.date() if info.deadline else info.date)
        elif info.deadline:
            deadline_day = info.deadline.date()
            if info.deadline < now and deadline_day != today:
                days.add(today)
            else:
                days.add(deadline_day)
    return sorted(days)


class DailyInfoService:
    """A napi infó oldal műveletei.

    Args:
        db (Session): Adatbázis munkamenet.
        ocr (OcrService, optional): Csak az OCR importokhoz kell.
        deadlines (DeadlineService, optional): Határidő becslés a feladatlista importnál.
    """

    def __init__(self, db: Session, ocr: Optional[OcrService] = None, deadlines: Optional[DeadlineService] = None):
        self.infos = EntityGateway(db, DailyInfo)
        self.attachments = EntityGateway(db, Attachment)
        self.ocr = ocr
        self.deadlines = deadlines

    # --- Lekérdezések --------------------------------------------------------

    def day_view(self, day: date) -> Dict[str, Any]:
        """Egy nap feladatai (létrehozás szerint), előrehaladás és dokumentumok."""
        infos = self.infos.filter({"date": day}, order="created_at,id")
        attachments = self.attachments.filter({"date": day}, order="created_at,id")
        return {
            "date": day,
            "week_number": iso_week(day),
            "is_weekend": is_weekend(day),
            "holiday": holiday_name(day),
            "todo": [i for i in infos if not i.completed],
            "done": [i for i in infos if i.completed],
            "completion_percentage": completion_percentage(infos),
            "attachments": sort_attachments(attachments),
            "has_task_list": any(a.is_task_list for a in attachments),
        }

    def search(self, term: str) -> List[DailyInfo]:
        """Kis-nagybetű független keresés a címben és a tartalomban, minden napon."""
        needle = (term or "").lower()
        if not needle:
            return []
        unique = {}
        for info in self.infos.list(order="-date,created_at"):
            if needle in (info.title or "").lower() or needle in (info.content or "").lower():
                unique.setdefault(info.id, info)
        return list(unique.values())

    def markers(self, now: Optional[datetime] = None) -> List[date]:
        return calendar_markers(self.infos.list(), now or local_now())

    # --- Feladatok -------------------------------------------------------------

    def create_task(self, data: Dict[str, Any]) -> DailyInfo:
        return self.infos.create(data)

    def update_task(self, info_id: int, patch: Dict[str, Any]) -> DailyInfo:
        return self.infos.update(info_id, patch)

    def toggle_completed(self, info_id: int) -> DailyInfo:
        info = self.infos.get(info_id)
        return self.infos.update(info_id, {"completed": not info.completed})

    def delete_task(self, info_id: int) -> None:
        self.infos.delete(info_id)

    # --- Dokumentumok -----------------------------------------------------------

    def create_task_list_placeholder(self, day: date) -> Attachment:
        """napi_info_HH.NN nevű, még feltöltetlen feladatlista helyőrző."""
        return self.attachments.create({
            "date": day,
            "title": f"{TASK_LIST_PREFIX}_{day.strftime('%m.%d')}",
            "status": "pending",
            "is_task_list": True,
        })

    def create_attachment(self, day: date, title: str, file_url: Optional[str] = None) -> Attachment:
        return self.attachments.create({
            "date": day,
            "title": title,
            "status": "uploaded" if file_url else "pending",
            "is_task_list": TASK_LIST_PREFIX in title.lower(),
            "file_url": file_url,
            "file_urls": [file_url] if file_url else [],
        })

    async def import_document_list(self, day: date, files: List[IncomingFile]) -> List[Attachment]:
        """A dokumentumlista képéből helyőrzőket hoz létre a még nem létező nevekre."""
        results = await self.ocr.extract_from_files(files, DOCUMENT_LIST_SCHEMA)
        if not results:
            raise ExtractionError()

        names = [name for r in results for name in (r["output"].get("documents") or []) if name]
        existing = {a.title for a in self.attachments.filter({"date": day})}
        placeholders = []
        for name in names:
            if name in existing:
                continue
            existing.add(name)
            placeholders.append({
                "date": day,
                "title": name,
                "status": "pending",
                "is_task_list": TASK_LIST_PREFIX in name.lower(),
            })
        return self.attachments.bulk_create(placeholders)

    async def import_task_list(self, attachment_id: int, files: List[IncomingFile]) -> Dict[str, Any]:
        """A feladatlista oldalaiból napi feladatokat készít határidő becsléssel.

        Returns:
            dict: {"attachment": Attachment, "tasks": [DailyInfo, ...]}
        """
        attachment = self.attachments.get(attachment_id)
        results = await self.ocr.extract_from_files(files, TASK_LIST_SCHEMA)
        if not results:
            raise ExtractionError()

        blocks = []
        for result in results:
            for item in result["output"].get("informaciok") or []:
                if not isinstance(item, dict):
                    continue
                blocks.append({
                    "date": attachment.date,
                    "title": item.get("tema") or DEFAULT_TASK_TITLE,
                    "content": compose_task_content(item.get("erintett"), item.get("tartalom")),
                    "image_urls": [result["image_url"]] if item.get("tartalmaz_kepet") else [],
                    "completed": False,
                })

        if self.deadlines is not None and blocks:
            deadlines = await asyncio.gather(*[
                self.deadlines.infer_deadline(b["title"], b["content"], attachment.date) for b in blocks
            ])
            for block, deadline in zip(blocks, deadlines):
                block["deadline"] = deadline

        tasks = self.infos.bulk_create(blocks)
        page_urls = [r["image_url"] for r in results]
        attachment = self.mark_uploaded(attachment_id, page_urls)
        logger.info(f"✅ Feladatlista feldolgozva ({attachment.date}): {len(tasks)} feladat")
        return {"attachment": attachment, "tasks": tasks}

    async def upload_attachment_pages(self, attachment_id: int, files: List[IncomingFile]) -> Attachment:
        """Sima dokumentum oldalainak feltöltése OCR nélkül."""
        self.attachments.get(attachment_id)
        urls = await run_in_threadpool(self.ocr.store_files, files, "attachments")
        return self.mark_uploaded(attachment_id, urls)

    def mark_uploaded(self, attachment_id: int, file_urls: List[str]) -> Attachment:
        return self.attachments.update(attachment_id, {"status": "uploaded", "file_urls": list(file_urls)})

    def delete_attachment(self, attachment_id: int) -> int:
        """Törli a dokumentumot; feladatlista esetén a nap összes feladatát is.

        Returns:
            int: A vele együtt törölt feladatok száma.
        """
        attachment = self.attachments.get(attachment_id)
        removed = 0
        if attachment.is_task_list:
            removed = self.infos.delete_many(self.infos.filter({"date": attachment.date}))
        self.attachments.delete(attachment_id)
        return removed

    def delete_day(self, day: date) -> Dict[str, int]:
        return {
            "tasks": self.infos.delete_many(self.infos.filter({"date": day})),
            "attachments": self.attachments.delete_many(self.attachments.filter({"date": day})),
        }
