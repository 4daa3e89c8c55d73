# Heti és azonnali közlemények: lista, létrehozás, OCR import, archiválás
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import ExtractionError
from app.models.notice import InstantInfo, WeeklyInfo
from app.services.entity_gateway import EntityGateway
from app.services.extraction_schemas import NOTICE_SCHEMA
from app.services.ocr_service import IncomingFile, OcrService

logger = logging.getLogger(__name__)


async def _extract_notice(ocr: OcrService, files: List[IncomingFile], bucket: str) -> dict:
    results = await ocr.extract_from_files(files, NOTICE_SCHEMA, bucket=bucket)
    for result in results:
        output = result["output"]
        if output.get("title") or output.get("content"):
            return {"title": output.get("title") or "Közlemény", "content": output.get("content") or ""}
    raise ExtractionError()


class WeeklyInfoService:
    def __init__(self, db: Session, ocr: Optional[OcrService] = None):
        self.notices = EntityGateway(db, WeeklyInfo)
        self.ocr = ocr

    def list_week(self, week_number: int) -> List[WeeklyInfo]:
        return self.notices.filter({"week_number": week_number, "is_archived": False}, order="-created_at,-id")

    def create(self, week_number: int, title: str, content: str = "") -> WeeklyInfo:
        return self.notices.create({"week_number": week_number, "title": title, "content": content})

    async def import_from_image(self, week_number: int, files: List[IncomingFile]) -> WeeklyInfo:
        data = await _extract_notice(self.ocr, files, bucket="weekly_info")
        return self.create(week_number, data["title"], data["content"])

    def archive(self, notice_id: int) -> WeeklyInfo:
        return self.notices.update(notice_id, {"is_archived": True})


class InstantInfoService:
    def __init__(self, db: Session, ocr: Optional[OcrService] = None):
        self.notices = EntityGateway(db, InstantInfo)
        self.ocr = ocr

    def list_day(self, day: date) -> List[InstantInfo]:
        return self.notices.filter({"date": day, "is_archived": False}, order="-created_at,-id")

    def marker_days(self) -> List[date]:
        return sorted({n.date for n in self.notices.list()})

    def create(self, day: date, title: str, content: str = "") -> InstantInfo:
        return self.notices.create({"date": day, "title": title, "content": content})

    async def import_from_image(self, day: date, files: List[IncomingFile]) -> InstantInfo:
        data = await _extract_notice(self.ocr, files, bucket="instant_info")
        return self.create(day, data["title"], data["content"])

    def archive(self, notice_id: int) -> InstantInfo:
        return self.notices.update(notice_id, {"is_archived": True})
