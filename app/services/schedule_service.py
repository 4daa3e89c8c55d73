# Beosztás oldal: napi nézet, kézi műszak, szünet jelölés, Dayforce OCR import
import logging
import time
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.core.exceptions import DomainError, ExtractionError
from app.models.employee import Employee
from app.models.schedule import Schedule
from app.services.calendar_helper import WEEK_DAY_KEYS, iso_week, week_start
from app.services.classifiers import normalize_schedule_status
from app.services.entity_gateway import EntityGateway
from app.services.extraction_schemas import SCHEDULE_SCHEMA
from app.services.image_preprocessor import preprocess_image
from app.services.name_matcher import match_employee
from app.services.ocr_service import IncomingFile, OcrService
from app.services.shift_rules import (
    calculate_breaks_from_net_duration,
    classify_day_cell,
    extract_start_time,
    schedule_sort_key,
    toggle_break,
)

logger = logging.getLogger(__name__)

SCHEDULE_READ_ERROR = "⚠️ Nem sikerült beolvasni a beosztást. Próbáld újra!"
SCHEDULE_EMPTY_ERROR = "⚠️ Nem sikerült beolvasni a beosztást. Nincs feldolgozható adat. Próbáld újra!"
DEFAULT_ROLE = "bolti_dolgozo"


def build_week_rows(employees_data: List[Dict[str, Any]], roster: List[Employee], any_day: date) -> List[Dict[str, Any]]:
    """A kiolvasott heti táblázatból beosztás sorok.

    Minden nevet egyeztet a törzzsel (pontos, majd fuzzy egyezés); ismeretlen
    névnél az OCR név marad `temp_<név>` azonosítóval. Az üres és "-" cellák
    kimaradnak, a napok a kiválasztott hét hétfőjétől számítódnak.
    """
    monday = week_start(any_day)
    rows = []
    for emp_data in employees_data:
        if not isinstance(emp_data, dict) or not emp_data.get("name"):
            continue
        ocr_name = str(emp_data["name"]).strip()
        matched = match_employee(ocr_name, roster)
        employee_name = matched.name if matched else ocr_name
        employee_id = str(matched.id) if matched else f"temp_{ocr_name}"
        employee_role = matched.role if matched else DEFAULT_ROLE

        for index, day_key in enumerate(WEEK_DAY_KEYS):
            day_text = emp_data.get(day_key)
            if not day_text or str(day_text).strip() in ("", "-"):
                continue
            current = monday + timedelta(days=index)
            cell = classify_day_cell(str(day_text), emp_data.get(f"{day_key}_net"))
            rows.append({
                "week_number": iso_week(current),
                "date": current,
                "employee_id": employee_id,
                "employee_name": employee_name,
                "employee_role": employee_role,
                "num_breaks_taken": 0,
                **cell,
            })
    return rows


class ScheduleService:
    """Beosztások kezelése.

    Examples:
        >>> service = ScheduleService(db)
        >>> service.add_shift(date(2025, 10, 20), shift_text="06:00-14:30", employee_id=3)
    """

    def __init__(self, db: Session, ocr: Optional[OcrService] = None):
        self.schedules = EntityGateway(db, Schedule)
        self.employees = EntityGateway(db, Employee)
        self.ocr = ocr

    def day_view(self, day: date) -> List[Dict[str, Any]]:
        """A nap beosztásai rendezve, a járó szünetek számával."""
        rows = sorted(self.schedules.filter({"date": day}, order="id"), key=schedule_sort_key)
        return [
            {"schedule": row, "entitled_breaks": calculate_breaks_from_net_duration(row.net_shift_duration)}
            for row in rows
        ]

    def all_schedules(self) -> List[Schedule]:
        return self.schedules.list(order="-date")

    def add_shift(
        self,
        day: date,
        shift_text: str = "",
        status: str = "muszak",
        num_breaks_taken: int = 0,
        employee_id: Optional[int] = None,
        employee_name: Optional[str] = None,
    ) -> Schedule:
        """Kézi műszak felvétele törzsbeli dolgozónak vagy kézzel megadott névnek.

        Raises:
            DomainError: Ha se dolgozó, se név nincs megadva.
            EntityNotFound: Ha a dolgozó azonosító nem létezik.
        """
        if employee_id is not None:
            employee = self.employees.get(employee_id)
            name, emp_id, role = employee.name, str(employee.id), employee.role
        elif employee_name and employee_name.strip():
            name = employee_name.strip()
            emp_id = f"temp_{int(time.time() * 1000)}"
            role = DEFAULT_ROLE
        else:
            raise DomainError("Válassz munkavállalót vagy adj meg egy nevet!")

        return self.schedules.create({
            "week_number": iso_week(day),
            "date": day,
            "employee_id": emp_id,
            "employee_name": name,
            "employee_role": role,
            "shift_text": shift_text,
            "net_shift_duration": None,
            "start_time": extract_start_time(shift_text),
            "status": normalize_schedule_status(status),
            "num_breaks_taken": num_breaks_taken,
        })

    def update_shift(self, schedule_id: int, patch: Dict[str, Any]) -> Schedule:
        """Szöveg / státusz / szünetek módosítása; a kezdési idő újraszámolódik."""
        patch = dict(patch)
        if "shift_text" in patch:
            patch["start_time"] = extract_start_time(patch["shift_text"])
        if "status" in patch:
            patch["status"] = normalize_schedule_status(patch["status"])
        return self.schedules.update(schedule_id, patch)

    def toggle_break(self, schedule_id: int, n: int) -> Schedule:
        schedule = self.schedules.get(schedule_id)
        return self.schedules.update(schedule_id, {"num_breaks_taken": toggle_break(schedule.num_breaks_taken, n)})

    def delete_shift(self, schedule_id: int) -> None:
        self.schedules.delete(schedule_id)

    def delete_all(self) -> int:
        count = self.schedules.delete_many(self.schedules.list())
        logger.info(f"✅ {count} beosztás törölve")
        return count

    async def import_dayforce(self, week_day: date, file: IncomingFile) -> List[Schedule]:
        """Dayforce heti beosztás képernyőfotó importja a kiválasztott hétre.

        Raises:
            ExtractionError: Sikertelen beolvasás vagy nincs feldolgozható sor.
        """
        processed = file
        if file.content_type.startswith("image/"):
            processed = IncomingFile(file.filename, "image/jpeg", await run_in_threadpool(preprocess_image, file.content))
        results = await self.ocr.extract_from_files([processed], SCHEDULE_SCHEMA, bucket="schedules")
        if not results or not isinstance(results[0]["output"].get("employees"), list):
            raise ExtractionError(SCHEDULE_READ_ERROR)

        rows = build_week_rows(results[0]["output"]["employees"], self.employees.list(), week_day)
        if not rows:
            raise ExtractionError(SCHEDULE_EMPTY_ERROR)
        created = self.schedules.bulk_create(rows)
        logger.info(f"✅ Dayforce import: {len(created)} beosztás a(z) {iso_week(week_day)}. hétre")
        return created
