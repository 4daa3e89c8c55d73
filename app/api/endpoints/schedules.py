# Beosztás: napi nézet, kézi műszak, szünetek, Dayforce import
from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session
from datetime import date
from typing import List
import logging
from app.api.deps import get_ocr_service, read_uploads, upload_failed
from app.core.database import get_db
from app.schemas.schedule import (
    BreakToggle,
    DeleteCount,
    ScheduleDayView,
    ScheduleResponse,
    ShiftCreate,
    ShiftUpdate,
)
from app.services.calendar_helper import iso_week
from app.services.ocr_service import OcrService
from app.services.schedule_service import ScheduleService

router = APIRouter(
    tags=["Schedules"],
    responses={404: {"description": "Not found"}},
)

logger = logging.getLogger(__name__)


@router.get("/day/{day}", response_model=ScheduleDayView)
def read_schedule_day(day: date, db: Session = Depends(get_db)):
    """Egy nap beosztása rendezve (státusz, kezdés, szerepkör) a járó szünetekkel."""
    return {"date": day, "week_number": iso_week(day), "rows": ScheduleService(db).day_view(day)}


@router.get("/", response_model=List[ScheduleResponse])
def read_all_schedules(db: Session = Depends(get_db)):
    """Összes beosztás a legújabb nappal kezdve (naptár jelölőkhöz)."""
    return ScheduleService(db).all_schedules()


@router.post("/", response_model=ScheduleResponse, status_code=201)
def create_shift(shift: ShiftCreate, db: Session = Depends(get_db)):
    """Kézi műszak felvétele.

    Vagy `employee_id` (törzsbeli dolgozó), vagy `employee_name` (kézi név,
    ideiglenes azonosítóval) kell. A kezdési időt a műszak szövegéből számolja.
    """
    created = ScheduleService(db).add_shift(
        shift.date,
        shift_text=shift.shift_text,
        status=shift.status,
        num_breaks_taken=shift.num_breaks_taken,
        employee_id=shift.employee_id,
        employee_name=shift.employee_name,
    )
    logger.info(f"✅ Műszak felvéve: {created.employee_name} {created.date} {created.shift_text}")
    return created


@router.patch("/{schedule_id}", response_model=ScheduleResponse)
def update_shift(schedule_id: int, patch: ShiftUpdate, db: Session = Depends(get_db)):
    return ScheduleService(db).update_shift(schedule_id, patch.model_dump(exclude_unset=True))


@router.post("/{schedule_id}/breaks", response_model=ScheduleResponse)
def toggle_break(schedule_id: int, toggle: BreakToggle, db: Session = Depends(get_db)):
    """Szünet jelölő: az aktuális számra kattintva eggyel csökken, különben arra áll."""
    return ScheduleService(db).toggle_break(schedule_id, toggle.n)


@router.delete("/{schedule_id}", status_code=204)
def delete_shift(schedule_id: int, db: Session = Depends(get_db)):
    ScheduleService(db).delete_shift(schedule_id)


@router.delete("/", response_model=DeleteCount)
def delete_all_shifts(db: Session = Depends(get_db)):
    return {"deleted": ScheduleService(db).delete_all()}


@router.post("/import", response_model=List[ScheduleResponse], status_code=201)
async def import_dayforce(
    week_day: date = Query(..., alias="date"),
    files: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
    ocr: OcrService = Depends(get_ocr_service),
):
    """Dayforce heti beosztás képernyőfotó importja.

    A kép kontraszt emelés és élesítés után kerül beolvasásra; a nevek a
    dolgozói törzzsel egyeztetődnek. A `date` a kiválasztott hét bármely napja.

    Raises:
        HTTPException: 422 "Nem sikerült beolvasni a beosztást" ha nincs adat.
    """
    incoming = await read_uploads(files)
    try:
        return await ScheduleService(db, ocr=ocr).import_dayforce(week_day, incoming[0])
    except OSError as e:
        raise upload_failed(e)
