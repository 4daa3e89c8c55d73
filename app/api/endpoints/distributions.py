# Elosztás: szállítólevél import, napi nézet, beérkezett mennyiségek
from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session
from datetime import date
from typing import Dict, List, Optional
import logging
from app.api.deps import get_ocr_service, read_uploads, upload_failed
from app.core.database import get_db
from app.schemas.distribution import DistributionDayView, DistributionResponse, NoteUpdate, ReceivedUpdate
from app.services.distribution_service import DistributionService
from app.services.ocr_service import OcrService

router = APIRouter(
    tags=["Distributions"],
    responses={404: {"description": "Not found"}},
)

logger = logging.getLogger(__name__)


@router.post("/import", response_model=List[DistributionResponse], status_code=201)
async def import_delivery_notes(
    files: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
    ocr: OcrService = Depends(get_ocr_service),
):
    """Szállítólevél fotók beolvasása a mai napra, ellenőrizetlen állapotban."""
    incoming = await read_uploads(files)
    try:
        return await DistributionService(db, ocr=ocr).import_delivery_notes(incoming)
    except OSError as e:
        raise upload_failed(e)


@router.get("/day/{day}", response_model=DistributionDayView)
def read_distribution_day(day: date, q: Optional[str] = None, db: Session = Depends(get_db)):
    """A nap tételei fő kategória szerint; `q` cikkszám részletre szűr."""
    groups = DistributionService(db).day_view(day, search=q)
    return {"date": day, "groups": groups, "total": sum(len(items) for items in groups.values())}


@router.put("/{distribution_id}/received", response_model=DistributionResponse)
def set_received(distribution_id: int, update: ReceivedUpdate, db: Session = Depends(get_db)):
    return DistributionService(db).set_received(distribution_id, update.received_quantity)


@router.post("/{distribution_id}/correct", response_model=DistributionResponse)
def mark_correct(distribution_id: int, db: Session = Depends(get_db)):
    """Gyors "rendben": a beérkezett mennyiség a várt mennyiség lesz."""
    return DistributionService(db).mark_correct(distribution_id)


@router.post("/{distribution_id}/reset", response_model=DistributionResponse)
def reset_distribution(distribution_id: int, db: Session = Depends(get_db)):
    return DistributionService(db).reset(distribution_id)


@router.put("/{distribution_id}/note", response_model=DistributionResponse)
def update_note(distribution_id: int, update: NoteUpdate, db: Session = Depends(get_db)):
    return DistributionService(db).update_note(distribution_id, update.note)


@router.delete("/group", response_model=Dict[str, int])
def delete_delivery_note(
    delivery_note_number: str,
    day: date = Query(..., alias="date"),
    area: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Egy szállítólevél (terület + szám + nap) összes tételének törlése."""
    deleted = DistributionService(db).delete_group(area, delivery_note_number, day)
    logger.info(f"Szállítólevél törölve: {delivery_note_number} ({area}, {day}) - {deleted} tétel")
    return {"deleted": deleted}
