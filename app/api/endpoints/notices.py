# Heti infó és azonnali infó
from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session
from datetime import date
from typing import List
import logging
from app.api.deps import get_ocr_service, read_uploads, upload_failed
from app.core.database import get_db
from app.schemas.notice import InstantInfoCreate, InstantInfoResponse, WeeklyInfoCreate, WeeklyInfoResponse
from app.services.notice_service import InstantInfoService, WeeklyInfoService
from app.services.ocr_service import OcrService

weekly_router = APIRouter(
    tags=["Weekly info"],
    responses={404: {"description": "Not found"}},
)

instant_router = APIRouter(
    tags=["Instant info"],
    responses={404: {"description": "Not found"}},
)

logger = logging.getLogger(__name__)


# --- Heti infó -----------------------------------------------------------------

@weekly_router.get("/week/{week_number}", response_model=List[WeeklyInfoResponse])
def read_weekly(week_number: int, db: Session = Depends(get_db)):
    """A hét nem archivált közleményei, a legújabb elöl."""
    return WeeklyInfoService(db).list_week(week_number)


@weekly_router.post("/", response_model=WeeklyInfoResponse, status_code=201)
def create_weekly(info: WeeklyInfoCreate, db: Session = Depends(get_db)):
    return WeeklyInfoService(db).create(info.week_number, info.title, info.content)


@weekly_router.post("/import", response_model=WeeklyInfoResponse, status_code=201)
async def import_weekly(
    week_number: int = Query(..., ge=1, le=53),
    files: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
    ocr: OcrService = Depends(get_ocr_service),
):
    incoming = await read_uploads(files)
    try:
        return await WeeklyInfoService(db, ocr=ocr).import_from_image(week_number, incoming)
    except OSError as e:
        raise upload_failed(e)


@weekly_router.post("/{notice_id}/archive", response_model=WeeklyInfoResponse)
def archive_weekly(notice_id: int, db: Session = Depends(get_db)):
    return WeeklyInfoService(db).archive(notice_id)


# --- Azonnali infó ---------------------------------------------------------------

@instant_router.get("/day/{day}", response_model=List[InstantInfoResponse])
def read_instant(day: date, db: Session = Depends(get_db)):
    return InstantInfoService(db).list_day(day)


@instant_router.get("/markers", response_model=List[date])
def read_instant_markers(db: Session = Depends(get_db)):
    """Minden nap, amelyhez tartozik azonnali infó (archiváltak is)."""
    return InstantInfoService(db).marker_days()


@instant_router.post("/", response_model=InstantInfoResponse, status_code=201)
def create_instant(info: InstantInfoCreate, db: Session = Depends(get_db)):
    return InstantInfoService(db).create(info.date, info.title, info.content)


@instant_router.post("/import", response_model=InstantInfoResponse, status_code=201)
async def import_instant(
    day: date = Query(..., alias="date"),
    files: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
    ocr: OcrService = Depends(get_ocr_service),
):
    incoming = await read_uploads(files)
    try:
        return await InstantInfoService(db, ocr=ocr).import_from_image(day, incoming)
    except OSError as e:
        raise upload_failed(e)


@instant_router.post("/{notice_id}/archive", response_model=InstantInfoResponse)
def archive_instant(notice_id: int, db: Session = Depends(get_db)):
    return InstantInfoService(db).archive(notice_id)
