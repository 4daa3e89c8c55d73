# Napi dokumentumok: helyőrzők, dokumentumlista és feladatlista OCR, oldal feltöltés
from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session
from datetime import date
from typing import Dict, List
import logging
from app.api.deps import get_deadline_service, get_ocr_service, read_uploads, upload_failed
from app.core.database import get_db
from app.schemas.daily_info import AttachmentCreate, AttachmentResponse, TaskListImportResult
from app.services.daily_info_service import DailyInfoService
from app.services.deadline_service import DeadlineService
from app.services.ocr_service import OcrService

router = APIRouter(
    tags=["Attachments"],
    responses={404: {"description": "Not found"}},
)

logger = logging.getLogger(__name__)


@router.get("/", response_model=List[AttachmentResponse])
def read_attachments(day: date = Query(..., alias="date"), db: Session = Depends(get_db)):
    return DailyInfoService(db).day_view(day)["attachments"]


@router.post("/", response_model=AttachmentResponse, status_code=201)
def create_attachment(attachment: AttachmentCreate, db: Session = Depends(get_db)):
    """Dokumentum felvétele címmel, opcionálisan már feltöltött fájl URL-lel."""
    return DailyInfoService(db).create_attachment(attachment.date, attachment.title, attachment.file_url)


@router.post("/task-list", response_model=AttachmentResponse, status_code=201)
def create_task_list_placeholder(day: date = Query(..., alias="date"), db: Session = Depends(get_db)):
    """napi_info_HH.NN feladatlista helyőrző létrehozása a naphoz."""
    return DailyInfoService(db).create_task_list_placeholder(day)


@router.post("/scan-list", response_model=List[AttachmentResponse], status_code=201)
async def scan_document_list(
    day: date = Query(..., alias="date"),
    files: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
    ocr: OcrService = Depends(get_ocr_service),
):
    """Dokumentumlista képernyőfotó beolvasása, hiányzó helyőrzők létrehozása.

    Raises:
        HTTPException: 422 ha semmi nem olvasható, 500 feltöltési hibánál.
    """
    incoming = await read_uploads(files)
    try:
        return await DailyInfoService(db, ocr=ocr).import_document_list(day, incoming)
    except OSError as e:
        raise upload_failed(e)


@router.post("/{attachment_id}/task-list", response_model=TaskListImportResult)
async def import_task_list(
    attachment_id: int,
    files: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
    ocr: OcrService = Depends(get_ocr_service),
    deadlines: DeadlineService = Depends(get_deadline_service),
):
    """A napi infó oldalainak feldolgozása feladatokká, határidő becsléssel.

    Minden információs blokk egy feladat lesz; a képet tartalmazó blokkok
    megkapják az oldal URL-jét. A dokumentum "uploaded" állapotba kerül.
    """
    incoming = await read_uploads(files)
    try:
        return await DailyInfoService(db, ocr=ocr, deadlines=deadlines).import_task_list(attachment_id, incoming)
    except OSError as e:
        raise upload_failed(e)


@router.post("/{attachment_id}/upload", response_model=AttachmentResponse)
async def upload_attachment_pages(
    attachment_id: int,
    files: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
    ocr: OcrService = Depends(get_ocr_service),
):
    incoming = await read_uploads(files)
    try:
        return await DailyInfoService(db, ocr=ocr).upload_attachment_pages(attachment_id, incoming)
    except OSError as e:
        raise upload_failed(e)


@router.delete("/{attachment_id}", response_model=Dict[str, int])
def delete_attachment(attachment_id: int, db: Session = Depends(get_db)):
    """Dokumentum törlése; feladatlista esetén a nap feladataival együtt."""
    removed = DailyInfoService(db).delete_attachment(attachment_id)
    return {"deleted_tasks": removed}
