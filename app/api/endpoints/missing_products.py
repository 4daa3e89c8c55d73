# Hiánycikkek: ártábla beolvasás, kézi felvitel, szűrés, állapotok
from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session
from datetime import date
from typing import Dict, List, Optional
import logging
from app.api.deps import get_ocr_service, read_uploads, upload_failed
from app.core.database import get_db
from app.schemas.missing_product import (
    CategoryUpdate,
    DayMarker,
    MissingProductCreate,
    MissingProductDayView,
    MissingProductResponse,
    NotesUpdate,
    StatusUpdate,
)
from app.services.missing_product_service import MissingProductService
from app.services.ocr_service import OcrService

router = APIRouter(
    tags=["Missing products"],
    responses={404: {"description": "Not found"}},
)

logger = logging.getLogger(__name__)


@router.post("/scan", response_model=List[MissingProductResponse], status_code=201)
async def scan_price_labels(
    day: date = Query(..., alias="date"),
    files: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
    ocr: OcrService = Depends(get_ocr_service),
):
    """Ártábla fotók beolvasása; minden sikeres olvasás nyitott hiánycikk.

    Raises:
        HTTPException: 422 ha egyetlen ártábla sem olvasható.
    """
    incoming = await read_uploads(files)
    try:
        created = await MissingProductService(db, ocr=ocr).scan_price_labels(day, incoming)
    except OSError as e:
        raise upload_failed(e)
    logger.info(f"✅ {len(created)}/{len(incoming)} ártábla beolvasva ({day})")
    return created


@router.post("/", response_model=MissingProductResponse, status_code=201)
def create_missing_product(product: MissingProductCreate, db: Session = Depends(get_db)):
    return MissingProductService(db).add_manual(
        product.date,
        product.article_number,
        product.product_name,
        description=product.description,
        category=product.category,
    )


@router.get("/day/{day}", response_model=MissingProductDayView)
def read_missing_day(
    day: date,
    q: Optional[str] = None,
    status: Optional[str] = None,
    category: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """A nap hiánycikkei; szűrés névre / cikkszámra, állapotra és kategóriára."""
    return MissingProductService(db).day_view(day, search=q, status=status, category=category)


@router.get("/markers", response_model=List[DayMarker])
def read_markers(db: Session = Depends(get_db)):
    return MissingProductService(db).all_days()


@router.put("/{product_id}/status", response_model=MissingProductResponse)
def change_status(product_id: int, update: StatusUpdate, db: Session = Depends(get_db)):
    """Állapotváltás; az első "resolved" állapotnál rögzül a megoldás napja."""
    return MissingProductService(db).change_status(product_id, update.status)


@router.put("/{product_id}/category", response_model=MissingProductResponse)
def change_category(product_id: int, update: CategoryUpdate, db: Session = Depends(get_db)):
    return MissingProductService(db).change_category(product_id, update.category)


@router.put("/{product_id}/notes", response_model=MissingProductResponse)
def update_notes(product_id: int, update: NotesUpdate, db: Session = Depends(get_db)):
    return MissingProductService(db).update_notes(product_id, update.notes)


@router.delete("/day/{day}", response_model=Dict[str, int])
def delete_missing_day(day: date, db: Session = Depends(get_db)):
    return {"deleted": MissingProductService(db).delete_day(day)}


@router.delete("/{product_id}", status_code=204)
def delete_missing_product(product_id: int, db: Session = Depends(get_db)):
    MissingProductService(db).delete(product_id)
