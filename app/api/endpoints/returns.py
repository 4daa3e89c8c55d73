# NF visszaküldés: heti lista, vonalkód, összeszedett mennyiség, bizonylatok
from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session
from typing import Dict, List, Optional
import logging
from app.api.deps import get_ocr_service, read_uploads, upload_failed
from app.core.database import get_db
from app.core.exceptions import DomainError
from app.schemas.return_item import (
    BarcodeResult,
    DocumentRename,
    QuantityAdd,
    QuantityUpdate,
    ReturnItemResponse,
    ReturnWeekView,
)
from app.services.ocr_service import OcrService
from app.services.return_service import ReturnService

router = APIRouter(
    tags=["Returns"],
    responses={404: {"description": "Not found"}},
)

logger = logging.getLogger(__name__)


@router.post("/import", response_model=List[ReturnItemResponse], status_code=201)
async def import_central_list(
    week_number: int = Query(..., ge=1, le=53),
    files: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
    ocr: OcrService = Depends(get_ocr_service),
):
    """Központi segédtáblázat (tervkészlet lista) importja a hétre."""
    incoming = await read_uploads(files)
    try:
        return await ReturnService(db, ocr=ocr).import_central_list(week_number, incoming)
    except OSError as e:
        raise upload_failed(e)


@router.get("/week/{week_number}", response_model=ReturnWeekView)
def read_week(week_number: int, q: Optional[str] = None, db: Session = Depends(get_db)):
    """A hét tételei bizonylatszám szerint; `q` termék, vonalkód, bizonylat vagy név részletre szűr."""
    return {"week_number": week_number, "documents": ReturnService(db).week_view(week_number, search=q)}


@router.post("/barcode", response_model=BarcodeResult)
async def scan_barcode(
    week_number: int = Query(..., ge=1, le=53),
    files: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
    ocr: OcrService = Depends(get_ocr_service),
):
    """Vonalkód fotó beolvasása; ha a heti listán szerepel, a tételt is visszaadja."""
    incoming = await read_uploads(files)
    service = ReturnService(db, ocr=ocr)
    try:
        barcode = await service.scan_barcode(incoming[0])
    except OSError as e:
        raise upload_failed(e)
    try:
        item = service.find_by_barcode(week_number, barcode)
    except DomainError:
        item = None
    return {"barcode": barcode, "item": item}


@router.post("/quantity", response_model=ReturnItemResponse)
def add_quantity(data: QuantityAdd, db: Session = Depends(get_db)):
    """Összeszedett darabszám hozzáadása vonalkód alapján.

    Raises:
        HTTPException: 400 "Érvénytelen mennyiség vagy hiányzó termék." /
            "Nem található ilyen cikkszámú termék a listán."
    """
    item = ReturnService(db).add_quantity(data.week_number, data.barcode, data.quantity)
    logger.info(f"✅ +{data.quantity} db: {item.product_name} (összesen {item.quantity})")
    return item


@router.put("/{item_id}/quantity", response_model=ReturnItemResponse)
def set_quantity(item_id: int, update: QuantityUpdate, db: Session = Depends(get_db)):
    return ReturnService(db).set_quantity(item_id, update.quantity)


@router.delete("/{item_id}", status_code=204)
def delete_item(item_id: int, db: Session = Depends(get_db)):
    ReturnService(db).delete_item(item_id)


@router.put("/documents/{document_number}", response_model=List[ReturnItemResponse])
def rename_document(document_number: str, data: DocumentRename, db: Session = Depends(get_db)):
    return ReturnService(db).rename_document(data.week_number, document_number, data.document_custom_name)


@router.delete("/documents/{document_number}", response_model=Dict[str, int])
def delete_document(document_number: str, week_number: int = Query(...), db: Session = Depends(get_db)):
    return {"deleted": ReturnService(db).delete_document(week_number, document_number)}
