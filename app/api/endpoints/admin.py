# Heti export: visszáru lista és beosztás CSV / PDF formátumban
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
import logging
from app.core.database import get_db
from app.services.export_service import (
    export_to_csv,
    export_to_pdf,
    load_return_items,
    load_schedules,
)

router = APIRouter(
    prefix="/admin",
    tags=["Admin"]
)

logger = logging.getLogger(__name__)

LOADERS = {
    "returns": (load_return_items, "NF visszaküldés"),
    "schedules": (load_schedules, "Beosztás"),
}


@router.get("/export/{dataset}/{week_number}.csv")
def export_week_csv(dataset: str, week_number: int, db: Session = Depends(get_db)):
    """Heti adatok exportja CSV-be (Excel-barát UTF-8 BOM-mal)"""
    loader, _ = _loader_for(dataset)
    df = loader(db, week_number)
    logger.info(f"CSV export: {dataset}, {week_number}. hét, {len(df)} sor")
    return Response(
        content=export_to_csv(df),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{dataset}_{week_number}.csv"'},
    )


@router.get("/export/{dataset}/{week_number}.pdf")
def export_week_pdf(dataset: str, week_number: int, db: Session = Depends(get_db)):
    """Heti adatok exportja PDF-be"""
    loader, title = _loader_for(dataset)
    df = loader(db, week_number)
    try:
        pdf = export_to_pdf(df, f"{title} - {week_number}. hét")
    except Exception as e:
        logger.error(f"❌ PDF export hiba: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{dataset}_{week_number}.pdf"'},
    )


def _loader_for(dataset: str):
    if dataset not in LOADERS:
        raise HTTPException(status_code=404, detail="Ismeretlen export")
    return LOADERS[dataset]
