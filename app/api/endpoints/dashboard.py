# Kezdőlap összesítő
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging
from app.core.database import get_db
from app.schemas.dashboard import DashboardSummary
from app.services.summary_service import generate_dashboard_summary

router = APIRouter(
    tags=["Dashboard"],
    responses={404: {"description": "Not found"}},
)

logger = logging.getLogger(__name__)


@router.get("/", response_model=DashboardSummary)
def get_dashboard(db: Session = Depends(get_db)):
    """
    Kezdőlap adatai a bolt aktuális állapotáról.

    A köszöntés a helyi óra szerint változik, a főcím a nap ünnepét vagy a
    hét számát mutatja. A feladatlisták csak nyitott feladatokat tartalmaznak.

    Returns:
        DashboardSummary: mai és lejárt feladatok, hiánycikk / elosztás
            számlálók, legutóbbi visszáru tételek és heti infók.

    Raises:
        HTTPException: 500 ha az összesítő nem készíthető el.
    """
    try:
        return generate_dashboard_summary(db)
    except Exception as e:
        logger.error(f"❌ Hiba az összesítő készítésekor: {e}")
        raise HTTPException(status_code=500, detail="Hiba az összesítő készítésekor")
