# Napi infó: feladatok, keresés, naptár jelölők, szöveg tagolás
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import Dict, List
import logging
from app.api.deps import get_gemini_service
from app.core.database import get_db
from app.schemas.daily_info import (
    ContentRequest,
    DailyInfoCreate,
    DailyInfoResponse,
    DailyInfoUpdate,
    DayView,
    StructuredContent,
)
from app.services.content_analyzer import ContentAnalyzer, split_affected
from app.services.daily_info_service import DailyInfoService
from app.services.gemini_service import GeminiService

router = APIRouter(
    tags=["Daily info"],
    responses={404: {"description": "Not found"}},
)

logger = logging.getLogger(__name__)


@router.get("/day/{day}", response_model=DayView)
def read_day(day: date, db: Session = Depends(get_db)):
    """Egy nap feladatai és dokumentumai.

    Args:
        day (date): A nap ISO formátumban (pl. 2025-10-20).

    Returns:
        DayView: Nyitott és kész feladatok, előrehaladás százalékban, hét száma,
            hétvége / ünnep jelzés, dokumentumok (napi_info elöl).

    Examples:
        >>> # GET /api/daily-info/day/2025-10-23
        >>> # {"week_number": 43, "holiday": "Nemzeti ünnep", ...}
    """
    return DailyInfoService(db).day_view(day)


@router.get("/search", response_model=List[DailyInfoResponse])
def search_daily_info(q: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    """Keresés az összes nap feladatainak címében és szövegében."""
    return DailyInfoService(db).search(q)


@router.get("/markers", response_model=List[date])
def read_markers(db: Session = Depends(get_db)):
    return DailyInfoService(db).markers()


@router.post("/", response_model=DailyInfoResponse, status_code=201)
def create_daily_info(info: DailyInfoCreate, db: Session = Depends(get_db)):
    created = DailyInfoService(db).create_task(info.model_dump())
    logger.info(f"✅ Napi infó létrehozva: #{created.id} {created.title}")
    return created


@router.get("/{info_id}", response_model=DailyInfoResponse)
def read_daily_info(info_id: int, db: Session = Depends(get_db)):
    return DailyInfoService(db).infos.get(info_id)


@router.patch("/{info_id}", response_model=DailyInfoResponse)
def update_daily_info(info_id: int, patch: DailyInfoUpdate, db: Session = Depends(get_db)):
    return DailyInfoService(db).update_task(info_id, patch.model_dump(exclude_unset=True))


@router.post("/{info_id}/toggle", response_model=DailyInfoResponse)
def toggle_daily_info(info_id: int, db: Session = Depends(get_db)):
    """Elvégzett / nyitott állapot megfordítása."""
    return DailyInfoService(db).toggle_completed(info_id)


@router.delete("/{info_id}", status_code=204)
def delete_daily_info(info_id: int, db: Session = Depends(get_db)):
    DailyInfoService(db).delete_task(info_id)


@router.delete("/day/{day}", response_model=Dict[str, int])
def delete_day(day: date, db: Session = Depends(get_db)):
    """A nap összes feladatának és dokumentumának törlése."""
    counts = DailyInfoService(db).delete_day(day)
    logger.info(f"Nap törölve ({day}): {counts}")
    return counts


@router.post("/content/structure", response_model=StructuredContent)
async def structure_content(
    request: ContentRequest,
    gemini: GeminiService = Depends(get_gemini_service),
):
    """Feladatszöveg tagolása: érintett kör, bevezető, cikkszám táblázat, záró rész.

    Sikertelen elemzésnél a teljes szöveg a bevezetőbe kerül, tételek nélkül.
    """
    affected, rest = split_affected(request.content)
    structured = await ContentAnalyzer(gemini).analyze(rest)
    return {"affected": affected, **structured}
