import sys
import os
import logging
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

# Gyökérkönyvtár a PYTHONPATH-ba közvetlen futtatáshoz
if __name__ == "__main__":
    sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import settings

# Naplózás beállítása
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
    ]
)
from app.core.database import engine
from app.core.exceptions import DomainError, EntityNotFound, ExtractionError
from app.models import base
from app.services.storage_service import PUBLIC_PREFIX
from app.api.endpoints import (
    admin,
    attachments,
    daily_info,
    dashboard,
    distributions,
    employees,
    files,
    missing_products,
    notices,
    returns,
    schedules,
)

app = FastAPI(title="Bolti Napló API")

# Útvonalak
app.include_router(dashboard.router, prefix="/api/dashboard")
app.include_router(daily_info.router, prefix="/api/daily-info")
app.include_router(attachments.router, prefix="/api/attachments")
app.include_router(schedules.router, prefix="/api/schedules")
app.include_router(distributions.router, prefix="/api/distributions")
app.include_router(missing_products.router, prefix="/api/missing-products")
app.include_router(returns.router, prefix="/api/returns")
app.include_router(employees.router, prefix="/api/employees")
app.include_router(notices.weekly_router, prefix="/api/weekly-info")
app.include_router(notices.instant_router, prefix="/api/instant-info")
app.include_router(files.files_router, prefix="/api/files")
app.include_router(files.images_router, prefix="/api/images")
app.include_router(files.ai_router, prefix="/api/ai")
app.include_router(admin.router)

# Feltöltött fájlok kiszolgálása
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount(PUBLIC_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR), name="files")


# --- Hibakezelők -------------------------------------------------------------

@app.exception_handler(EntityNotFound)
async def entity_not_found_handler(request: Request, exc: EntityNotFound):
    logging.warning(f"Nem található: {exc}")
    return JSONResponse(status_code=404, content={"detail": "A rekord nem található"})


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(ExtractionError)
async def extraction_error_handler(request: Request, exc: ExtractionError):
    logging.warning(f"❌ Sikertelen beolvasás: {exc}")
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# --- Alap végpont
@app.get("/")
async def root():
    return {"message": "Üdvözöl a Bolti Napló API"}


# --- Inicializálás -----------------------------------------------------------

def init_database():
    """Táblák létrehozása az első indításkor"""
    try:
        base.Base.metadata.create_all(bind=engine)
        logging.info("✅ Adatbázis inicializálva")
    except Exception as e:
        logging.error(f"❌ Hiba az adatbázis inicializálásakor: {e}")
        raise


@app.on_event("startup")
async def on_startup():
    """Automatikusan fut a FastAPI (uvicorn) indulásakor"""
    init_database()


# --- Futtatás szkriptként -----------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000, reload=False)
