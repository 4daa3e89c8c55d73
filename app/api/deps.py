# Közös FastAPI függőségek: külső szolgáltatások és feltöltött fájlok
import logging
from functools import lru_cache
from typing import List

from fastapi import Depends, HTTPException, UploadFile

from app.services.deadline_service import DeadlineService
from app.services.gemini_service import GeminiService
from app.services.ocr_service import IncomingFile, OcrService
from app.services.storage_service import StorageService

logger = logging.getLogger(__name__)

UPLOAD_ERROR = "Hiba történt a feltöltés során"


@lru_cache()
def get_gemini_service() -> GeminiService:
    return GeminiService()


@lru_cache()
def get_storage_service() -> StorageService:
    return StorageService()


def get_ocr_service(
    gemini: GeminiService = Depends(get_gemini_service),
    storage: StorageService = Depends(get_storage_service),
) -> OcrService:
    return OcrService(gemini, storage)


def get_deadline_service(gemini: GeminiService = Depends(get_gemini_service)) -> DeadlineService:
    return DeadlineService(gemini)


async def read_uploads(files: List[UploadFile]) -> List[IncomingFile]:
    """UploadFile lista -> IncomingFile lista; üres lista 400-as hiba."""
    if not files:
        raise HTTPException(status_code=400, detail="Nincs feltöltött fájl")
    incoming = []
    for upload in files:
        incoming.append(IncomingFile(
            filename=upload.filename or "file",
            content_type=upload.content_type or "application/octet-stream",
            content=await upload.read(),
        ))
    return incoming


def upload_failed(error: Exception) -> HTTPException:
    logger.error(f"❌ Feltöltési hiba: {error}")
    return HTTPException(status_code=500, detail=UPLOAD_ERROR)
