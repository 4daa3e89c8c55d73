# Feltöltött képek/PDF-ek tárolása és párhuzamos OCR feldolgozása
import asyncio
import logging
import mimetypes
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from fastapi.concurrency import run_in_threadpool

from app.services.gemini_service import GeminiService
from app.services.storage_service import StorageService

logger = logging.getLogger(__name__)


@dataclass
class IncomingFile:
    """Egy feltöltött fájl a HTTP rétegtől függetlenül."""
    filename: str
    content_type: str
    content: bytes


def is_supported(content_type: Optional[str]) -> bool:
    content_type = content_type or ""
    return content_type.startswith("image/") or content_type == "application/pdf"


class OcrService:
    """Fájlok feltöltése a tárhelyre és strukturált adat kinyerése belőlük.

    Több fájl esetén a kérések párhuzamosan futnak (`asyncio.gather`).
    A nem kép / nem PDF fájlokat és a sikertelen kinyeréseket kihagyja,
    a hívó csak a sikeres `{"output": ..., "image_url": ...}` eredményeket kapja.

    Args:
        gemini (GeminiService): LLM kliens.
        storage (StorageService): Fájltároló.
    """

    def __init__(self, gemini: GeminiService, storage: StorageService):
        self.gemini = gemini
        self.storage = storage

    def store_files(self, files: List[IncomingFile], bucket: str) -> List[str]:
        """Fájlok mentése a tárhelyre (blokkoló), a nyilvános URL-ek sorrendben."""
        return [self.storage.upload(f.filename, f.content, bucket=bucket) for f in files]

    async def _extract_one(self, file: IncomingFile, file_url: str, json_schema: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        result = await self.gemini.extract_data(file.content, file.content_type, json_schema)
        if result.get("status") == "success" and result.get("output"):
            return {"output": result["output"], "image_url": file_url}

        logger.warning(f"❌ OCR sikertelen: {file.filename}")
        return None

    async def extract_from_files(
        self,
        files: List[IncomingFile],
        json_schema: Dict[str, Any],
        bucket: str = "uploads",
    ) -> List[Dict[str, Any]]:
        """Feltölti és feldolgozza a fájlokat, a bemeneti sorrendet megtartva.

        A mentés szálkészletben fut, a kinyerések utána párhuzamosan.

        Raises:
            OSError: Ha a fájl nem menthető a tárhelyre.
        """
        supported = []
        for f in files:
            if is_supported(f.content_type):
                supported.append(f)
            else:
                logger.info(f"Nem támogatott fájltípus kihagyva: {f.filename} ({f.content_type})")

        file_urls = await run_in_threadpool(self.store_files, supported, bucket)
        results = await asyncio.gather(*[
            self._extract_one(f, url, json_schema) for f, url in zip(supported, file_urls)
        ])
        valid = [r for r in results if r is not None]
        logger.info(f"OCR: {len(valid)}/{len(files)} fájl sikeresen feldolgozva")
        return valid

    async def extract_from_uploaded_file(self, file_url: str, json_schema: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Már feltöltött fájl újrafeldolgozása az URL alapján; hiba esetén None."""
        try:
            content = self.storage.read_by_url(file_url)
        except (OSError, ValueError) as e:
            logger.error(f"❌ Fájl nem olvasható: {file_url}: {e}")
            return None
        mime_type = mimetypes.guess_type(file_url)[0] or "image/jpeg"
        result = await self.gemini.extract_data(content, mime_type, json_schema)
        if result.get("status") == "success" and result.get("output"):
            return {"output": result["output"], "image_url": file_url}
        return None
