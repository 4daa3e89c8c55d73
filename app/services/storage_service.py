# Feltöltött fájlok tárolása, nyilvános URL visszaadása
import logging
import re
import time
import uuid
from pathlib import Path
from typing import Optional

from app.config import settings

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/files"


class StorageService:
    """Fájltároló "bucket" könyvtárakkal.

    A fájlok `<UPLOAD_DIR>/<bucket>/<epoch-ms>-<uuid>-<név>` alatt kerülnek mentésre,
    a nyilvános URL `<PUBLIC_BASE_URL>/files/<bucket>/<fájlnév>`. Az alkalmazás
    a `/files` útvonalon statikusan kiszolgálja a könyvtárat.

    Examples:
        >>> storage = StorageService()
        >>> url = storage.upload("arcimke.jpg", data)
        >>> storage.read_by_url(url) == data
        True
    """

    def __init__(self, root: Optional[str] = None, base_url: Optional[str] = None):
        self.root = Path(root or settings.UPLOAD_DIR)
        self.base_url = (base_url or settings.PUBLIC_BASE_URL).rstrip("/")

    @staticmethod
    def _safe_name(filename: str) -> str:
        name = Path(filename or "file").name
        return re.sub(r"[^\w.\-]", "_", name) or "file"

    def upload(self, filename: str, content: bytes, bucket: str = "uploads") -> str:
        """Elmenti a fájlt és visszaadja a nyilvános URL-t.

        Raises:
            OSError: Ha a fájl nem írható.
        """
        # Azonos nevű, egyszerre érkező fájlok (pl. image.jpg) sem írják felül egymást
        stored_name = f"{int(time.time() * 1000)}-{uuid.uuid4().hex}-{self._safe_name(filename)}"
        target_dir = self.root / bucket
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / stored_name).write_bytes(content)
        url = f"{self.base_url}{PUBLIC_PREFIX}/{bucket}/{stored_name}"
        logger.info(f"Fájl feltöltve: {url} ({len(content)} bájt)")
        return url

    def path_for_url(self, file_url: str) -> Path:
        marker = f"{PUBLIC_PREFIX}/"
        if marker not in file_url:
            raise ValueError(f"Nem helyi tárhely URL: {file_url}")
        relative = file_url.split(marker, 1)[1]
        path = (self.root / relative).resolve()
        if self.root.resolve() not in path.parents:
            raise ValueError(f"Érvénytelen fájl útvonal: {file_url}")
        return path

    def read_by_url(self, file_url: str) -> bytes:
        return self.path_for_url(file_url).read_bytes()
