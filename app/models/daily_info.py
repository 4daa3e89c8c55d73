# Napi infó (feladat) és a naphoz tartozó dokumentum-helyőrzők modellje
from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, JSON
from datetime import datetime
from app.core.database import Base

class DailyInfo(Base):
    """Egy napi feladat vagy közlemény a bolt napi infó listájáról.

    A rekordok többnyire a napi infó dokumentum OCR feldolgozásából jönnek létre,
    blokkonként egy feladat. A határidőt a szöveg alapján az LLM becsli meg.

    Attributes:
        id (int): Egyedi azonosító.
        date (date): A nap, amelyhez a feladat tartozik.
        title (str): A blokk témája.
        content (str): Teljes szöveg, opcionálisan "Érintett: ..." előtaggal.
        deadline (datetime): Becsült határidő helyi időben, vagy None.
        completed (bool): Elvégezve jelölés.
        image_urls (list): A blokkhoz tartozó oldalképek URL-jei.
        created_at (datetime): Létrehozás ideje (UTC), a napi sorrend alapja.

    Examples:
        >>> info = DailyInfo(
        ...     date=date(2025, 10, 20),
        ...     title="Leltár",
        ...     content="Érintett: Mindenki\\n\\nNapzárásig kész legyen",
        ... )
    """
    __tablename__ = "daily_info"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False, index=True)
    title = Column(String, nullable=False)
    content = Column(Text, default="")
    deadline = Column(DateTime, nullable=True)
    completed = Column(Boolean, default=False)
    image_urls = Column(JSON, default=list)
    created_at = Column(DateTime, default=datetime.utcnow)


class Attachment(Base):
    """Egy adott naphoz tartozó dokumentum helyőrzője.

    A napi dokumentumlista beolvasásakor minden dokumentumnév `pending`
    státuszú helyőrzőt kap; feltöltés után `uploaded` lesz. A `napi_info`
    nevű helyőrző (is_task_list) oldalaiból készülnek a napi feladatok.
    """
    __tablename__ = "attachments"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False, index=True)
    title = Column(String, nullable=False)
    status = Column(String, default="pending")  # pending / uploaded
    is_task_list = Column(Boolean, default=False)
    file_url = Column(String, nullable=True)
    file_urls = Column(JSON, default=list)
    created_at = Column(DateTime, default=datetime.utcnow)
