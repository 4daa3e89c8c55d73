# Hiánycikk modellje
from sqlalchemy import Column, Integer, String, Text, Date, DateTime
from datetime import datetime
from app.core.database import Base

class MissingProduct(Base):
    """Ártábla alapján rögzített hiánycikk.

    Attributes:
        article_number (str): Cikkszám az ártábla bal alsó sarkából.
        category (str): troso / mopro / tiko / bakeoff.
        status (str): open / in_stock / wrong_inventory / arriving_soon / resolved.
        resolved_date (date): Az első `resolved` állapotba lépés napja.
    """
    __tablename__ = "missing_products"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False, index=True)
    article_number = Column(String, nullable=False)
    product_name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)
    category = Column(String, default="troso")
    status = Column(String, default="open")
    notes = Column(Text, nullable=True)
    resolved_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
