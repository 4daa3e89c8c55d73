# Visszaküldendő (NF) tétel modellje
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from datetime import datetime
from app.core.database import Base

class ReturnItem(Base):
    """A központi segédtáblázat egy sora, bizonylatszám és hét szerint csoportosítva.

    A `planned_quantity` a tervkészlet, a `quantity` a ténylegesen összeszedett
    mennyiség (None, amíg semmit sem számoltak). A `document_custom_name`
    a bizonylat könnyen megjegyezhető neve, alapból a szekció neve.
    """
    __tablename__ = "return_items"

    id = Column(Integer, primary_key=True, index=True)
    week_number = Column(Integer, nullable=False, index=True)
    return_type = Column(String, default="egyeb")  # plu / beraktarozott / parkside / egyeb
    document_number = Column(String, default="Ismeretlen", index=True)
    document_custom_name = Column(String, nullable=True)
    barcode = Column(String, nullable=True, index=True)
    product_name = Column(String, nullable=True)
    planned_quantity = Column(Integer, nullable=True)
    quantity = Column(Integer, nullable=True)
    manual = Column(Boolean, default=False)
    order = Column(Integer, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
