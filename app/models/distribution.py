# Szállítólevél tétel (elosztási ellenőrzőlista) modellje
from sqlalchemy import Column, Integer, String, Text, Date, DateTime
from datetime import datetime
from app.core.database import Base

class Distribution(Base):
    __tablename__ = "distributions"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False, index=True)
    delivery_note_number = Column(String, default="N/A")  # szállítólevél szám
    main_category = Column(String, nullable=True)
    area = Column(String, nullable=True)  # "Terület" azonosító
    product_name = Column(String, default="Ismeretlen termék")
    article_number = Column(String, default="N/A")  # cikkszám
    quantity = Column(Integer, default=0)  # kiszállított (várt) mennyiség
    unit = Column(String, default="karton")  # karton / db
    received_quantity = Column(Integer, nullable=True)  # None amíg nincs ellenőrizve
    status = Column(String, default="pending")  # pending / ok / discrepancy
    note = Column(Text, default="")
    image_url = Column(String, nullable=True)
    order = Column(Integer, default=0)  # sorszám a dokumentumon
    created_at = Column(DateTime, default=datetime.utcnow)
