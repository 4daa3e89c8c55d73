# Munkavállaló (dolgozói törzs) modellje
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from datetime import datetime
from app.core.database import Base

class Employee(Base):
    """A bolt egy munkavállalója.

    A törzs a beosztás OCR importjánál a nevek egyeztetésére szolgál
    (pontos, majd fuzzy egyezés).

    Attributes:
        id (int): Egyedi azonosító.
        name (str): Teljes név, ahogy a Dayforce-ban szerepel (pl. "Fehér, Zsuzsanna").
        role (str): uzletvezeto / 1_uzletvezeto_helyettes / 2_uzletvezeto_helyettes / bolti_dolgozo.
        active (bool): Aktív dolgozó-e (inaktív nem választható kézi beosztásnál).
        created_at (datetime): Létrehozás ideje.

    Examples:
        >>> Employee(name="Kovács János", role="bolti_dolgozo", active=True)
    """
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    role = Column(String, default="bolti_dolgozo")
    active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Employee(id={self.id}, name='{self.name}', role='{self.role}', active={self.active})>"
