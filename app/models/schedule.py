# Beosztás (egy dolgozó egy napja) modellje
from sqlalchemy import Column, Integer, String, Date, DateTime
from datetime import datetime
from app.core.database import Base

class Schedule(Base):
    """Egy munkavállaló beosztása egy adott napra.

    A rekordok a Dayforce képernyőfotó OCR importjából vagy kézi felvitelből
    jönnek. Az `employee_id` szöveg: a törzsben szereplő dolgozónál annak
    azonosítója, ismeretlen névnél `temp_<név>` vagy `temp_<időbélyeg>`.

    Attributes:
        week_number (int): ISO hét száma.
        date (date): A nap.
        employee_id (str): Dolgozó azonosító vagy ideiglenes azonosító.
        employee_name (str): Megjelenített név.
        employee_role (str): Szerepkör kulcs (pl. bolti_dolgozo).
        shift_text (str): Műszak szöveg (pl. "10:00-19:00") vagy státusz felirat.
        net_shift_duration (str): Nettó munkaidő "H:MM" alakban vagy None.
        start_time (str): Kezdési idő "HH:MM" vagy None.
        status (str): muszak / pihenonap / szabadsag / betegseg / munkaszuneti_nap.
        num_breaks_taken (int): Kivett szünetek száma.
    """
    __tablename__ = "schedules"

    id = Column(Integer, primary_key=True, index=True)
    week_number = Column(Integer, nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    employee_id = Column(String, nullable=False)
    employee_name = Column(String, nullable=False)
    employee_role = Column(String, default="bolti_dolgozo")
    shift_text = Column(String, default="")
    net_shift_duration = Column(String, nullable=True)
    start_time = Column(String, nullable=True)
    status = Column(String, default="muszak")
    num_breaks_taken = Column(Integer, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
