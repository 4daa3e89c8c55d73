# Alap SQLAlchemy modell regisztráció
from app.core.database import Base
from app.models.daily_info import DailyInfo, Attachment
from app.models.distribution import Distribution
from app.models.missing_product import MissingProduct
from app.models.return_item import ReturnItem
from app.models.schedule import Schedule
from app.models.employee import Employee
from app.models.notice import WeeklyInfo, InstantInfo

# Ez a fájl azért kell, hogy a Base.metadata.create_all() hívásakor
# minden modell regisztrálva legyen és a táblák létrejöjjenek.

__all__ = [
    "Base",
    "DailyInfo",
    "Attachment",
    "Distribution",
    "MissingProduct",
    "ReturnItem",
    "Schedule",
    "Employee",
    "WeeklyInfo",
    "InstantInfo",
]
