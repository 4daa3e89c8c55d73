# Heti és azonnali közlemények modelljei
from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime
from datetime import datetime
from app.core.database import Base

class WeeklyInfo(Base):
    __tablename__ = "weekly_info"

    id = Column(Integer, primary_key=True, index=True)
    week_number = Column(Integer, nullable=False, index=True)
    title = Column(String, nullable=False)
    content = Column(Text, default="")
    is_archived = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class InstantInfo(Base):
    __tablename__ = "instant_info"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False, index=True)
    title = Column(String, nullable=False)
    content = Column(Text, default="")
    is_archived = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
