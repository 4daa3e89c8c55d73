# Pydantic-séma a kezdőlap összesítőhöz
from pydantic import BaseModel
from datetime import date
from typing import List, Optional
from app.schemas.daily_info import DailyInfoResponse
from app.schemas.notice import WeeklyInfoResponse
from app.schemas.return_item import ReturnItemResponse

class DashboardSummary(BaseModel):
    date: date
    greeting: str
    week_number: int
    holiday: Optional[str] = None
    headline: str
    all_tasks_complete: bool
    today_tasks: List[DailyInfoResponse]
    overdue_tasks: List[DailyInfoResponse]
    open_missing_products: int
    checked_distributions: int
    total_distributions: int
    recent_return_items: List[ReturnItemResponse]
    recent_weekly_infos: List[WeeklyInfoResponse]
