# Kezdőlap összesítő a bolti adatokból
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.models.daily_info import DailyInfo
from app.models.distribution import Distribution
from app.models.missing_product import MissingProduct
from app.models.notice import WeeklyInfo
from app.models.return_item import ReturnItem
from app.services.calendar_helper import holiday_name, iso_week, local_now
from app.services.entity_gateway import EntityGateway


def greeting_for(now: datetime) -> str:
    if now.hour < 12:
        return "Jó reggelt"
    if now.hour < 18:
        return "Szép napot"
    return "Jó estét"


def generate_dashboard_summary(db: Session, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Kezdőlap összesítő a bolt aktuális állapotáról.

    Kiszámolja:
    1. A mai nyitott feladatokat (mai nap vagy mai határidő)
    2. A lejárt nyitott feladatokat (elmúlt határidő, nem ma)
    3. A nyitott hiánycikkeket a legutóbbi 20 közül
    4. Az ellenőrzött / összes elosztási tételt a legutóbbi 10 közül
    5. A legutóbbi 10 visszáru tételt és 5 heti infót

    Args:
        db (Session): Adatbázis munkamenet.
        now (datetime, optional): Helyi idő; alapból az aktuális idő a bolt időzónájában.

    Returns:
        dict: Összesítő a kezdőlaphoz, köszöntéssel és főcímmel.

    Examples:
        >>> summary = generate_dashboard_summary(db, datetime(2025, 10, 23, 9, 0))
        >>> summary["greeting"], summary["holiday"]
        ('Jó reggelt', 'Nemzeti ünnep')
    """
    now = now or local_now()
    today = now.date()

    infos = EntityGateway(db, DailyInfo).list(order="-date")
    distributions = EntityGateway(db, Distribution).list(order="-date", limit=10)
    return_items = EntityGateway(db, ReturnItem).list(order="-created_at", limit=10)
    missing_products = EntityGateway(db, MissingProduct).list(order="-created_at", limit=20)
    weekly_infos = EntityGateway(db, WeeklyInfo).list(order="-created_at", limit=5)

    today_tasks = [
        task for task in infos
        if not task.completed and (task.date == today or (task.deadline and task.deadline.date() == today))
    ]
    overdue_tasks = [
        task for task in infos
        if not task.completed and task.deadline and task.deadline < now and task.deadline.date() != today
    ]

    if not today_tasks and not overdue_tasks:
        headline = "Minden rendben! 🎉"
    elif overdue_tasks:
        headline = f"{len(overdue_tasks)} Lejárt Feladat! ⚠️"
    else:
        headline = f"{len(today_tasks)} Feladat Vár Ma"

    return {
        "date": today,
        "greeting": greeting_for(now),
        "week_number": iso_week(today),
        "holiday": holiday_name(today),
        "headline": headline,
        "all_tasks_complete": not today_tasks and not overdue_tasks,
        "today_tasks": today_tasks,
        "overdue_tasks": overdue_tasks,
        "open_missing_products": sum(1 for p in missing_products if p.status == "open"),
        "checked_distributions": sum(1 for d in distributions if d.status != "pending"),
        "total_distributions": len(distributions),
        "recent_return_items": return_items,
        "recent_weekly_infos": weekly_infos,
    }
