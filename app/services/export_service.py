# Export CSV / PDF formátumba (heti visszáru lista, heti beosztás)
import io
from datetime import datetime
from typing import List

import pandas as pd
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from sqlalchemy.orm import Session

from app.models.return_item import ReturnItem
from app.models.schedule import Schedule
from app.services.classifiers import RETURN_TYPES
from app.services.entity_gateway import EntityGateway
from app.services.shift_rules import STATUS_LABELS, calculate_breaks_from_net_duration, schedule_sort_key

RETURN_COLUMNS = ["Bizonylat", "Megnevezés", "Típus", "Vonalkód", "Termék", "Tervkészlet", "Összeszedve"]
SCHEDULE_COLUMNS = ["Dátum", "Név", "Szerepkör", "Státusz", "Műszak", "Nettó idő", "Szünet"]


def load_return_items(db: Session, week_number: int) -> pd.DataFrame:
    items = EntityGateway(db, ReturnItem).filter({"week_number": week_number}, order="document_number,order,id")
    return pd.DataFrame([{
        "Bizonylat": i.document_number,
        "Megnevezés": i.document_custom_name or "",
        "Típus": RETURN_TYPES.get(i.return_type, i.return_type),
        "Vonalkód": i.barcode or "",
        "Termék": i.product_name or "",
        "Tervkészlet": i.planned_quantity,
        "Összeszedve": i.quantity,
    } for i in items], columns=RETURN_COLUMNS)


def load_schedules(db: Session, week_number: int) -> pd.DataFrame:
    rows = EntityGateway(db, Schedule).filter({"week_number": week_number}, order="date,id")
    rows = sorted(rows, key=lambda s: (s.date, schedule_sort_key(s)))
    return pd.DataFrame([{
        "Dátum": s.date.isoformat(),
        "Név": s.employee_name,
        "Szerepkör": s.employee_role,
        "Státusz": STATUS_LABELS.get(s.status, s.status),
        "Műszak": s.shift_text or "",
        "Nettó idő": s.net_shift_duration or "",
        "Szünet": f"{s.num_breaks_taken or 0}/{calculate_breaks_from_net_duration(s.net_shift_duration)}",
    } for s in rows], columns=SCHEDULE_COLUMNS)


def export_to_csv(df: pd.DataFrame) -> bytes:
    # utf-8-sig: az Excel így helyesen olvassa az ékezeteket
    return df.to_csv(index=False).encode("utf-8-sig")


def split_text(text, max_width, canvas_obj) -> List[str]:
    words = text.split()
    lines = []
    current_line = ""
    for word in words:
        test_line = current_line + " " + word if current_line else word
        if canvas_obj.stringWidth(test_line, "Helvetica", 10) < max_width:
            current_line = test_line
        else:
            if current_line:
                lines.append(current_line)
            current_line = word
    if current_line:
        lines.append(current_line)
    return lines


def export_to_pdf(df: pd.DataFrame, title: str) -> bytes:
    """Egyszerű soros PDF: fejléc, majd soronként "oszlop: érték" párok."""
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4
    margin = 50
    y = height - margin

    c.setFont("Helvetica-Bold", 14)
    c.drawString(margin, y, title)
    y -= 18
    c.setFont("Helvetica", 9)
    c.drawString(margin, y, f"Készült: {datetime.now().strftime('%Y.%m.%d %H:%M')}")
    y -= 25
    c.setFont("Helvetica", 10)

    if df.empty:
        c.drawString(margin, y, "Nincs adat.")

    for _, row in df.iterrows():
        row_str = " | ".join(f"{col}: {'' if pd.isna(row[col]) else row[col]}" for col in df.columns)
        for line in split_text(row_str, width - 2 * margin, c):
            if y < margin:
                c.showPage()
                y = height - margin
                c.setFont("Helvetica", 10)
            c.drawString(margin, y, line)
            y -= 15
        y -= 8

    c.save()
    return buffer.getvalue()
