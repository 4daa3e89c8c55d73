# Munkavállalói törzs: lista, CRUD, aktív jelzés, Dayforce névsor import
import logging
import unicodedata
from typing import Any, Dict, List, Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.core.exceptions import DomainError, ExtractionError
from app.models.employee import Employee
from app.services.classifiers import normalize_role, translate_role
from app.services.entity_gateway import EntityGateway
from app.services.extraction_schemas import EMPLOYEE_LIST_SCHEMA
from app.services.image_preprocessor import preprocess_image
from app.services.ocr_service import IncomingFile, OcrService
from app.services.shift_rules import ROLES, UNKNOWN_ORDER

logger = logging.getLogger(__name__)

EMPLOYEE_READ_ERROR = "⚠️ Nem sikerült beolvasni a munkavállalókat. Próbáld újra!"
ALL_EXIST_MESSAGE = "ℹ️ Minden munkavállaló már létezik az adatbázisban!"


def name_sort_key(name: str) -> str:
    """Ékezet- és kisbetű-független név kulcs (á -> a, ő -> o)."""
    decomposed = unicodedata.normalize("NFKD", name or "")
    return "".join(c for c in decomposed if not unicodedata.combining(c)).lower()


def employee_sort_key(employee: Employee):
    role_order = ROLES.get(employee.role, {}).get("order", UNKNOWN_ORDER)
    return role_order, name_sort_key(employee.name), employee.name or ""


class EmployeeService:
    def __init__(self, db: Session, ocr: Optional[OcrService] = None):
        self.employees = EntityGateway(db, Employee)
        self.ocr = ocr

    def list_grouped(self) -> Dict[str, List[Employee]]:
        """Szerepkör, majd név szerint rendezve, aktív és inaktív bontásban."""
        ordered = sorted(self.employees.list(), key=employee_sort_key)
        return {
            "active": [e for e in ordered if e.active],
            "inactive": [e for e in ordered if not e.active],
        }

    def create(self, name: str, role: Optional[str] = None) -> Employee:
        if not (name or "").strip():
            raise DomainError("A név megadása kötelező.")
        return self.employees.create({"name": name.strip(), "role": normalize_role(role), "active": True})

    def update(self, employee_id: int, patch: Dict[str, Any]) -> Employee:
        patch = dict(patch)
        if "role" in patch:
            patch["role"] = normalize_role(patch["role"])
        return self.employees.update(employee_id, patch)

    def toggle_active(self, employee_id: int) -> Employee:
        employee = self.employees.get(employee_id)
        return self.employees.update(employee_id, {"active": not employee.active})

    def delete(self, employee_id: int) -> None:
        self.employees.delete(employee_id)

    async def import_roster(self, file: IncomingFile) -> Dict[str, Any]:
        """Dayforce munkavállaló lista importja; a már létező nevek kimaradnak.

        Returns:
            dict: {"created": [Employee, ...], "message": str | None}
        """
        if file.content_type.startswith("image/"):
            file = IncomingFile(file.filename, "image/jpeg", await run_in_threadpool(preprocess_image, file.content))
        results = await self.ocr.extract_from_files([file], EMPLOYEE_LIST_SCHEMA, bucket="employees")
        if not results or not isinstance(results[0]["output"].get("employees"), list):
            raise ExtractionError(EMPLOYEE_READ_ERROR)

        existing = {(e.name or "").lower() for e in self.employees.list()}
        rows = []
        for emp in results[0]["output"]["employees"]:
            if not isinstance(emp, dict) or not emp.get("name"):
                continue
            name = str(emp["name"]).strip()
            if name.lower() in existing:
                continue
            existing.add(name.lower())
            rows.append({"name": name, "role": translate_role(emp.get("role")), "active": True})

        if not rows:
            logger.info("Névsor import: nincs új munkavállaló")
            return {"created": [], "message": ALL_EXIST_MESSAGE}
        created = self.employees.bulk_create(rows)
        return {"created": created, "message": f"✅ {len(created)} új munkavállaló hozzáadva"}
