# Munkavállalói törzs CRUD és Dayforce névsor import
from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session
from typing import List
import logging
from app.api.deps import get_ocr_service, read_uploads, upload_failed
from app.core.database import get_db
from app.schemas.employee import EmployeeCreate, EmployeeImportResult, EmployeeList, EmployeeResponse, EmployeeUpdate
from app.services.employee_service import EmployeeService
from app.services.ocr_service import OcrService

router = APIRouter(
    tags=["Employees"],
    responses={404: {"description": "Not found"}},
)

logger = logging.getLogger(__name__)


@router.get("/", response_model=EmployeeList)
def read_employees(db: Session = Depends(get_db)):
    """Munkavállalók szerepkör, majd név szerint, aktív / inaktív bontásban."""
    return EmployeeService(db).list_grouped()


@router.post("/", response_model=EmployeeResponse, status_code=201)
def create_employee(employee: EmployeeCreate, db: Session = Depends(get_db)):
    created = EmployeeService(db).create(employee.name, employee.role)
    logger.info(f"✅ Munkavállaló létrehozva: {created}")
    return created


@router.get("/{employee_id}", response_model=EmployeeResponse)
def read_employee(employee_id: int, db: Session = Depends(get_db)):
    return EmployeeService(db).employees.get(employee_id)


@router.patch("/{employee_id}", response_model=EmployeeResponse)
def update_employee(employee_id: int, patch: EmployeeUpdate, db: Session = Depends(get_db)):
    return EmployeeService(db).update(employee_id, patch.model_dump(exclude_unset=True))


@router.post("/{employee_id}/toggle-active", response_model=EmployeeResponse)
def toggle_active(employee_id: int, db: Session = Depends(get_db)):
    return EmployeeService(db).toggle_active(employee_id)


@router.delete("/{employee_id}", status_code=204)
def delete_employee(employee_id: int, db: Session = Depends(get_db)):
    EmployeeService(db).delete(employee_id)


@router.post("/import", response_model=EmployeeImportResult)
async def import_roster(
    files: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
    ocr: OcrService = Depends(get_ocr_service),
):
    """Dayforce munkavállaló lista képernyőfotó importja.

    A már létező nevek (kis-nagybetű független) kimaradnak; ha nincs új név,
    a válasz üres listát és tájékoztató üzenetet tartalmaz.
    """
    incoming = await read_uploads(files)
    try:
        return await EmployeeService(db, ocr=ocr).import_roster(incoming[0])
    except OSError as e:
        raise upload_failed(e)
