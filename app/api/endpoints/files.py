# Általános fájl feltöltés, kép előfeldolgozás, szabad LLM kérdés
from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile
from fastapi.concurrency import run_in_threadpool
import logging
from app.api.deps import get_gemini_service, get_storage_service, upload_failed
from app.services.gemini_service import GeminiService
from app.services.image_preprocessor import preprocess_image
from app.services.storage_service import StorageService

files_router = APIRouter(tags=["Files"])

images_router = APIRouter(tags=["Images"])

ai_router = APIRouter(tags=["AI"])

logger = logging.getLogger(__name__)


@files_router.post("/upload")
async def upload_file(
    file: UploadFile = File(...),
    bucket: str = Query("uploads", pattern=r"^[A-Za-z0-9_-]+$"),
    storage: StorageService = Depends(get_storage_service),
):
    """Fájl mentése a tárolóba, a válasz a nyilvános URL."""
    content = await file.read()
    try:
        file_url = await run_in_threadpool(storage.upload, file.filename or "file", content, bucket=bucket)
    except OSError as e:
        raise upload_failed(e)
    logger.info(f"✅ Fájl feltöltve: {file_url}")
    return {"file_url": file_url}


@images_router.post("/preprocess")
async def preprocess(file: UploadFile = File(...)):
    """Kontraszt emelés és élesítés; a válasz JPEG kép."""
    content = await file.read()
    return Response(content=await run_in_threadpool(preprocess_image, content), media_type="image/jpeg")


@ai_router.get("/ask")
async def ask(prompt: str = Query(..., min_length=1), gemini: GeminiService = Depends(get_gemini_service)):
    answer = await gemini.invoke_llm(prompt)
    if answer is None:
        raise HTTPException(status_code=502, detail="A nyelvi modell nem válaszolt")
    return {"answer": answer}
