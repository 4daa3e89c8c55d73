# Projekt beállítások (API kulcsok, adatbázis, tárhely, időzóna)
# app/config.py

from pydantic_settings import BaseSettings
from pydantic import Field

class Settings(BaseSettings):
    # Kötelező változók (alapérték nélkül)
    GEMINI_API_KEY: str = Field(..., min_length=1)

    # Opcionális változók alapértékkel
    GEMINI_MODEL: str = Field(default="gemini-2.5-flash")
    GEMINI_TIMEOUT: int = Field(default=120, ge=1)  # OCR hívásnál 1-2 perc is lehet
    DATABASE_URL: str = Field(default="sqlite:///./data/store_ops.sqlite")
    UPLOAD_DIR: str = Field(default="data/uploads")
    PUBLIC_BASE_URL: str = Field(default="http://localhost:8000")
    TIMEZONE: str = Field(default="Europe/Budapest")
    LOG_LEVEL: str = Field(default="INFO")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # A .env fölösleges változóit figyelmen kívül hagyjuk

settings = Settings()
