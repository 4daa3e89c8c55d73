# Kapcsolódás az adatbázishoz SQLAlchemy-n keresztül

from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

# A kapcsolati sztring a globális beállításokból jön
from app.config import settings

# SQLite esetén létrehozzuk az adatbázisfájl könyvtárát
db_url = settings.DATABASE_URL
connect_args = {}
if db_url.startswith("sqlite"):
    # A fájl útvonala az utolsó '///' után
    sqlite_path = db_url.split("///")[-1]
    if sqlite_path and sqlite_path != ":memory:":
        db_file = Path(sqlite_path)
        db_file.parent.mkdir(parents=True, exist_ok=True)
    connect_args = {"check_same_thread": False}

# Szinkron SQLAlchemy motor
engine = create_engine(db_url, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# Kérésenkénti adatbázis munkamenet (FastAPI dependency)
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
