import argparse
import logging
import sys
from pathlib import Path

# Gyökérkönyvtár a PYTHONPATH-ba (python migrations/init_db.py)
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from app.core.database import SessionLocal, engine
from app.models import base
from app.models.employee import Employee
from app.services.classifiers import normalize_role

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_tables():
    """Hiányzó táblák létrehozása (a meglévők érintetlenek maradnak)"""
    try:
        base.Base.metadata.create_all(bind=engine)
        logger.info("✅ Táblák létrehozva / ellenőrizve")
    except SQLAlchemyError as e:
        logger.error(f"❌ Adatbázis hiba: {e}")
        raise


def seed_employees(path: Path) -> int:
    """Munkavállalók betöltése szövegfájlból, soronként "Név;szerepkör".

    A már létező nevek (kis-nagybetű független) kimaradnak.
    """
    db = SessionLocal()
    try:
        existing = {name.lower() for (name,) in db.query(Employee.name).all()}
        added = 0
        for line in path.read_text(encoding="utf-8").splitlines():
            if not line.strip() or line.startswith("#"):
                continue
            name, _, role = line.partition(";")
            name = name.strip()
            if name.lower() in existing:
                continue
            db.add(Employee(name=name, role=normalize_role(role), active=True))
            existing.add(name.lower())
            added += 1
        db.commit()
        logger.info(f"✅ {added} munkavállaló betöltve ({path})")
        return added
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Hiba a munkavállalók betöltésekor: {e}")
        raise
    finally:
        db.close()


def print_table_structure():
    inspector = inspect(engine)
    for table in inspector.get_table_names():
        print(f"\n📋 {table}:")
        for col in inspector.get_columns(table):
            print(f"  {col['name']:<24} {str(col['type']):<15} {'NULL' if col['nullable'] else 'NOT NULL'}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Bolti Napló adatbázis inicializálás")
    parser.add_argument("--seed", type=Path, help="Munkavállalói lista (Név;szerepkör soronként)")
    parser.add_argument("--show", action="store_true", help="Táblaszerkezet kiírása")
    args = parser.parse_args()

    try:
        print("🔄 Bolti Napló adatbázis inicializálása...")
        create_tables()
        if args.seed:
            seed_employees(args.seed)
        if args.show:
            print_table_structure()
        print("\n✅ Inicializálás kész!")
    except Exception as e:
        logger.error(f"💥 Végzetes hiba: {e}")
        sys.exit(1)
