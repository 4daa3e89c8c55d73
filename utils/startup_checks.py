from pathlib import Path
import subprocess
import sys

from sqlalchemy.engine import make_url


def check_env_file() -> bool:
    """Check if .env file exists and provide instructions if missing."""
    env_path = Path(".env")
    if not env_path.exists():
        print("❌ A .env fájl nem található!")
        print("\n📝 Hozd létre a .env fájlt a következő változókkal:")
        print("GEMINI_API_KEY=your_gemini_api_key_here")
        print("DATABASE_URL=sqlite:///./data/store_ops.sqlite")
        print("\nVagy másold a mintát:")
        print("cp .env.example .env")
        return False
    return True


def sqlite_path(database_url: str):
    """Path of the SQLite database file, None for other backends or in-memory."""
    url = make_url(database_url)
    if not url.drivername.startswith("sqlite") or not url.database or url.database == ":memory:":
        return None
    return Path(url.database)


def check_database(database_url: str = "sqlite:///./data/store_ops.sqlite") -> bool:
    """Ensure database exists, run initialization if needed."""
    db_path = sqlite_path(database_url)
    if db_path is not None and not db_path.exists():
        print("📊 Az adatbázis nem található. Inicializálás...")
        try:
            subprocess.run([sys.executable, "migrations/init_db.py"], check=True)
            print("✅ Adatbázis inicializálva")
        except subprocess.CalledProcessError:
            print("❌ Hiba az adatbázis inicializálásakor")
            return False
    return True
