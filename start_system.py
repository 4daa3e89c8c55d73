#!/usr/bin/env python3
"""
Bolti Napló indító szkript

Parancsok:
    init [--employees FILE]  adatbázis létrehozása, opcionálisan munkavállalói lista betöltése
    admin                    Streamlit admin felület (8501)
    start                    API szerver (8000)
    all [--employees FILE]   init, majd admin felület, majd API
"""

import os
import sys
import subprocess
import argparse
from utils.startup_checks import check_env_file, check_database

ROSTER_IMPORT_URL = "http://localhost:8000/api/employees/import"


def database_url():
    # A .env betöltése az app.config feladata; itt csak a környezeti felülírást nézzük
    return os.environ.get("DATABASE_URL", "sqlite:///./data/store_ops.sqlite")


def run_migration(employees_file=None):
    """Táblák létrehozása, munkavállalói lista (Név;szerepkör) betöltése ha meg van adva"""
    command = [sys.executable, "migrations/init_db.py"]
    if employees_file:
        print(f"🔄 Adatbázis inicializálása, munkavállalók: {employees_file}")
        command += ["--seed", employees_file]
    else:
        print("🔄 Adatbázis inicializálása...")
    try:
        subprocess.run(command, check=True)
        print("✅ Adatbázis inicializálva")
        return True
    except subprocess.CalledProcessError:
        print("❌ Hiba az adatbázis inicializálásakor")
        return False

def run_admin_panel():
    """Admin felület indítása"""
    print("🎛️ Admin felület indítása...")
    try:
        subprocess.run([
            "streamlit", "run", "admin_panel/dashboard.py",
            "--server.address", "0.0.0.0",
            "--server.port", "8501"
        ], check=True)
    except subprocess.CalledProcessError:
        print("❌ Hiba az admin felület indításakor")
    except KeyboardInterrupt:
        print("\n⏹️ Admin felület leállítva")

def run_main_app():
    """API szerver indítása"""
    print("🚀 API szerver indítása...")
    try:
        subprocess.run([sys.executable, "-m", "app.main"], check=True)
    except subprocess.CalledProcessError:
        print("❌ Hiba az alkalmazás indításakor")
    except KeyboardInterrupt:
        print("\n⏹️ Alkalmazás leállítva")

def print_roster_hint(seeded):
    if seeded:
        print("   A munkavállalói lista betöltve; a Munkavállalók fülön ellenőrizhető.")
    else:
        print("   Üres a munkavállalói lista. Lehetőségek:")
        print("   - admin felület, Munkavállalók fül: kézi felvétel")
        print(f"   - Dayforce képernyőfotó: POST {ROSTER_IMPORT_URL}")
        print("   - python start_system.py init --employees dolgozok.txt  (Név;szerepkör soronként)")

def main():
    parser = argparse.ArgumentParser(description="Bolti Napló - rendszer kezelés")
    parser.add_argument("command", choices=["init", "admin", "start", "all"],
                       help="Végrehajtandó parancs")
    parser.add_argument("--employees", help="Munkavállalói lista betöltése (init / all)")

    args = parser.parse_args()

    print("🛒 Bolti Napló - napi bolti műveletek")
    print("=" * 50)

    if args.command == "init":
        if not check_env_file():
            return 1
        if not run_migration(args.employees):
            return 1
        print("\n✅ A rendszer használatra kész!")
        print("\n📝 Következő lépések:")
        print_roster_hint(bool(args.employees))
        print("   python start_system.py start  # API indítása, majd az első Dayforce beosztás importja")
        return 0

    elif args.command == "admin":
        if not check_env_file() or not check_database(database_url()):
            return 1
        run_admin_panel()
        return 0

    elif args.command == "start":
        if not check_env_file() or not check_database(database_url()):
            return 1
        run_main_app()
        return 0

    elif args.command == "all":
        if not check_env_file():
            return 1

        print("\n1. Adatbázis és munkavállalói lista...")
        if not run_migration(args.employees):
            return 1
        print_roster_hint(bool(args.employees))

        print("\n2. Admin felület: munkavállalók és szerepkörök ellenőrzése")
        print("   Nyisd meg: http://<IP>:8501, a Munkavállalók fülön, majd nyomj Ctrl+C-t")

        try:
            run_admin_panel()
        except KeyboardInterrupt:
            pass

        print("\n3. API szerver indítása...")
        print("   A heti beosztás a /api/schedules/import végponton tölthető fel (Dayforce fotó)")
        run_main_app()
        return 0

if __name__ == "__main__":
    sys.exit(main())
