# Státusz, kategória és szerepkör besorolás determinisztikus alapértékekkel
from typing import Optional, Tuple

CATEGORIES = {
    "troso": "Troso (szárazáru)",
    "mopro": "Mopro (hűtött)",
    "tiko": "Tiko (fagyasztott)",
    "bakeoff": "Bakeoff (pékáru)",
}

MISSING_STATUSES = {
    "open": "Nyitott",
    "in_stock": "Raktáron",
    "wrong_inventory": "Rossz készlet",
    "arriving_soon": "Beérkezés várható",
    "resolved": "Megoldva",
}

UNITS = ("karton", "db")

SCHEDULE_STATUSES = ("muszak", "pihenonap", "szabadsag", "betegseg", "munkaszuneti_nap")

ROLE_KEYS = ("uzletvezeto", "1_uzletvezeto_helyettes", "2_uzletvezeto_helyettes", "bolti_dolgozo")

RETURN_TYPES = {
    "plu": "PLU",
    "beraktarozott": "Beraktározott",
    "parkside": "Parkside",
    "egyeb": "Egyéb",
}


def _pick(value: Optional[str], allowed, default: str) -> str:
    key = (value or "").strip().lower()
    return key if key in allowed else default


def normalize_category(value: Optional[str]) -> str:
    """Hiánycikk kategória; ismeretlen érték esetén "troso"."""
    return _pick(value, CATEGORIES, "troso")


def normalize_missing_status(value: Optional[str]) -> str:
    return _pick(value, MISSING_STATUSES, "open")


def normalize_unit(value: Optional[str]) -> str:
    return _pick(value, UNITS, "karton")


def normalize_schedule_status(value: Optional[str]) -> str:
    return _pick(value, SCHEDULE_STATUSES, "muszak")


def normalize_role(value: Optional[str]) -> str:
    return _pick(value, ROLE_KEYS, "bolti_dolgozo")


def translate_role(hungarian_role: Optional[str]) -> str:
    """Dayforce magyar szerepkör felirat -> szerepkör kulcs.

    Examples:
        >>> translate_role("Üzletvezető")
        'uzletvezeto'
        >>> translate_role("2. Üzletvezető helyettes")
        '2_uzletvezeto_helyettes'
        >>> translate_role("Pénztáros")
        'bolti_dolgozo'
    """
    normalized = (hungarian_role or "").lower().strip()
    if "üzletvezető" in normalized and "helyettes" not in normalized:
        return "uzletvezeto"
    if "1." in normalized and "helyettes" in normalized:
        return "1_uzletvezeto_helyettes"
    if "2." in normalized and "helyettes" in normalized:
        return "2_uzletvezeto_helyettes"
    return "bolti_dolgozo"


def classify_return_section(section_title: Optional[str]) -> Tuple[str, str]:
    """A központi segédtáblázat szekciócíme -> (visszáru típus, megjelenített név)."""
    title = (section_title or "").lower()
    if "parkside" in title:
        return "parkside", "Parkside"
    if "plu" in title:
        return "plu", "PLU"
    if "beraktároz" in title or "beraktaroz" in title:
        return "beraktarozott", "Beraktározás"
    return "egyeb", section_title or "Egyéb"


def distribution_status(received_quantity: Optional[int], expected_quantity: Optional[int]) -> str:
    """Elosztási tétel állapota a beérkezett és a várt mennyiség alapján."""
    if received_quantity is None:
        return "pending"
    if received_quantity == (expected_quantity or 0):
        return "ok"
    return "discrepancy"
