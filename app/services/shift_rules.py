# Műszak szabályok: szünetek száma, kezdési idő, napi cella besorolás, rendezés
import re
from typing import Any, Dict, Optional, Tuple

TIME_PATTERN = re.compile(r"(\d{1,2}:\d{2})")

# Sorrend a napi nézetben: előbb a műszakban lévők, a végén a munkaszüneti nap
STATUS_ORDER = {
    "muszak": 1,
    "pihenonap": 2,
    "szabadsag": 3,
    "betegseg": 4,
    "munkaszuneti_nap": 5,
}

ROLES = {
    "uzletvezeto": {"label": "Üzletvezető", "order": 1},
    "1_uzletvezeto_helyettes": {"label": "1.Üzletvezető helyettes", "order": 2},
    "2_uzletvezeto_helyettes": {"label": "2.Üzletvezető helyettes", "order": 3},
    "bolti_dolgozo": {"label": "Bolti dolgozó", "order": 4},
}

STATUS_LABELS = {
    "muszak": "Műszak",
    "pihenonap": "Pihenőnap",
    "szabadsag": "Szabadság",
    "betegseg": "Betegség",
    "munkaszuneti_nap": "Munkaszüneti nap",
}

UNKNOWN_ORDER = 999
MISSING_TIME = 9999


def calculate_breaks_from_net_duration(net_duration: Optional[str]) -> int:
    """Nettó munkaidőből ("H:MM") a járó szünetek száma.

    Szabály: 6 óra alatt 0, 6 és 9 óra között 1, 9 órától 2 szünet.

    Examples:
        >>> calculate_breaks_from_net_duration("8:30")
        1
        >>> calculate_breaks_from_net_duration("9:15")
        2
        >>> calculate_breaks_from_net_duration("abc")
        0
    """
    if not net_duration:
        return 0
    parts = str(net_duration).split(":")
    if len(parts) != 2:
        return 0
    try:
        hours = int(parts[0].strip())
        minutes = int(parts[1].strip())
    except ValueError:
        return 0

    total_minutes = hours * 60 + minutes
    if total_minutes < 360:
        return 0
    if total_minutes < 540:
        return 1
    return 2


def extract_start_time(shift_text: Optional[str]) -> Optional[str]:
    """Az első "HH:MM" időpont a műszak szövegéből, vagy None."""
    if not shift_text:
        return None
    match = TIME_PATTERN.search(shift_text)
    return match.group(1) if match else None


def _hour_minute(time_string: str) -> Tuple[int, int]:
    hour, minute = time_string.split(":")[:2]
    return int(hour), int(minute)


def get_shift_type(start_time: Optional[str]) -> int:
    """Műszak típusa a kezdés órája alapján.

    1 = reggeles (5-11), 2 = napközbeni (12-16), 3 = esti (17-20), 4 = egyéb.
    """
    if not start_time:
        return 4
    try:
        hour, _ = _hour_minute(start_time)
    except ValueError:
        return 4
    if 5 <= hour < 12:
        return 1
    if 12 <= hour < 17:
        return 2
    if 17 <= hour < 21:
        return 3
    return 4


def time_to_minutes(time_string: Optional[str]) -> int:
    if not time_string:
        return MISSING_TIME
    try:
        hour, minute = _hour_minute(time_string)
    except ValueError:
        return MISSING_TIME
    return hour * 60 + minute


def classify_day_cell(day_text: str, net_duration: Optional[str] = None) -> Dict[str, Any]:
    """Egy Dayforce beosztás cella besorolása.

    Kimenet: {"status", "shift_text", "start_time", "net_shift_duration"}.

    Sorrend:
    1. "P" -> pihenőnap, "S" -> szabadság
    2. "munkaszüneti" -> munkaszüneti nap, "táppénz"/"beteg" -> betegség
    3. Időpont a szövegben -> műszak a kezdési idővel és a nettó idővel
    4. "szabadság" / "pihenő" kulcsszó, különben műszak a nyers szöveggel

    Nem műszak státusznál a nettó idő törlődik, a szöveg a státusz felirata.

    Examples:
        >>> classify_day_cell("10:00-19:00", "8:30")["start_time"]
        '10:00'
        >>> classify_day_cell("P")["status"]
        'pihenonap'
    """
    trimmed = (day_text or "").strip()
    lowered = trimmed.lower()

    status = None
    start_time = None
    if trimmed == "P":
        status = "pihenonap"
    elif trimmed == "S":
        status = "szabadsag"
    elif "munkaszüneti" in lowered:
        status = "munkaszuneti_nap"
    elif "táppénz" in lowered or "beteg" in lowered:
        status = "betegseg"
    else:
        start_time = extract_start_time(day_text)
        if start_time is None:
            if "szabadság" in lowered:
                status = "szabadsag"
            elif "pihenő" in lowered:
                status = "pihenonap"

    if status is not None:
        return {
            "status": status,
            "shift_text": STATUS_LABELS[status],
            "start_time": None,
            "net_shift_duration": None,
        }
    return {
        "status": "muszak",
        "shift_text": day_text,
        "start_time": start_time,
        "net_shift_duration": net_duration or None,
    }


def toggle_break(current: int, n: int) -> int:
    """Szünet jelölő kattintás: az aktuális számra kattintva eggyel csökken."""
    current = current or 0
    if n == current:
        return n - 1
    return n


def schedule_sort_key(schedule) -> Tuple[int, int, int]:
    """Rendezési kulcs: státusz, műszaknál kezdési idő, végül szerepkör.

    Dict-et és attribútumos objektumot (pl. Schedule modell) is elfogad.
    """
    def field(name):
        if isinstance(schedule, dict):
            return schedule.get(name)
        return getattr(schedule, name, None)

    status = field("status")
    status_order = STATUS_ORDER.get(status, UNKNOWN_ORDER)
    start = time_to_minutes(field("start_time")) if status == "muszak" else 0
    role_order = ROLES.get(field("employee_role"), {}).get("order", UNKNOWN_ORDER)
    return status_order, start, role_order
