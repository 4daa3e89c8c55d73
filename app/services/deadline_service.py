# Határidő becslés magyar nyelvű feladatszövegből az LLM segítségével
import logging
from datetime import date, datetime
from typing import Optional

from app.services.calendar_helper import to_local_naive, weekday_name
from app.services.gemini_service import GeminiService

logger = logging.getLogger(__name__)

DEADLINE_SCHEMA = {
    "type": "object",
    "properties": {
        "deadline": {
            "type": ["string", "null"],
            "format": "date-time",
        }
    },
}

DEADLINE_PROMPT = """
Elemezd a következő magyar nyelvű feladat szövegét a pontos határidő megállapításához.

Környezeti információk:
- A feladat létrehozásának dátuma: {day}
- Ez a nap egy {day_name}.

Feladat:
"{title} - {content}"

Utasítások a határidő megállapításához:
1. Kulcsszavak: keresd a "határidő", "zárás", "napzárás", "eddig", "legkésőbb" szavakat.
2. Időpontok:
   - Ha a szövegben "napzárás" vagy "zárás" szerepel konkrét dátum nélkül, az a feladat létrehozásának napján ({day}) 22:00-kor van.
   - Ha csak egy óra van megadva (pl. "14:00-ig"), az a feladat létrehozásának napjára vonatkozik.
3. Napok:
   - "ma": a feladat létrehozásának napja ({day}).
   - "holnap": a feladat létrehozásának napját követő nap.
   - Napnevek (hétfő, kedd, szerda, csütörtök, péntek, szombat, vasárnap): a következő ilyen nevű napot keresd.
4. Konkrét dátumok: keresd a "hónap.nap" (pl. "10.25.") vagy "év.hónap.nap" formátumokat.
5. Nincs határidő: ha a fenti szabályok egyike sem illeszkedik, a 'deadline' értéke null legyen.

Válasz formátuma: JSON objektum. Ha van határidő, a 'deadline' kulcs értéke a pontos
dátum és időpont ISO 8601 formátumban, különben null.
"""


def parse_deadline(value) -> Optional[datetime]:
    """ISO 8601 szövegből naiv, helyi idejű datetime; érvénytelen érték -> None.

    Időzónás értéket a bolt időzónájára váltja át.

    Examples:
        >>> parse_deadline("2025-10-20T22:00:00")
        datetime.datetime(2025, 10, 20, 22, 0)
        >>> parse_deadline("holnap") is None
        True
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.warning(f"Érvénytelen határidő formátum: {value}")
        return None
    return to_local_naive(parsed)


class DeadlineService:
    """Feladat határidejének becslése a szövegből.

    Args:
        gemini (GeminiService): LLM kliens; alapból új példány.
    """

    def __init__(self, gemini: Optional[GeminiService] = None):
        self.gemini = gemini or GeminiService()

    def build_prompt(self, title: str, content: str, reference_date: date) -> str:
        return DEADLINE_PROMPT.format(
            day=reference_date.isoformat(),
            day_name=weekday_name(reference_date),
            title=title,
            content=content,
        )

    async def infer_deadline(self, title: str, content: str, reference_date: date) -> Optional[datetime]:
        """Visszaadja a becsült határidőt vagy None-t (nincs határidő / hiba)."""
        prompt = self.build_prompt(title, content, reference_date)
        try:
            result = await self.gemini.invoke_llm(prompt, response_json_schema=DEADLINE_SCHEMA)
        except Exception as e:
            logger.error(f"❌ Határidő becslés sikertelen: {e}")
            return None
        if not isinstance(result, dict):
            return None
        deadline = parse_deadline(result.get("deadline"))
        if deadline:
            logger.debug(f"Határidő '{title}': {deadline.isoformat()}")
        return deadline
