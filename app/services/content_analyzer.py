# Napi infó szövegek tagolása: érintett kör leválasztása és cikkszám-táblázat felismerése
import logging
import re
from typing import Any, Dict, Optional, Tuple

from app.services.extraction_schemas import STRUCTURED_CONTENT_SCHEMA
from app.services.gemini_service import GeminiService

logger = logging.getLogger(__name__)

AFFECTED_PATTERN = re.compile(r"Érintett:\s*([\s\S]*?)(?=\n\n|\n[A-Z]|$)", re.IGNORECASE)
ARTICLE_NUMBER_PATTERN = re.compile(r"(\s)(\d{6,7}\s)")

STRUCTURE_PROMPT = """
FELADAT: Bontsd a következő szöveget három részre: bevezető leírás, tételtáblázat, záró leírás.

BEMENETI SZÖVEG:
---
{content}
---

UTASÍTÁSOK:
1. leading_description: a fő tétellista ELŐTTI szöveg, általában bevezetés.
2. items: a tétellista. Jellemzően cikkszám (Artikelnummer/Cikkszám, 6-7 számjegy) és terméknév
   soronként. Minden sor egy objektum: "key" a cikkszám, "value" a terméknév és a sor többi adata.
3. trailing_description: a tétellista UTÁNI szöveg, például határidő ("Határidő: ...").

KRITIKUS SZABÁLYOK:
- Ha a szövegben NINCS egyértelmű, többsoros, cikkszámos tétellista, az "items" legyen üres tömb,
  és a TELJES eredeti szöveg kerüljön a "leading_description" mezőbe. Ne találj ki táblázatot.
- Ha nincs bevezető vagy záró szöveg, az érték üres sztring "" legyen.
"""


def preprocess_content(text: str) -> str:
    """Sortörést tesz a 6-7 számjegyű cikkszámok elé, hogy a sorok felismerhetők legyenek."""
    return ARTICLE_NUMBER_PATTERN.sub(lambda m: "\n" + m.group(2), text or "")


def split_affected(content: Optional[str]) -> Tuple[Optional[str], str]:
    """Leválasztja az "Érintett: ..." részt a feladat szövegéből.

    Returns:
        Tuple[Optional[str], str]: (érintett kör vagy None, maradék szöveg).

    Examples:
        >>> split_affected("Érintett: Kassza\\n\\nA pénztárakat ellenőrizni kell.")
        ('Kassza', 'A pénztárakat ellenőrizni kell.')
    """
    content = content or ""
    affected = None
    rest = content

    match = AFFECTED_PATTERN.search(content)
    if match and match.group(1).strip():
        affected = match.group(1).strip()
        rest = AFFECTED_PATTERN.sub("", content, count=1).strip()

    # Jelentés típusú kérdéssoroknál minden kérdés külön sorba kerül
    if "Jelentés:" in rest:
        rest = rest.replace("? ", "?\n")
    return affected, rest


def fallback_structure(content: str) -> Dict[str, Any]:
    return {"leading_description": content, "items": [], "trailing_description": ""}


class ContentAnalyzer:
    """Feladatszöveg strukturálása az LLM segítségével.

    Sikertelen hívás vagy hibás válasz esetén a teljes szöveg
    bevezető leírásként, tételek nélkül tér vissza.
    """

    def __init__(self, gemini: Optional[GeminiService] = None):
        self.gemini = gemini or GeminiService()

    async def analyze(self, content: str) -> Dict[str, Any]:
        if not content:
            return fallback_structure("")

        prompt = STRUCTURE_PROMPT.format(content=preprocess_content(content))
        try:
            result = await self.gemini.invoke_llm(prompt, response_json_schema=STRUCTURED_CONTENT_SCHEMA)
        except Exception as e:
            logger.error(f"Tartalom elemzés hiba: {e}")
            return fallback_structure(content)

        if not isinstance(result, dict) or not isinstance(result.get("items"), list):
            logger.warning("Tartalom elemzés: érvénytelen válasz, nyers szöveg marad")
            return fallback_structure(content)

        items = [
            {"key": str(item.get("key", "")), "value": str(item.get("value", ""))}
            for item in result["items"]
            if isinstance(item, dict)
        ]
        return {
            "leading_description": result.get("leading_description") or "",
            "items": items,
            "trailing_description": result.get("trailing_description") or "",
        }
