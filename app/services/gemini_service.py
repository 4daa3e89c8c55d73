import aiohttp
import asyncio
import base64
import json
import logging
import re
import traceback
from typing import Any, Dict, Optional
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential
from app.config import settings

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

OCR_SYSTEM_PROMPT = "Te egy OCR és adatkinyerő asszisztens vagy."


class GeminiServiceError(Exception):
    """Szerveroldali (5xx) hiba a Gemini API-tól; újrapróbálható."""


class GeminiService:
    """Szolgáltatás a Google Gemini API-hoz (szöveg, JSON válasz, kép/PDF kinyerés).

    Három hívásformát ad:
    - `generate_text_async`: szabad szöveges prompt, nyers szöveges válasz
    - `invoke_llm`: prompt + JSON schema, a válasz feldolgozott JSON
    - `extract_data`: kép vagy PDF + JSON schema, `{status, output}` eredmény

    A hálózati és 5xx hibákat a tenacity háromszor újrapróbálja, utána a hívó
    üres eredményt kap (None vagy `status="error"`).

    Attributes:
        api_url: A Gemini generateContent végpont a modellel és a kulccsal.

    Examples:
        >>> gemini = GeminiService()
        >>> result = await gemini.extract_data(image_bytes, "image/jpeg", schema)
        >>> result["status"]
        'success'
    """
    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """Inicializálja a szolgáltatást.

        Args:
            api_key (str, optional): API kulcs; alapból a beállításokból.
            model (str, optional): Modell neve; alapból GEMINI_MODEL.
        """
        model = model or settings.GEMINI_MODEL
        logger.debug(f"GeminiService inicializálása, modell: {model}")
        self.api_url = f"{GEMINI_BASE_URL}/{model}:generateContent?key={api_key or settings.GEMINI_API_KEY}"
        self.timeout = aiohttp.ClientTimeout(total=settings.GEMINI_TIMEOUT)

    def _post_process_text(self, text: str) -> str:
        """Eltávolítja a markdown csillagokat a szöveges válaszból.

        Examples:
            >>> _post_process_text('**Szia**')
            'Szia'
        """
        if not text:
            return text
        return text.replace('*', '')

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> Optional[str]:
        candidates = data.get("candidates") or []
        if not candidates:
            return None
        parts = candidates[0].get("content", {}).get("parts", [])
        texts = [part["text"] for part in parts if "text" in part]
        return "".join(texts) if texts else None

    @staticmethod
    def parse_json_text(text: str) -> Any:
        """JSON-t olvas ki a modell válaszából.

        Kezeli a ```json kerítést és a JSON előtti/utáni szöveget.

        Raises:
            ValueError: Ha nincs értelmezhető JSON a szövegben.
        """
        cleaned = text.strip()
        fence = re.search(r"```(?:json)?\s*(.*?)```", cleaned, re.DOTALL)
        if fence:
            cleaned = fence.group(1).strip()
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError:
            match = re.search(r"(\{.*\}|\[.*\])", cleaned, re.DOTALL)
            if not match:
                raise ValueError(f"Nem JSON válasz: {cleaned[:100]}")
            return json.loads(match.group(1))

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type((aiohttp.ClientError, asyncio.TimeoutError, GeminiServiceError)),
        reraise=True,
    )
    async def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        async with aiohttp.ClientSession() as session:
            async with session.post(
                self.api_url,
                json=payload,
                headers=headers,
                timeout=self.timeout
            ) as response:
                if response.status >= 500:
                    raise GeminiServiceError(f"Gemini HTTP {response.status}")
                data = await response.json(content_type=None)
                logger.debug(f"Gemini nyers válasz: {str(data)[:200]}")
                return data

    async def generate_text_async(self, prompt: str) -> Optional[str]:
        """Szabad szöveges prompt elküldése, a válasz szövege vagy None.

        Examples:
            >>> await service.generate_text_async('Szia!')
            'Szia! Miben segíthetek?'
        """
        logger.debug(f"Küldés a Gemininek: {prompt[:50]}...")
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            data = await self._post(payload)
            text = self._extract_text(data)
            if text is None:
                logger.warning(f"Váratlan Gemini válasz: {data}")
                return None
            return self._post_process_text(text)
        except Exception as e:
            logger.error(f"Gemini API hiba: {e}\n{traceback.format_exc()}")
            return None

    async def invoke_llm(self, prompt: str, response_json_schema: Optional[Dict[str, Any]] = None) -> Any:
        """Prompt küldése; schema megadásakor JSON válasz feldolgozva.

        Args:
            prompt (str): A kérés szövege.
            response_json_schema (dict, optional): Elvárt válasz JSON schema.

        Returns:
            Any: Schema nélkül nyers szöveg, schemával a feldolgozott JSON;
                hiba esetén None.
        """
        if response_json_schema is None:
            return await self.generate_text_async(prompt)

        full_prompt = (
            f"{prompt}\n\nA válasz kizárólag az alábbi JSON schemának megfelelő JSON legyen:\n"
            f"{json.dumps(response_json_schema, ensure_ascii=False, indent=2)}"
        )
        payload = {
            "contents": [{"parts": [{"text": full_prompt}]}],
            "generationConfig": {"responseMimeType": "application/json", "temperature": 0.1},
        }
        try:
            data = await self._post(payload)
            text = self._extract_text(data)
            if text is None:
                logger.warning(f"Üres Gemini JSON válasz: {data}")
                return None
            return self.parse_json_text(text)
        except Exception as e:
            logger.error(f"Gemini JSON hívás hiba: {e}")
            return None

    async def extract_data(self, content: bytes, mime_type: str, json_schema: Dict[str, Any]) -> Dict[str, Any]:
        """Strukturált adat kinyerése képből vagy PDF-ből.

        Kimenet: {"status": "success", "output": <dict>} vagy
        {"status": "error", "output": None} ha a hívás vagy a feldolgozás nem sikerült.
        """
        prompt = (
            f"{OCR_SYSTEM_PROMPT}\n"
            "A következő képről strukturált adatot kérek a megadott JSON schema alapján:\n"
            f"{json.dumps(json_schema, ensure_ascii=False, indent=2)}\n"
            "Válasz kizárólag JSON formátumban legyen!"
        )
        payload = {
            "contents": [{
                "parts": [
                    {"text": prompt},
                    {"inline_data": {"mime_type": mime_type, "data": base64.b64encode(content).decode("ascii")}},
                ]
            }],
            "generationConfig": {"responseMimeType": "application/json", "temperature": 0.1},
        }
        try:
            data = await self._post(payload)
            text = self._extract_text(data)
            if text is None:
                logger.warning(f"OCR: nincs szöveges válasz: {str(data)[:200]}")
                return {"status": "error", "output": None}
            output = self.parse_json_text(text)
            if not isinstance(output, dict):
                logger.warning(f"OCR: nem objektum a válasz: {str(output)[:100]}")
                return {"status": "error", "output": None}
            return {"status": "success", "output": output}
        except Exception as e:
            logger.error(f"OCR feldolgozási hiba: {e}")
            return {"status": "error", "output": None}
