import io
import os
import tempfile
from pathlib import Path

import pytest
from httpx import AsyncClient, ASGITransport
from PIL import Image

# Külön teszt adatbázis és tárhely; az app importja előtt kell beállítani
_TMP_DIR = Path(tempfile.mkdtemp(prefix="bolti_naplo_tests_"))
os.environ["GEMINI_API_KEY"] = "test-key"
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'test.sqlite'}"
os.environ["UPLOAD_DIR"] = str(_TMP_DIR / "uploads")
os.environ["PUBLIC_BASE_URL"] = "http://test"

from app.main import app  # noqa: E402
from app.api.deps import get_gemini_service  # noqa: E402
from app.core.database import engine  # noqa: E402
from app.models import base  # noqa: E402


class FakeGemini:
    """A Gemini kliens helyettesítője: előre beállított válaszokat ad vissza sorban.

    `outputs`: az `extract_data` kimenetei (None = sikertelen olvasás),
    `answers`: az `invoke_llm` / `generate_text_async` válaszai.
    """

    def __init__(self):
        self.outputs = []
        self.answers = []
        self.prompts = []
        self.mime_types = []

    async def extract_data(self, content, mime_type, json_schema):
        self.mime_types.append(mime_type)
        output = self.outputs.pop(0) if self.outputs else None
        if output is None:
            return {"status": "error", "output": None}
        return {"status": "success", "output": output}

    async def invoke_llm(self, prompt, response_json_schema=None):
        self.prompts.append(prompt)
        return self.answers.pop(0) if self.answers else None

    async def generate_text_async(self, prompt):
        return await self.invoke_llm(prompt)


@pytest.fixture(autouse=True)
def setup_db():
    """Minden teszt tiszta adatbázissal indul."""
    base.Base.metadata.drop_all(bind=engine)
    base.Base.metadata.create_all(bind=engine)
    yield
    base.Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_gemini():
    fake = FakeGemini()
    app.dependency_overrides[get_gemini_service] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_gemini_service, None)


@pytest.fixture
async def client(fake_gemini):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def png_bytes():
    """Kis valódi PNG kép (a képelőfeldolgozáshoz)."""
    buffer = io.BytesIO()
    Image.new("RGB", (16, 16), color=(200, 200, 200)).save(buffer, format="PNG")
    return buffer.getvalue()
