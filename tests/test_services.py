"""Tests for file storage, OCR fan-out, image preprocessing, Gemini retries and admin filters."""
from datetime import date

import aiohttp
import pandas as pd
import pytest
from tenacity import wait_none

from admin_panel.filters import filter_frame
from app.services import gemini_service
from app.services.gemini_service import GeminiService, GeminiServiceError
from app.services.image_preprocessor import preprocess_image
from app.services.ocr_service import IncomingFile, OcrService
from app.services.storage_service import StorageService


class EchoGemini:
    """Minden fájlra sikeres kinyerést ad, a kimenetben a fájl tartalmával."""

    async def extract_data(self, content, mime_type, json_schema):
        return {"status": "success", "output": {"content": content.decode()}}


@pytest.fixture
def storage(tmp_path):
    return StorageService(root=str(tmp_path), base_url="http://test")


# --- Tárhely és OCR -------------------------------------------------------------

async def test_same_named_uploads_keep_every_page(storage):
    ocr = OcrService(EchoGemini(), storage)
    files = [IncomingFile("image.jpg", "image/jpeg", str(i).encode()) for i in range(10)]

    results = await ocr.extract_from_files(files, {})

    urls = [r["image_url"] for r in results]
    assert len(set(urls)) == 10
    assert [storage.read_by_url(url) for url in urls] == [str(i).encode() for i in range(10)]
    assert [r["output"]["content"] for r in results] == [str(i) for i in range(10)]


def test_upload_url_and_read_back(storage):
    url = storage.upload("../../arcimke 1.jpg", b"kep", bucket="price_labels")
    assert url.startswith("http://test/files/price_labels/")
    assert url.endswith("-arcimke_1.jpg")
    assert storage.read_by_url(url) == b"kep"


def test_path_for_url_rejects_foreign_and_traversal_urls(storage):
    with pytest.raises(ValueError):
        storage.path_for_url("http://example.com/kep.jpg")
    with pytest.raises(ValueError):
        storage.path_for_url("http://test/files/../../etc/passwd")
    with pytest.raises(ValueError):
        storage.read_by_url("http://test/files/uploads/../../titok.txt")


# --- Képelőfeldolgozás -------------------------------------------------------------

def test_preprocess_returns_original_bytes_on_failure():
    assert preprocess_image(b"not an image") == b"not an image"


def test_preprocess_outputs_jpeg(png_bytes):
    assert preprocess_image(png_bytes)[:2] == b"\xff\xd8"


# --- Gemini újrapróbálás -------------------------------------------------------------

class FakeResponse:
    def __init__(self, status):
        self.status = status

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def json(self, content_type=None):
        return {}


def fake_session_factory(calls, status=None):
    """ClientSession helyettesítő: status nélkül kapcsolati hibát dob, különben azzal a státusszal válaszol."""

    class FakeSession:
        def __init__(self, *args, **kwargs):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, *exc):
            return False

        def post(self, *args, **kwargs):
            calls.append(kwargs.get("json"))
            if status is None:
                raise aiohttp.ClientConnectionError("kapcsolat megszakadt")
            return FakeResponse(status)

    return FakeSession


async def test_post_retries_connection_errors_three_times(monkeypatch):
    calls = []
    monkeypatch.setattr(gemini_service.aiohttp, "ClientSession", fake_session_factory(calls))
    post = GeminiService._post.retry_with(wait=wait_none())

    with pytest.raises(aiohttp.ClientError):
        await post(GeminiService(), {"contents": []})
    assert len(calls) == 3


async def test_post_retries_server_errors_three_times(monkeypatch):
    calls = []
    monkeypatch.setattr(gemini_service.aiohttp, "ClientSession", fake_session_factory(calls, status=503))
    post = GeminiService._post.retry_with(wait=wait_none())

    with pytest.raises(GeminiServiceError):
        await post(GeminiService(), {"contents": []})
    assert len(calls) == 3


async def test_client_errors_are_not_retried(monkeypatch):
    calls = []
    monkeypatch.setattr(gemini_service.aiohttp, "ClientSession", fake_session_factory(calls, status=400))
    post = GeminiService._post.retry_with(wait=wait_none())

    assert await post(GeminiService(), {"contents": []}) == {}
    assert len(calls) == 1


async def test_extract_data_reports_failure_after_errors(monkeypatch):
    async def failing_post(self, payload):
        raise GeminiServiceError("Gemini HTTP 503")

    monkeypatch.setattr(GeminiService, "_post", failing_post)
    result = await GeminiService().extract_data(b"kep", "image/jpeg", {})
    assert result == {"status": "error", "output": None}


# --- Admin szűrők --------------------------------------------------------------------

@pytest.fixture
def missing_df():
    return pd.DataFrame([
        {"date": date(2025, 10, 20), "status": "open", "category": "troso", "product_name": "Tej", "article_number": "111"},
        {"date": date(2025, 10, 20), "status": "resolved", "category": "mopro", "product_name": "Joghurt", "article_number": "222"},
        {"date": date(2025, 10, 21), "status": "open", "category": "troso", "product_name": "Tejföl", "article_number": "333"},
    ])


def test_filter_frame_by_date_status_and_category(missing_df):
    assert list(filter_frame(missing_df, selected_date=date(2025, 10, 20))["product_name"]) == ["Tej", "Joghurt"]
    assert list(filter_frame(missing_df, status="open")["product_name"]) == ["Tej", "Tejföl"]
    assert list(filter_frame(missing_df, category="mopro")["product_name"]) == ["Joghurt"]


def test_filter_frame_keyword_matches_name_or_article_number(missing_df):
    assert list(filter_frame(missing_df, keyword="TEJ")["product_name"]) == ["Tej", "Tejföl"]
    assert list(filter_frame(missing_df, keyword="333")["product_name"]) == ["Tejföl"]
    assert filter_frame(missing_df, keyword="kenyér").empty


def test_filter_frame_keeps_empty_frame_and_input_untouched(missing_df):
    assert filter_frame(pd.DataFrame()).empty
    filter_frame(missing_df, selected_date=date(2025, 10, 20))
    assert len(missing_df) == 3
