"""Tests for the HTTP API"""

import base64

import pytest
from fastapi.testclient import TestClient

from conftest import make_history_item
from insightai.models.insight import InsightResponse
from insightai.services.credentials import CredentialManager
from insightai.services.errors import AnalysisError, AnalysisErrorKind, AnalysisResult
from server import create_app


class FakeHandler:
    """Handler double returning a fixed result and recording requests"""

    def __init__(self, credentials, result=None):
        self.credentials = credentials
        self.result = result
        self.requests = []

    async def analyze(self, request):
        self.requests.append(request)
        if self.result is not None:
            return self.result
        return AnalysisResult.success(InsightResponse(
            context="Business",
            understand="Vendor wants 15% more.",
            grow="Diversify suppliers.",
            act="1. Ask for a breakdown.",
        ))


@pytest.fixture
def fake_handler(credentials):
    return FakeHandler(credentials)


@pytest.fixture
def client(credentials, history, fake_handler):
    app = create_app(credential_manager=credentials, history_store=history, handler=fake_handler)
    return TestClient(app)


JPEG_B64 = base64.b64encode(b"\xff\xd8\xff\xe0fake-jpeg").decode()


class TestAnalyze:

    def test_text_analysis(self, client, history):
        response = client.post("/api/insights/analyze", json={
            "text": "Vendor price hike", "language": "English", "context": "Business"
        })

        assert response.status_code == 200
        body = response.json()
        assert body["insight"]["context"] == "Business"
        assert body["history_item"]["input"] == "Vendor price hike"
        assert history.all()[0].id == body["history_item"]["id"]

    def test_data_url_image(self, client, fake_handler):
        response = client.post("/api/insights/analyze", json={
            "language": "Hindi", "image_base64": f"data:image/jpeg;base64,{JPEG_B64}"
        })

        assert response.status_code == 200
        assert response.json()["history_item"]["input"] == "Document Analysis"
        assert fake_handler.requests[0].image_data == b"\xff\xd8\xff\xe0fake-jpeg"

    def test_blank_input_is_rejected(self, client, fake_handler, history):
        response = client.post("/api/insights/analyze", json={"text": "  "})

        assert response.status_code == 400
        assert fake_handler.requests == []
        assert len(history) == 0

    def test_invalid_base64_is_rejected(self, client, fake_handler):
        response = client.post("/api/insights/analyze", json={"image_base64": "***"})
        assert response.status_code == 400
        assert fake_handler.requests == []

    def test_unknown_language_is_rejected(self, client):
        response = client.post("/api/insights/analyze", json={"text": "hi", "language": "French"})
        assert response.status_code == 422

    @pytest.mark.parametrize("kind,status", [
        (AnalysisErrorKind.MISSING_CREDENTIAL, 401),
        (AnalysisErrorKind.INVALID_CREDENTIAL, 401),
        (AnalysisErrorKind.STALE_CREDENTIAL, 401),
        (AnalysisErrorKind.SERVICE_UNAVAILABLE, 503),
        (AnalysisErrorKind.EMPTY_RESPONSE, 502),
        (AnalysisErrorKind.MALFORMED_RESPONSE, 502),
    ])
    def test_error_kinds_map_to_status(self, client, fake_handler, history, kind, status):
        fake_handler.result = AnalysisResult.failure(AnalysisError(kind, "boom"))

        response = client.post("/api/insights/analyze", json={"text": "query"})

        assert response.status_code == status
        detail = response.json()["detail"]
        assert detail["kind"] == kind.value
        assert detail["message"] == "boom"
        assert len(history) == 0


class TestUpload:

    def test_upload_photo(self, client, fake_handler):
        response = client.post(
            "/api/insights/upload",
            data={"text": "", "language": "Marathi", "context": "Personal"},
            files={"file": ("notice.jpg", b"\xff\xd8photo", "image/jpeg")},
        )

        assert response.status_code == 200
        request = fake_handler.requests[0]
        assert request.image_data == b"\xff\xd8photo"
        assert request.language.value == "Marathi"
        assert request.context_hint.value == "Personal"

    def test_upload_rejects_non_images(self, client, fake_handler):
        response = client.post(
            "/api/insights/upload",
            files={"file": ("notes.pdf", b"%PDF", "application/pdf")},
        )
        assert response.status_code == 400
        assert fake_handler.requests == []

    @pytest.mark.parametrize("filename,content_type", [
        ("scan.png", "image/png"),
        ("scan.webp", "image/webp"),
    ])
    def test_upload_accepts_only_jpeg(self, client, fake_handler, filename, content_type):
        response = client.post(
            "/api/insights/upload",
            files={"file": (filename, b"not-a-jpeg", content_type)},
        )
        assert response.status_code == 400
        assert fake_handler.requests == []

    def test_upload_rejects_empty_file(self, client):
        response = client.post(
            "/api/insights/upload",
            files={"file": ("empty.jpg", b"", "image/jpeg")},
        )
        assert response.status_code == 413


class TestHistoryRoutes:

    def test_list_and_get(self, client, history):
        older, newer = make_history_item("older"), make_history_item("newer")
        history.record(older)
        history.record(newer)

        listed = client.get("/api/history").json()
        assert [i["input"] for i in listed] == ["newer", "older"]

        assert client.get(f"/api/history/{older.id}").json()["input"] == "older"
        assert client.get("/api/history/does-not-exist").status_code == 404

    def test_stats(self, client, history):
        history.record(make_history_item(context="Career"))
        history.record(make_history_item(context="Career"))

        stats = client.get("/api/history/stats").json()

        assert stats["total"] == 2
        assert stats["by_context"]["Career"] == 2
        assert stats["by_context"]["Business"] == 0

    def test_clear(self, client, history):
        history.record(make_history_item())
        assert client.delete("/api/history").status_code == 200
        assert client.get("/api/history").json() == []


class TestCredentialRoutes:

    def test_status_and_select(self, history):
        credentials = CredentialManager(None)
        app = create_app(credential_manager=credentials, history_store=history,
                         handler=FakeHandler(credentials))
        client = TestClient(app)

        status = client.get("/api/credentials/status").json()
        assert status == {"has_selected_api_key": False, "configured": False}
        assert client.get("/api/health").json()["api_key_configured"] is False

        selected = client.post("/api/credentials/select", json={"api_key": "new-key"}).json()
        assert selected["has_selected_api_key"] is True
        assert credentials.resolve() == "new-key"
        assert client.get("/api/health").json()["api_key_configured"] is True


class TestReferenceRoutes:

    def test_languages(self, client):
        assert client.get("/api/insights/languages").json() == ["English", "Hindi", "Marathi"]

    def test_contexts(self, client):
        assert client.get("/api/insights/contexts").json() == ["Personal", "Career", "Business", "General"]

    def test_quick_actions(self, client):
        actions = client.get("/api/insights/quick-actions").json()
        assert [a["context"] for a in actions] == ["Personal", "Career", "Business"]

    def test_root(self, client):
        assert client.get("/").json()["status"] == "running"
