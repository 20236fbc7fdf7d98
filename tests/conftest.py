"""Shared fixtures for InsightAI tests"""

import json
from unittest.mock import Mock, patch

import pytest

from insightai.models.insight import HistoryItem, InsightResponse, Language
from insightai.services.ai_service import InsightResponseHandler
from insightai.services.credentials import CredentialManager
from insightai.services.history import HistoryStore
from insightai.services.request_builder import InsightRequestBuilder


def insight_json(**overrides):
    """JSON reply as the model would return it"""
    data = {
        "context": "Personal",
        "understand": "Your bank needs updated KYC documents.",
        "grow": "Keep identity documents current to avoid account freezes.",
        "act": "1. Visit the branch.\n2. Submit Aadhaar.\n3. Keep the receipt.",
    }
    data.update(overrides)
    return json.dumps(data)


def make_history_item(text="Sample query", context="General", language=Language.ENGLISH):
    return HistoryItem(
        input=text,
        language=language,
        response=InsightResponse(
            context=context,
            understand="u",
            grow="g",
            act="a",
        ),
    )


@pytest.fixture
def credentials():
    """Credential manager with a usable key"""
    return CredentialManager("test-api-key")


@pytest.fixture
def history():
    return HistoryStore()


@pytest.fixture
def builder():
    return InsightRequestBuilder("test-model")


@pytest.fixture
def handler(credentials, builder):
    return InsightResponseHandler(credentials, builder=builder, timeout=5)


@pytest.fixture
def mock_genai():
    """Patch the Gemini SDK; reply text is set through generate_content"""
    with patch("insightai.services.ai_service.genai") as genai:
        genai.GenerativeModel.return_value.generate_content.return_value = Mock(
            text=insight_json()
        )
        yield genai


@pytest.fixture
def generate_content(mock_genai):
    return mock_genai.GenerativeModel.return_value.generate_content
