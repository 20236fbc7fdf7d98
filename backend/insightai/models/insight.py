"""
Pydantic models for InsightAI application.
"""
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional, Dict
from datetime import datetime, timezone
from enum import Enum

from insightai.utils.helpers import make_history_id


class Language(str, Enum):
    """Languages a response can be generated in."""
    ENGLISH = "English"
    HINDI = "Hindi"
    MARATHI = "Marathi"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        return None


class ContextType(str, Enum):
    """Classification tag of a request and its insight."""
    PERSONAL = "Personal"
    CAREER = "Career"
    BUSINESS = "Business"
    GENERAL = "General"


class InsightRequest(BaseModel):
    """A single analysis request; needs non-blank text or an image."""
    text: str = ""
    language: Language
    image_data: Optional[bytes] = None
    context_hint: ContextType = ContextType.GENERAL

    @model_validator(mode="after")
    def check_has_input(self):
        if not self.text.strip() and not self.image_data:
            raise ValueError("Either text or an image is required")
        return self


class InsightResponse(BaseModel):
    """Structured guidance returned by the model."""
    context: ContextType
    understand: str
    grow: str
    act: str


class HistoryItem(BaseModel):
    """Record of one successful analysis."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=make_history_id)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    input: str
    language: Language
    response: InsightResponse


class AnalyzeRequest(BaseModel):
    """Request model for analyzing text and/or a base64 image."""
    text: str = ""
    language: Language = Language.ENGLISH
    context: ContextType = ContextType.GENERAL
    image_base64: Optional[str] = None  # bare base64 or a data: URL


class AnalyzeResponse(BaseModel):
    """Response model for a successful analysis."""
    insight: InsightResponse
    history_item: HistoryItem


class HistoryStats(BaseModel):
    """Number of history items per model-assigned context."""
    total: int
    by_context: Dict[ContextType, int]


class CredentialStatus(BaseModel):
    """Whether a usable API key is available."""
    has_selected_api_key: bool
    configured: bool


class CredentialSelection(BaseModel):
    """Request model for selecting an API key."""
    api_key: Optional[str] = None


class QuickAction(BaseModel):
    """Preset prompt offered on the dashboard."""
    label: str
    description: str
    context: ContextType
    text: str
