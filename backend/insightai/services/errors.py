"""
Analysis failure taxonomy and result container.
"""
import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from insightai.constants import INVALID_KEY_SIGNATURE, STALE_KEY_SIGNATURE
from insightai.models.insight import HistoryItem, InsightResponse


class AnalysisErrorKind(str, Enum):
    """Distinguishable ways an analysis can fail."""
    MISSING_CREDENTIAL = "MissingCredential"
    INVALID_CREDENTIAL = "InvalidCredential"
    STALE_CREDENTIAL = "StaleCredential"
    SERVICE_UNAVAILABLE = "ServiceUnavailable"
    EMPTY_RESPONSE = "EmptyResponse"
    MALFORMED_RESPONSE = "MalformedResponse"


CREDENTIAL_ERRORS = {
    AnalysisErrorKind.MISSING_CREDENTIAL,
    AnalysisErrorKind.INVALID_CREDENTIAL,
    AnalysisErrorKind.STALE_CREDENTIAL,
}


class AnalysisError(Exception):
    """A classified analysis failure."""

    def __init__(self, kind: AnalysisErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def requires_reauthentication(self) -> bool:
        return self.kind in CREDENTIAL_ERRORS

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "requires_reauthentication": self.requires_reauthentication,
        }

    def __repr__(self):
        return f"AnalysisError({self.kind.value}, {self.message!r})"


def classify_service_error(exc: BaseException) -> AnalysisError:
    """
    Map an exception raised by the model call to an AnalysisError.

    Args:
        exc: Exception raised while calling the service

    Returns:
        Classified error; the original message is kept
    """
    if isinstance(exc, (asyncio.TimeoutError, TimeoutError)) and not str(exc):
        return AnalysisError(
            AnalysisErrorKind.SERVICE_UNAVAILABLE,
            "The AI service did not respond in time. Please try again."
        )

    message = str(exc) or exc.__class__.__name__
    if INVALID_KEY_SIGNATURE in message:
        return AnalysisError(AnalysisErrorKind.INVALID_CREDENTIAL, message)
    if STALE_KEY_SIGNATURE in message:
        return AnalysisError(AnalysisErrorKind.STALE_CREDENTIAL, message)
    return AnalysisError(AnalysisErrorKind.SERVICE_UNAVAILABLE, message)


@dataclass
class AnalysisResult:
    """Either a validated insight or a classified error, never both."""
    insight: Optional[InsightResponse] = None
    error: Optional[AnalysisError] = None
    history_item: Optional[HistoryItem] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, insight: InsightResponse) -> "AnalysisResult":
        return cls(insight=insight)

    @classmethod
    def failure(cls, error: AnalysisError) -> "AnalysisResult":
        return cls(error=error)
