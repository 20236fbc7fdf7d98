"""
Analysis orchestration: request validation, model call, history recording.
"""
import logging
from typing import Optional

from insightai.constants import FALLBACK_INPUT_LABEL
from insightai.models.insight import ContextType, HistoryItem, InsightRequest, Language
from insightai.services.ai_service import InsightResponseHandler
from insightai.services.errors import AnalysisErrorKind, AnalysisResult
from insightai.services.history import HistoryStore

logger = logging.getLogger("insightai.services.insight")


class InsightService:
    """Entry point used by the routes to analyze input."""

    def __init__(self, handler: InsightResponseHandler, history: HistoryStore):
        self.handler = handler
        self.history = history

    async def analyze(
        self,
        text: str,
        language: Language,
        image_data: Optional[bytes] = None,
        context_hint: ContextType = ContextType.GENERAL
    ) -> AnalysisResult:
        """
        Analyze text and/or an image and record the result on success.

        Args:
            text: User text, may be blank if an image is given
            language: Target language for response
            image_data: Optional JPEG image bytes
            context_hint: Context chosen by the user

        Returns:
            AnalysisResult; on success ``history_item`` is the recorded item

        Raises:
            ValueError: If both text and image are missing. Nothing is sent
                and history is left untouched.
        """
        request = InsightRequest(
            text=text,
            language=language,
            image_data=image_data,
            context_hint=context_hint
        )
        logger.info(
            f"Analyzing request (language={request.language.value}, "
            f"hint={request.context_hint.value}, image={'yes' if image_data else 'no'})"
        )

        result = await self.handler.analyze(request)

        if not result.ok:
            if result.error.kind == AnalysisErrorKind.STALE_CREDENTIAL:
                self.handler.credentials.reset_selection()
            return result

        item = HistoryItem(
            input=text if text.strip() else FALLBACK_INPUT_LABEL,
            language=request.language,
            response=result.insight
        )
        self.history.record(item)
        result.history_item = item
        return result
