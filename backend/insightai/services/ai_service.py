"""
AI service for generating structured insights using Google Generative AI.
"""
import asyncio
import json
import logging
from typing import Optional

import google.generativeai as genai
from pydantic import ValidationError

from insightai.config import config
from insightai.models.insight import InsightRequest, InsightResponse
from insightai.services.credentials import CredentialManager
from insightai.services.errors import (
    AnalysisError, AnalysisErrorKind, AnalysisResult, classify_service_error
)
from insightai.services.request_builder import InsightPayload, InsightRequestBuilder

logger = logging.getLogger("insightai.services.ai")


def parse_insight(raw_text: str) -> InsightResponse:
    """
    Parse the model's reply into an InsightResponse.

    Args:
        raw_text: JSON text returned by the model

    Returns:
        Validated insight with the reply's values unchanged

    Raises:
        AnalysisError: MALFORMED_RESPONSE if the text is not a JSON object
            with the four required string fields and a known context
    """
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise AnalysisError(
            AnalysisErrorKind.MALFORMED_RESPONSE,
            f"The AI model returned invalid JSON: {str(e)}"
        )

    if not isinstance(data, dict):
        raise AnalysisError(
            AnalysisErrorKind.MALFORMED_RESPONSE,
            "The AI model did not return a JSON object."
        )

    try:
        return InsightResponse(**data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise AnalysisError(
            AnalysisErrorKind.MALFORMED_RESPONSE,
            f"The AI model returned an incomplete insight (invalid fields: {fields})."
        )


class InsightResponseHandler:
    """Runs one model call per request and validates the reply."""

    def __init__(
        self,
        credentials: CredentialManager,
        builder: Optional[InsightRequestBuilder] = None,
        timeout: float = config.AI_TIMEOUT_SECONDS,
        max_output_tokens: Optional[int] = config.AI_MAX_OUTPUT_TOKENS,
    ):
        self.credentials = credentials
        self.builder = builder or InsightRequestBuilder(config.AI_MODEL_NAME)
        self.timeout = timeout
        self.max_output_tokens = max_output_tokens

    async def _generate(self, api_key: str, payload: InsightPayload) -> Optional[str]:
        """
        Issue the model call.

        Returns:
            Reply text, or None if the reply carries no text
        """
        generation_options = {
            "temperature": config.AI_TEMPERATURE,
            "response_mime_type": "application/json",
            "response_schema": payload.response_schema
        }
        if self.max_output_tokens:
            generation_options["max_output_tokens"] = self.max_output_tokens

        genai.configure(api_key=api_key)
        model = genai.GenerativeModel(
            model_name=payload.model,
            system_instruction=payload.system_instruction,
            generation_config=genai.GenerationConfig(**generation_options)
        )

        response = await asyncio.wait_for(
            asyncio.to_thread(
                model.generate_content,
                payload.contents,
                request_options={"timeout": self.timeout}
            ),
            timeout=self.timeout
        )

        # .text raises ValueError when the reply has no parts (e.g. blocked)
        try:
            return response.text
        except ValueError as e:
            logger.warning(f"Reply carried no text: {str(e)}")
            return None

    async def analyze(self, request: InsightRequest) -> AnalysisResult:
        """
        Generate an insight for a request.

        Args:
            request: Validated insight request

        Returns:
            AnalysisResult holding either the insight or a classified error
        """
        api_key = self.credentials.resolve()
        if not api_key:
            logger.warning("Analysis refused: no API key configured")
            return AnalysisResult.failure(AnalysisError(
                AnalysisErrorKind.MISSING_CREDENTIAL,
                "No API key is configured. Please select an API key to continue."
            ))

        payload = self.builder.build(request)

        try:
            raw_text = await self._generate(api_key, payload)
        except Exception as e:
            error = classify_service_error(e)
            logger.error(f"AI request failed ({error.kind.value}): {error.message}")
            return AnalysisResult.failure(error)

        if not raw_text or not raw_text.strip():
            logger.error("AI model returned an empty response")
            return AnalysisResult.failure(AnalysisError(
                AnalysisErrorKind.EMPTY_RESPONSE,
                "The AI model returned an empty response."
            ))

        try:
            insight = parse_insight(raw_text)
        except AnalysisError as e:
            logger.error(f"AI response rejected: {e.message}")
            return AnalysisResult.failure(e)

        logger.info(f"Insight generated (context={insight.context.value}, language={request.language.value})")
        return AnalysisResult.success(insight)
