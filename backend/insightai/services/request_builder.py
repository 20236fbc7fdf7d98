"""
Payload construction for insight requests.
"""
import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List

from insightai.constants import IMAGE_MIME_TYPE, PLACEHOLDER_PROMPT
from insightai.models.insight import ContextType, InsightRequest, Language

RESPONSE_FIELDS = ("context", "understand", "grow", "act")

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "context": {
            "type": "STRING",
            "description": "The categorized context of the query ("
            + ", ".join(c.value for c in ContextType) + ")",
        },
        "understand": {"type": "STRING", "description": "Summary and key details"},
        "grow": {"type": "STRING", "description": "Improvements and gaps"},
        "act": {"type": "STRING", "description": "Actionable steps"},
    },
    "required": list(RESPONSE_FIELDS),
}


@dataclass
class InsightPayload:
    """Everything sent to the model for one request."""
    model: str
    system_instruction: str
    contents: List[Any]
    response_schema: Dict[str, Any] = field(default_factory=lambda: copy.deepcopy(RESPONSE_SCHEMA))


class InsightRequestBuilder:
    """Builds the outbound payload for an InsightRequest."""

    def __init__(self, model_name: str):
        self.model_name = model_name

    def _get_system_instruction(self, language: Language) -> str:
        """
        Generate system instruction for AI model.

        Args:
            language: Target language for response

        Returns:
            System instruction string
        """
        return f"""
You are InsightAI, a professional assistant for personal, career, and business guidance.
Your task is to provide intelligent, structured guidance based on documents or queries provided by the user.

1. Identify context: Personal, Career, Business, or General.
2. LANGUAGE RULE: ALWAYS respond in {language.value}. Use native vocabulary but maintain professional clarity.
3. STRUCTURE: You must provide output in three specific sections:
   - Understand: Summarize the input, identify key facts, and clarify ambiguities.
   - Grow: Suggest areas for improvement, skill gaps, or long-term benefits.
   - Act: Provide a clear, numbered list of actionable steps for the user to take immediately.
4. TONE: Professional, supportive, and direct. Do not give legal or medical advice; suggest consulting a qualified professional where it matters.
"""

    def build(self, request: InsightRequest) -> InsightPayload:
        contents: List[Any] = [{"text": request.text if request.text.strip() else PLACEHOLDER_PROMPT}]
        if request.image_data:
            contents.append({
                "mime_type": IMAGE_MIME_TYPE,
                "data": request.image_data
            })

        return InsightPayload(
            model=self.model_name,
            system_instruction=self._get_system_instruction(request.language),
            contents=contents,
        )
