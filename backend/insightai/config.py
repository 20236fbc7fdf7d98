"""
Configuration management for InsightAI application.
"""
import os
import logging
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
ROOT_DIR = Path(__file__).parent.parent
load_dotenv(ROOT_DIR / ".env")

logger = logging.getLogger("insightai.config")


class Config:
    """Application configuration class."""

    # AI Configuration
    GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")

    # Server Configuration
    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = int(os.environ.get("PORT", 8001))
    RELOAD = os.environ.get("RELOAD", "true").lower() == "true"

    # CORS Configuration
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*").split(",")

    # File Upload Configuration
    MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
    ALLOWED_IMAGE_TYPES = ["image/jpeg"]  # image parts are always sent as JPEG

    # AI Model Configuration
    AI_MODEL_NAME = os.environ.get("AI_MODEL_NAME", "gemini-3-flash-preview")
    AI_TEMPERATURE = float(os.environ.get("AI_TEMPERATURE", 0.7))
    # Unset means no cap; a capped reply can end as truncated JSON
    AI_MAX_OUTPUT_TOKENS = int(os.environ["AI_MAX_OUTPUT_TOKENS"]) if os.environ.get("AI_MAX_OUTPUT_TOKENS") else None
    AI_TIMEOUT_SECONDS = float(os.environ.get("AI_TIMEOUT_SECONDS", 60))

    @classmethod
    def validate(cls):
        """
        Validate configuration.

        A missing API key is not fatal: a key can still be selected at
        runtime through the credentials endpoints.
        """
        from insightai.services.credentials import is_usable_key

        if cls.AI_TIMEOUT_SECONDS <= 0:
            raise RuntimeError("AI_TIMEOUT_SECONDS must be positive")
        if not is_usable_key(cls.GEMINI_API_KEY):
            logger.warning("GEMINI_API_KEY is not set; analysis needs a selected key")
        return True


# Create configuration instance
config = Config()
