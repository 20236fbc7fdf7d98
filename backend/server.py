"""
Main server module for InsightAI.
FastAPI application exposing structured Understand / Grow / Act guidance.
"""
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware
from datetime import datetime, timezone
from typing import Optional
import logging

from insightai.config import config
from insightai.routes import credentials, history, insights
from insightai.services.ai_service import InsightResponseHandler
from insightai.services.credentials import CredentialManager
from insightai.services.history import HistoryStore
from insightai.services.insight_service import InsightService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("insightai.server")

VERSION = "1.0.0"


def create_app(
    credential_manager: Optional[CredentialManager] = None,
    history_store: Optional[HistoryStore] = None,
    handler: Optional[InsightResponseHandler] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        credential_manager: API key holder, defaults to the configured key
        history_store: History log, defaults to an empty store
        handler: Model call handler, defaults to one using credential_manager

    Returns:
        Configured application
    """
    app = FastAPI(
        title="InsightAI",
        description="AI-powered guidance for personal, career and business documents",
        version=VERSION
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"]
    )

    credential_manager = credential_manager or CredentialManager(config.GEMINI_API_KEY)
    history_store = history_store if history_store is not None else HistoryStore()
    handler = handler or InsightResponseHandler(credential_manager)

    app.state.credentials = credential_manager
    app.state.history = history_store
    app.state.insight_service = InsightService(handler, history_store)

    @app.on_event("startup")
    async def startup():
        """Validate configuration on startup."""
        try:
            config.validate()
            logger.info("✅ InsightAI server started successfully")
            logger.info(f"🤖 Model: {config.AI_MODEL_NAME}")
            logger.info(f"🌐 CORS origins: {config.CORS_ORIGINS}")
        except Exception as e:
            logger.error(f"❌ Startup failed: {e}")
            raise

    # Root endpoints
    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "InsightAI API",
            "version": VERSION,
            "status": "running"
        }

    @app.get("/api")
    async def api_root():
        """API root endpoint."""
        return {
            "message": "InsightAI API is running",
            "version": VERSION
        }

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": "InsightAI",
            "version": VERSION,
            "api_key_configured": app.state.credentials.resolve() is not None
        }

    # Include routers
    app.include_router(insights.router, prefix="/api")
    app.include_router(history.router, prefix="/api")
    app.include_router(credentials.router, prefix="/api")

    # Error handlers
    @app.exception_handler(404)
    async def not_found_handler(request, exc):
        """Handle 404 errors."""
        detail = getattr(exc, "detail", None) or "Resource not found"
        return JSONResponse(
            status_code=404,
            content={"detail": detail}
        )

    @app.exception_handler(500)
    async def internal_error_handler(request, exc):
        """Handle 500 errors."""
        logger.error(f"Internal server error: {exc}")
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"}
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "server:app",
        host=config.HOST,
        port=config.PORT,
        reload=config.RELOAD
    )
