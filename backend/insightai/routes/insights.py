"""
Insight routes for InsightAI application.
"""
from fastapi import APIRouter, Depends, HTTPException, File, UploadFile, Form
from typing import List, Optional
import logging

from insightai.config import config
from insightai.constants import QUICK_ACTIONS
from insightai.dependencies import get_insight_service
from insightai.models.insight import (
    AnalyzeRequest, AnalyzeResponse, ContextType, Language, QuickAction
)
from insightai.services.errors import AnalysisErrorKind, AnalysisResult
from insightai.services.insight_service import InsightService
from insightai.utils.file_processor import decode_image_base64, validate_file_size
from insightai.utils.helpers import format_file_size, validate_file_type

logger = logging.getLogger("insightai.routes.insights")

router = APIRouter(prefix="/insights", tags=["insights"])

ERROR_STATUS_CODES = {
    AnalysisErrorKind.MISSING_CREDENTIAL: 401,
    AnalysisErrorKind.INVALID_CREDENTIAL: 401,
    AnalysisErrorKind.STALE_CREDENTIAL: 401,
    AnalysisErrorKind.SERVICE_UNAVAILABLE: 503,
    AnalysisErrorKind.EMPTY_RESPONSE: 502,
    AnalysisErrorKind.MALFORMED_RESPONSE: 502,
}


async def _run_analysis(
    service: InsightService,
    text: str,
    language: Language,
    image_data: Optional[bytes],
    context: ContextType
) -> AnalyzeResponse:
    try:
        result: AnalysisResult = await service.analyze(text, language, image_data, context)
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail="Please enter some text or upload a document photo."
        )

    if not result.ok:
        raise HTTPException(
            status_code=ERROR_STATUS_CODES[result.error.kind],
            detail=result.error.to_dict()
        )

    return AnalyzeResponse(insight=result.insight, history_item=result.history_item)


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(req: AnalyzeRequest, service: InsightService = Depends(get_insight_service)):
    """Analyze text and/or a base64-encoded document photo."""
    image_data = None
    if req.image_base64:
        try:
            image_data = decode_image_base64(req.image_base64)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        if not validate_file_size(len(image_data), config.MAX_FILE_SIZE):
            raise HTTPException(
                status_code=413,
                detail=f"Image too large. Maximum {format_file_size(config.MAX_FILE_SIZE)}"
            )

    return await _run_analysis(service, req.text, req.language, image_data, req.context)


@router.post("/upload", response_model=AnalyzeResponse)
async def upload_and_analyze(
    text: str = Form(""),
    language: Language = Form(Language.ENGLISH),
    context: ContextType = Form(ContextType.GENERAL),
    file: UploadFile = File(...),
    service: InsightService = Depends(get_insight_service)
):
    """Upload a JPEG document photo and analyze it; the image part is always sent as image/jpeg."""
    if not validate_file_type(file.content_type, config.ALLOWED_IMAGE_TYPES):
        raise HTTPException(
            status_code=400,
            detail="Unsupported file type. Please upload a photo of the document."
        )

    file_bytes = await file.read()

    if not validate_file_size(len(file_bytes), config.MAX_FILE_SIZE):
        raise HTTPException(
            status_code=413,
            detail=f"File must be non-empty and at most {format_file_size(config.MAX_FILE_SIZE)}"
        )

    logger.info(f"Received upload {file.filename} ({format_file_size(len(file_bytes))})")
    return await _run_analysis(service, text, language, file_bytes, context)


@router.get("/languages", response_model=List[Language])
async def list_languages():
    """List supported response languages."""
    return list(Language)


@router.get("/contexts", response_model=List[ContextType])
async def list_contexts():
    """List context types."""
    return list(ContextType)


@router.get("/quick-actions", response_model=List[QuickAction])
async def list_quick_actions():
    """List the preset prompts offered on the dashboard."""
    return [QuickAction(**action) for action in QUICK_ACTIONS]
