"""
API key selection routes for InsightAI application.
"""
from fastapi import APIRouter, Depends
import logging

from insightai.dependencies import get_credentials
from insightai.models.insight import CredentialSelection, CredentialStatus
from insightai.services.credentials import CredentialManager

logger = logging.getLogger("insightai.routes.credentials")

router = APIRouter(prefix="/credentials", tags=["credentials"])


@router.get("/status", response_model=CredentialStatus)
async def credential_status(credentials: CredentialManager = Depends(get_credentials)):
    """Report whether an API key is available."""
    return CredentialStatus(
        has_selected_api_key=await credentials.has_selected_api_key(),
        configured=credentials.configured
    )


@router.post("/select", response_model=CredentialStatus)
async def select_key(
    selection: CredentialSelection,
    credentials: CredentialManager = Depends(get_credentials)
):
    """Select the API key for this session."""
    await credentials.open_select_key(selection.api_key)
    return CredentialStatus(
        has_selected_api_key=await credentials.has_selected_api_key(),
        configured=credentials.configured
    )
