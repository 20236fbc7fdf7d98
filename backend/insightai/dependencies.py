"""
FastAPI dependencies exposing the objects held on ``app.state``.
"""
from fastapi import Request

from insightai.services.credentials import CredentialManager
from insightai.services.history import HistoryStore
from insightai.services.insight_service import InsightService


def get_insight_service(request: Request) -> InsightService:
    return request.app.state.insight_service


def get_history(request: Request) -> HistoryStore:
    return request.app.state.history


def get_credentials(request: Request) -> CredentialManager:
    return request.app.state.credentials
