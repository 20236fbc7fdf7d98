"""
History routes for InsightAI application.
"""
from fastapi import APIRouter, Depends, HTTPException
from typing import List
import logging

from insightai.dependencies import get_history
from insightai.models.insight import HistoryItem, HistoryStats
from insightai.services.history import HistoryStore

logger = logging.getLogger("insightai.routes.history")

router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=List[HistoryItem])
async def list_history(history: HistoryStore = Depends(get_history)):
    """Get past insights, newest first."""
    return history.all()


@router.get("/stats", response_model=HistoryStats)
async def history_stats(history: HistoryStore = Depends(get_history)):
    """Count past insights per context."""
    counts = history.stats()
    return HistoryStats(total=sum(counts.values()), by_context=counts)


@router.get("/{item_id}", response_model=HistoryItem)
async def get_history_item(item_id: str, history: HistoryStore = Depends(get_history)):
    """Get a single past insight."""
    item = history.get(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="History item not found")
    return item


@router.delete("")
async def clear_history(history: HistoryStore = Depends(get_history)):
    """Delete all past insights."""
    history.clear()
    return {"message": "History cleared"}
