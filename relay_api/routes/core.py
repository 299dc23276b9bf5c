from datetime import datetime, timezone
from typing import Optional
import logging

from fastapi import APIRouter, HTTPException, Request

from ..models import HealthStatus
from ..relay import commit_response, open_first
from ..utils import candidates_for, is_stream_url

logger = logging.getLogger(__name__)

router = APIRouter(tags=["relay"])

@router.get("/health", response_model=HealthStatus)
@router.get("/api/health", response_model=HealthStatus)
def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

@router.api_route("/stream", methods=["GET", "HEAD"])
@router.api_route("/api/radio-stream", methods=["GET", "HEAD"])
async def radio_stream(request: Request, url: Optional[str] = None):
    if url and not is_stream_url(url):
        raise HTTPException(status_code=400, detail="url must be an absolute http(s) URL")

    candidates = candidates_for(url)
    attempt = await open_first(candidates, is_disconnected=request.is_disconnected)
    if attempt is None:
        raise HTTPException(status_code=503, detail="All stream sources unavailable")

    logger.info("Relaying %s", attempt.redirected_to or attempt.url)
    return commit_response(attempt, head=request.method == "HEAD")
