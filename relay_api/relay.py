"""
Live stream relay.

A request walks its candidate list with a cursor, one upstream connection at
a time, and commits to the first candidate answering 200 (directly or after a
single 301/302 hop). Once bytes flow to the client the relay never switches
sources; an upstream failure mid-stream just ends the response.
"""
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterator, List, Optional
from urllib.parse import urljoin
import logging

import requests
from fastapi.responses import Response, StreamingResponse
from starlette.concurrency import run_in_threadpool

from . import settings

logger = logging.getLogger(__name__)

REDIRECT_STATUSES = (301, 302)
MEDIA_TYPE = "audio/mpeg"
STREAM_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET",
    "Cache-Control": "no-cache",
    "Accept-Ranges": "bytes",
}

@dataclass
class Attempt:
    cursor: int
    url: str
    status: Optional[int] = None
    redirected_to: Optional[str] = None
    error: Optional[str] = None
    ok: bool = False
    response: Optional[requests.Response] = None

    def close(self):
        if self.response is not None:
            self.response.close()
            self.response = None

def _get(url: str) -> requests.Response:
    return requests.get(
        url,
        stream=True,
        allow_redirects=False,
        timeout=(settings.RELAY_CONNECT_TIMEOUT, settings.RELAY_READ_TIMEOUT),
        headers={"User-Agent": settings.RELAY_USER_AGENT, "Accept": "*/*"},
    )

def try_candidate(url: str, cursor: int = 0) -> Attempt:
    """One attempt: GET the candidate, following at most one redirect."""
    attempt = Attempt(cursor=cursor, url=url)
    n = cursor + 1
    logger.info("Trying radio stream %d: %s", n, url)
    try:
        resp = _get(url)
        attempt.status = resp.status_code
        location = resp.headers.get("Location")
        if resp.status_code in REDIRECT_STATUSES and location:
            resp.close()
            attempt.redirected_to = urljoin(url, location)
            logger.info("Stream %d redirected to: %s", n, attempt.redirected_to)
            # The follow-up is never redirected again
            resp = _get(attempt.redirected_to)
            attempt.status = resp.status_code

        if resp.status_code == 200:
            attempt.ok = True
            attempt.response = resp
            logger.info("Stream %d connected%s", n, " via redirect" if attempt.redirected_to else "")
        else:
            resp.close()
            attempt.error = f"HTTP {resp.status_code}"
            logger.warning("Stream %d failed with status %s", n, resp.status_code)
    except requests.RequestException as e:
        attempt.error = str(e) or e.__class__.__name__
        logger.warning("Stream %d request error: %s", n, attempt.error)
    return attempt

async def open_first(
    candidates: List[str],
    is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
) -> Optional[Attempt]:
    """Return the first working candidate, or None when the list is exhausted
    or the client went away first."""
    for cursor, url in enumerate(candidates):
        if is_disconnected is not None and await is_disconnected():
            logger.info("Client left before stream %d was tried", cursor + 1)
            return None
        attempt = await run_in_threadpool(try_candidate, url, cursor)
        if not attempt.ok:
            continue
        if is_disconnected is not None and await is_disconnected():
            logger.info("Client left while stream %d was connecting", cursor + 1)
            attempt.close()
            return None
        return attempt

    logger.warning("All %d stream sources unavailable", len(candidates))
    return None

def iter_body(attempt: Attempt) -> Iterator[bytes]:
    resp = attempt.response
    try:
        for chunk in resp.iter_content(chunk_size=settings.RELAY_CHUNK_SIZE):
            if chunk:
                yield chunk
    except requests.RequestException as e:
        # Headers are committed; the session simply ends here.
        logger.warning("Stream %d dropped mid-stream: %s", attempt.cursor + 1, e)
    finally:
        attempt.close()

def commit_response(attempt: Attempt, head: bool = False) -> Response:
    """Build the client response for a connected attempt."""
    headers = dict(STREAM_HEADERS)
    if head:
        attempt.close()
        return Response(status_code=200, headers=headers, media_type=MEDIA_TYPE)
    return StreamingResponse(iter_body(attempt), status_code=200, media_type=MEDIA_TYPE, headers=headers)

def probe(candidates: List[str]) -> List[Attempt]:
    """Try every candidate once and close it again. Diagnostics only."""
    attempts = []
    for cursor, url in enumerate(candidates):
        attempt = try_candidate(url, cursor)
        attempt.close()
        attempts.append(attempt)
    return attempts
