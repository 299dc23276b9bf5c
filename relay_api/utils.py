from typing import List, Optional
from urllib.parse import urlsplit, urlunsplit
import time

from . import settings
from .stations import get_station, default_station

def is_stream_url(url: str) -> bool:
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)

def cache_busted(url: str, now_ms: Optional[int] = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    parts = urlsplit(url)
    query = f"{parts.query}&nocache={now_ms}" if parts.query else f"nocache={now_ms}"
    return urlunsplit(parts._replace(query=query))

def mp3_variant(url: str) -> str:
    """Swap a trailing .aac for .mp3, or append .mp3 to the path."""
    parts = urlsplit(url)
    path = parts.path
    if path.lower().endswith(".aac"):
        path = path[:-4] + ".mp3"
    elif not path.lower().endswith(".mp3"):
        path = path + ".mp3"
    return urlunsplit(parts._replace(path=path))

def candidates_for(requested: Optional[str]) -> List[str]:
    """Ordered upstream candidates for one relay request."""
    if not requested:
        st = default_station()
        return [st.url, *st.fallbacks]

    st = get_station(requested)
    if st is not None:
        return list(st.fallbacks) or [st.url]

    return [
        requested,
        cache_busted(requested),
        mp3_variant(requested),
        settings.LAST_RESORT_STREAM,
    ]
