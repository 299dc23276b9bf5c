from pathlib import Path
from typing import Dict, List, Optional
import json, logging

from pydantic import ValidationError

from . import settings
from .models import Station

logger = logging.getLogger(__name__)

SOMAFM_METAL = "https://ice1.somafm.com/metal-128-mp3"

BUILTIN_STATIONS: List[Station] = [
    Station(
        name="KBFB 97.9 The Beat",
        url="https://playerservices.streamtheworld.com/api/livestream-redirect/KBFBFMAAC.aac",
        fallbacks=[
            "https://24883.live.streamtheworld.com/KBFBFMAAC",
            "https://14923.live.streamtheworld.com/KBFBFMAAC",
            "https://playerservices.streamtheworld.com/api/livestream-redirect/KBFBFM.mp3",
            SOMAFM_METAL,
        ],
    ),
    Station(
        name="Hot 97",
        url="https://playerservices.streamtheworld.com/api/livestream-redirect/WQHTFMAAC.aac",
        fallbacks=[
            "https://n07.radiojar.com/4wqmj9krs5mtv",
            "https://n1ca-ice-cast.streamon.fm/Hot97_SC",
            "https://playerservices.streamtheworld.com/api/livestream-redirect/WQHTFM.mp3",
            SOMAFM_METAL,
        ],
    ),
    Station(
        name="Power 106",
        url="https://playerservices.streamtheworld.com/api/livestream-redirect/KPWRFMAAC.aac",
        fallbacks=[
            "https://n30.radiojar.com/ggd4cs6rs5mtv",
            "https://playerservices.streamtheworld.com/api/livestream-redirect/KPWRFM.mp3",
            SOMAFM_METAL,
        ],
    ),
    Station(
        name="SomaFM Metal Detector",
        url=SOMAFM_METAL,
        fallbacks=[
            "https://ice1.somafm.com/metal-128-mp3",
            "https://ice2.somafm.com/metal-128-mp3",
            "https://ice6.somafm.com/metal-128-mp3",
        ],
    ),
]

# In-memory registry, keyed by primary URL
STATIONS: Dict[str, Station] = {}

def _read_station_file(path: Path) -> Optional[List[Station]]:
    try:
        raw = json.loads(path.read_text())
    except (OSError, ValueError) as e:
        logger.warning("Cannot read stations file %s: %s", path, e)
        return None
    if not isinstance(raw, list) or not raw:
        logger.warning("Stations file %s must hold a non-empty JSON list", path)
        return None
    try:
        return [Station.model_validate(item) for item in raw]
    except ValidationError as e:
        logger.warning("Invalid station in %s: %s", path, e)
        return None

def load_stations(refresh: bool = False) -> Dict[str, Station]:
    if STATIONS and not refresh:
        return STATIONS

    stations = None
    if settings.STATIONS_FILE:
        stations = _read_station_file(Path(settings.STATIONS_FILE))
    if stations is None:
        stations = BUILTIN_STATIONS

    STATIONS.clear()
    for st in stations:
        STATIONS[st.url] = st
    logger.info("Loaded %d stations", len(STATIONS))
    return STATIONS

def get_station(url: str) -> Optional[Station]:
    return load_stations().get(url)

def default_station() -> Station:
    """Station named by DEFAULT_STATION_URL, else the first one registered."""
    stations = load_stations()
    st = stations.get(settings.DEFAULT_STATION_URL)
    if st is None:
        st = next(iter(stations.values()))
    return st
