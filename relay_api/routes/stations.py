from typing import List, Optional

from fastapi import APIRouter, HTTPException

from ..models import CandidateList, ProbeReport, ProbeResult, Station
from ..relay import probe
from ..stations import default_station, get_station, load_stations
from ..utils import candidates_for, is_stream_url

router = APIRouter(prefix="/api/radio-stations", tags=["stations"])

def _checked(url: Optional[str]) -> Optional[str]:
    if url and not is_stream_url(url):
        raise HTTPException(status_code=400, detail="url must be an absolute http(s) URL")
    return url

@router.get("", response_model=List[Station])
def list_stations():
    return list(load_stations().values())

@router.get("/candidates", response_model=CandidateList)
def preview_candidates(url: Optional[str] = None):
    """Candidate order the relay would walk for this url. No upstream I/O."""
    url = _checked(url)
    st = get_station(url) if url else default_station()
    return CandidateList(url=url, station=st.name if st else None, candidates=candidates_for(url))

@router.get("/probe", response_model=ProbeReport)
def probe_candidates(url: Optional[str] = None):
    url = _checked(url)
    results = [
        ProbeResult(
            cursor=a.cursor,
            url=a.url,
            ok=a.ok,
            status=a.status,
            redirected_to=a.redirected_to,
            error=a.error,
        )
        for a in probe(candidates_for(url))
    ]
    first_ok = next((r.cursor for r in results if r.ok), None)
    return ProbeReport(url=url, first_ok=first_ok, results=results)
