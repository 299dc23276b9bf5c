from typing import List, Optional
from pydantic import BaseModel

class Station(BaseModel):
    name: str
    url: str                 # primary stream URL, also the registry key
    fallbacks: List[str] = []  # ordered; last entry is the last-resort stream

class CandidateList(BaseModel):
    url: Optional[str] = None
    station: Optional[str] = None
    candidates: List[str]

class ProbeResult(BaseModel):
    cursor: int
    url: str
    ok: bool
    status: Optional[int] = None
    redirected_to: Optional[str] = None
    error: Optional[str] = None

class ProbeReport(BaseModel):
    url: Optional[str] = None
    first_ok: Optional[int] = None
    results: List[ProbeResult]

class HealthStatus(BaseModel):
    status: str
    timestamp: str
