import pytest
import requests
from requests.structures import CaseInsensitiveDict
from fastapi.testclient import TestClient

from relay_api import relay, settings, stations
from relay_api.main import app


class FakeResponse:
    def __init__(self, status=200, headers=None, chunks=(b"ID3", b"frames"), fail_after=None):
        self.status_code = status
        self.headers = CaseInsensitiveDict(headers or {})
        self.chunks = list(chunks)
        self.fail_after = fail_after
        self.closed = False

    def iter_content(self, chunk_size=1):
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i >= self.fail_after:
                raise requests.exceptions.ChunkedEncodingError("Connection broken")
            yield chunk

    def close(self):
        self.closed = True


class FakeUpstream:
    """Stands in for requests.get; unknown URLs refuse the connection."""

    def __init__(self):
        self.routes = {}
        self.calls = []
        self.kwargs = []
        self.opened = []

    def serve(self, url, status=200, headers=None, chunks=(b"ID3", b"frames"), fail_after=None):
        self.routes[url] = lambda: FakeResponse(status, headers, chunks, fail_after)

    def redirect(self, url, location, status=302):
        self.serve(url, status=status, headers={"Location": location}, chunks=())

    def fail(self, url, exc):
        self.routes[url] = exc

    def get(self, url, **kwargs):
        self.calls.append(url)
        self.kwargs.append(kwargs)
        route = self.routes.get(url)
        if route is None:
            raise requests.exceptions.ConnectionError(f"Connection refused: {url}")
        if isinstance(route, Exception):
            raise route
        resp = route()
        self.opened.append(resp)
        return resp


@pytest.fixture(autouse=True)
def builtin_stations(monkeypatch):
    monkeypatch.setattr(settings, "STATIONS_FILE", None)
    stations.load_stations(refresh=True)
    yield
    stations.STATIONS.clear()


@pytest.fixture
def upstream(monkeypatch):
    fake = FakeUpstream()
    monkeypatch.setattr(relay.requests, "get", fake.get)
    return fake


@pytest.fixture
def client():
    return TestClient(app)
