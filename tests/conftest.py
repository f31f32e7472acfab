"""
Pytest configuration and fixtures
"""
import os

import httpx
import pytest

# Keep tests on the local settings path (no Secret Manager)
os.environ["ENV"] = "DEV"
os.environ.setdefault("VIDYANAV_API_URL", "http://backend.test")

from app.server import app
from app.services.ai import VidyaNavClient
from app.singleton import get_vidyanav
from fastapi.testclient import TestClient

BACKEND_URL = "http://backend.test"


class FakeBackend:
    """Records the requests it gets and replies with a canned response."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.json = None
        self.text = None

    def reply_json(self, payload, status_code=200):
        self.json, self.text, self.status_code = payload, None, status_code

    def reply_text(self, text, status_code=200):
        self.json, self.text, self.status_code = None, text, status_code

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.json)


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def vidyanav(fake_backend):
    return VidyaNavClient(base_url=BACKEND_URL, timeout=5, transport=httpx.MockTransport(fake_backend))


@pytest.fixture
def client(vidyanav):
    app.dependency_overrides[get_vidyanav] = lambda: vidyanav
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()
