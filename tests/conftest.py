"""
Pytest fixtures shared by the store, import/export and API tests
"""
import pytest
import requests
from fastapi.testclient import TestClient

from equiptrack import llm_engine
from equiptrack.data import seed_equipment
from equiptrack.main import create_app
from equiptrack.store import EquipmentStore


@pytest.fixture
def store():
    """Fresh store holding the demo records"""
    return EquipmentStore(seed_equipment())


@pytest.fixture
def client(store):
    return TestClient(create_app(store))


class FakeGroqResponse:
    def __init__(self, content=None, status_code=200, body=None):
        self.status_code = status_code
        self._body = body if body is not None else {"choices": [{"message": {"content": content}}]}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        return self._body


@pytest.fixture
def groq_reply(monkeypatch):
    """
    Replace the Groq HTTP call. Use as groq_reply(content=...) or
    groq_reply(error=SomeException()); sent payloads land in the returned list.
    """
    calls = []

    def install(content=None, status_code=200, body=None, error=None):
        def fake_post(url, headers=None, json=None, timeout=None):
            calls.append(json)
            if error is not None:
                raise error
            return FakeGroqResponse(content, status_code, body)
        monkeypatch.setattr(llm_engine.requests, "post", fake_post)
        return calls

    return install
