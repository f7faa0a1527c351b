"""
Shared fixtures for the Sentio test suite.
"""

import pytest

from sentio.core.config import InferenceConfig
from sentio.domain.lexicon import get_default_lexicon


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload=None, status_code=200, json_error=None):
        self._payload = payload
        self.status_code = status_code
        self._json_error = json_error

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


@pytest.fixture
def lexicon():
    return get_default_lexicon()


@pytest.fixture
def offline_config():
    return InferenceConfig(api_key="")


@pytest.fixture
def remote_config():
    return InferenceConfig(api_key="test-key", model="test/emotion-model", timeout=5.0)


@pytest.fixture
def fake_post(monkeypatch):
    """Patch requests.post and record every call made through it."""

    calls = []
    state = {"response": FakeResponse([]), "error": None}

    def _post(url, **kwargs):
        calls.append({"url": url, **kwargs})
        if state["error"] is not None:
            raise state["error"]
        return state["response"]

    monkeypatch.setattr("sentio.infra.inference_client.requests.post", _post)

    class Controller:
        def respond(self, payload=None, status_code=200, json_error=None):
            state["response"] = FakeResponse(payload, status_code, json_error)
            state["error"] = None

        def fail(self, error):
            state["error"] = error

        @property
        def calls(self):
            return calls

    return Controller()
