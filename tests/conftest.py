from types import SimpleNamespace

import pytest

from canvaspilot.config import Settings


class FakeMessages:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=self.text)])


class FakeClient:
    def __init__(self, text=None, error=None):
        self.messages = FakeMessages(text=text, error=error)

    @property
    def calls(self):
        return self.messages.calls


@pytest.fixture
def settings():
    return Settings(api_key="test-key", model="test-model")


@pytest.fixture
def fake_client():
    def _make(text=None, error=None):
        return FakeClient(text=text, error=error)

    return _make
