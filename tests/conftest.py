"""Shared fixtures: the app with the completion client swapped for a fake."""

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from cefr_chat.main import app, get_completion_client
from cefr_chat.openai_client import UpstreamError


class FakeCompletionClient:
    """Records every call; answers with a fixed reply or raises a fixed error."""

    def __init__(self, reply: str = "What city do you live in?", error: Optional[UpstreamError] = None):
        self.reply = reply
        self.error = error
        self.calls: List[List[Dict[str, str]]] = []

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_llm() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def client(fake_llm: FakeCompletionClient):
    app.dependency_overrides[get_completion_client] = lambda: fake_llm
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
