from __future__ import annotations

from pathlib import Path

import pytest
import requests
from fastapi.testclient import TestClient

from comment_store.app.core.config import settings
from comment_store.app.main import app


@pytest.fixture
def comments_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "comment.json"
    monkeypatch.setattr(settings, "comments_file", str(path))
    return path


@pytest.fixture
def client(comments_path: Path) -> TestClient:
    return TestClient(app)


@pytest.fixture
def sample_comment() -> dict:
    return {
        "id": "c-1",
        "file": "/a.ts",
        "type": "red underline",
        "content": "fix this",
        "anchor": {
            "startLineNumber": 1,
            "startColumn": 1,
            "endLineNumber": 1,
            "endColumn": 5,
            "text": "let x",
        },
    }


class InProcessSession:
    """Routes ``requests`` style calls into a FastAPI ``TestClient``."""

    def __init__(self, test_client: TestClient) -> None:
        self.test_client = test_client
        self.calls: list[tuple[str, str]] = []

    def request(self, method, url, json=None, timeout=None, **kwargs):
        self.calls.append((method, url))
        path = url.split("://", 1)[-1]
        path = path[path.index("/"):]
        result = self.test_client.request(method, path, json=json)
        response = requests.Response()
        response.status_code = result.status_code
        response._content = result.content
        response.url = url
        response.headers.update(result.headers)
        return response


@pytest.fixture
def store_session(client: TestClient) -> InProcessSession:
    return InProcessSession(client)
