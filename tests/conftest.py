"""
Pytest fixtures for checklist reviewer tests.

Provides checklist documents, throwaway repositories and a mock judge endpoint.
"""
import json

import httpx
import pytest

from checklist_reviewer.config import CHECKLIST_FILENAME, JudgeSettings
from checklist_reviewer.models import ChecklistDocument


SAMPLE_CHECKLIST = {
    "version": "1",
    "categories": [
        {
            "name": "Tests",
            "priority": "High",
            "items": [
                {"id": "test_exists", "description": "Unit tests exist"},
                {"id": "test_checks", "description": "Lint and tests pass"},
            ],
        },
        {
            "name": "Security",
            "priority": "Critical",
            "items": [
                {"id": "sec_secrets", "description": "No hardcoded credentials"},
            ],
        },
        {
            "name": "Readability",
            "items": [
                {"id": "read_format", "description": "Formatter configured"},
                {"id": "custom_x", "description": "Naming is consistent"},
            ],
        },
    ],
}


def write_checklist(root, data=None):
    """Write a checklist file at root and return its path."""
    path = root / CHECKLIST_FILENAME
    path.write_text(json.dumps(SAMPLE_CHECKLIST if data is None else data))
    return path


def completion(content, status_code=200):
    """Chat-completion response envelope carrying ``content``."""
    return httpx.Response(
        status_code,
        json={
            "choices": [{"message": {"role": "assistant", "content": content}}],
            "usage": {"prompt_tokens": 120, "completion_tokens": 30},
        },
    )


@pytest.fixture
def checklist_data():
    return json.loads(json.dumps(SAMPLE_CHECKLIST))


@pytest.fixture
def checklist(checklist_data):
    return ChecklistDocument.from_dict(checklist_data)


@pytest.fixture
def repo(tmp_path):
    """Empty repository with the sample checklist at its root."""
    write_checklist(tmp_path)
    return tmp_path


@pytest.fixture
def settings():
    return JudgeSettings(api_key="sk-test", api_url="https://judge.example/v1/chat/completions")


@pytest.fixture
def judge():
    """Mock judge endpoint. Set ``judge.reply`` to an httpx.Response; requests are recorded."""

    class Judge:
        def __init__(self):
            self.requests = []
            self.reply = completion("[]")

        def handler(self, request):
            self.requests.append(request)
            return self.reply

        def client(self):
            return httpx.Client(transport=httpx.MockTransport(self.handler))

    return Judge()
