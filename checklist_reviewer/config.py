"""Configuration for the checklist code reviewer."""

from __future__ import annotations

import os
from dataclasses import dataclass

# ── Checklist ────────────────────────────────────────────────────────────────
CHECKLIST_FILENAME = ".aicodechecklist.json"

# Characters of source shown in the interactive transcript
SOURCE_PREVIEW_CHARS = 200

# ── Judge (chat completion endpoint) ─────────────────────────────────────────
API_KEY_ENV = "OPENAI_API_KEY"
MODEL_ENV = "CHECKLIST_REVIEW_MODEL"
API_URL_ENV = "CHECKLIST_REVIEW_API_URL"

JUDGE_API_URL = "https://api.openai.com/v1/chat/completions"
JUDGE_MODEL = "gpt-4o-mini"
JUDGE_TEMPERATURE = 0.1
JUDGE_TIMEOUT_SECONDS = 120.0

# ── Heuristic Audit ──────────────────────────────────────────────────────────
PACKAGE_MANIFEST = "package.json"

TEST_DIRECTORIES = ("test", "tests", "__tests__")
TEST_FRAMEWORK_DEPENDENCIES = ("jest", "mocha", "vitest")

# Upper bound on `npm run lint` / `npm test`
SCRIPT_TIMEOUT_SECONDS = 120

# Matched case-insensitively as plain substrings
SECRET_TOKENS = (
    "api_key",
    "api-key",
    "secret",
    "password",
    "passwd",
    "aws_secret",
    "aws_access",
    "SECRET_KEY",
    "PRIVATE_KEY",
    "TOKEN",
)
SECRET_SCAN_EXCLUDED_DIRS = frozenset({"node_modules", ".git"})
SECRET_SCAN_EXCLUDED_EXTENSIONS = frozenset(
    {".md", ".png", ".jpg", ".jpeg", ".gif", ".ico", ".bin"}
)
SECRET_SCAN_MAX_REPORTED = 5

FORMAT_CONFIG_FILES = (
    ".eslintrc",
    ".eslintrc.js",
    ".eslintrc.json",
    ".prettierrc",
    "ruff.toml",
    ".ruff.toml",
    ".flake8",
    ".pylintrc",
)
FORMAT_DEPENDENCIES = ("eslint", "prettier")

MANUAL_REVIEW_REASON = "Automated check not available; manual review recommended."

# ── Server Config ────────────────────────────────────────────────────────────
SERVER_NAME = "checklist-review-mcp"
SERVER_VERSION = "0.1.0"
SERVER_HOST = "127.0.0.1"
SERVER_PORT = 8089


@dataclass(frozen=True)
class JudgeSettings:
    """Runtime settings for the remote judge, resolved once per process."""

    api_key: str | None
    model: str = JUDGE_MODEL
    api_url: str = JUDGE_API_URL
    temperature: float = JUDGE_TEMPERATURE
    timeout: float = JUDGE_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "JudgeSettings":
        return cls(
            api_key=os.getenv(API_KEY_ENV) or None,
            model=os.getenv(MODEL_ENV) or JUDGE_MODEL,
            api_url=os.getenv(API_URL_ENV) or JUDGE_API_URL,
        )
