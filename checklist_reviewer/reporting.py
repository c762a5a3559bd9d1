"""Rendering of verdicts into transcript lines and JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Union

from checklist_reviewer.config import SOURCE_PREVIEW_CHARS
from checklist_reviewer.models import ChecklistDocument, Verdict

TRANSCRIPT_TITLE = "AI Checklist Review"


def format_verdict_line(verdict: Verdict) -> str:
    """One transcript line: status, category, priority, id and reason."""
    return (
        f"- [{verdict.status}] "
        f"({verdict.category or 'Unknown'} / {verdict.priority or '-'}) "
        f"{verdict.id}: {verdict.reason}"
    )


def render_transcript(verdicts: list[Verdict]) -> list[str]:
    return [format_verdict_line(v) for v in verdicts]


def verdicts_to_json(verdicts: list[Verdict], indent: int = 2) -> str:
    return json.dumps([v.to_dict() for v in verdicts], indent=indent)


def transcript_header(
    file_path: Union[str, Path], checklist: ChecklistDocument, source_text: str
) -> list[str]:
    """Lines written before the judge is called: file, checklist dump and a source preview."""
    return [
        TRANSCRIPT_TITLE,
        "=" * len(TRANSCRIPT_TITLE),
        f"File: {file_path}",
        "",
        "Loaded checklist:",
        checklist.to_json(indent=2),
        "",
        f"Code preview (first {SOURCE_PREVIEW_CHARS} chars):",
        source_text[:SOURCE_PREVIEW_CHARS],
        "",
        "Running LLM review...",
    ]
