"""Core review logic: the remote-judge review and the heuristic audit."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import httpx

from checklist_reviewer import llm
from checklist_reviewer.checks import ScriptRunner, audit_checklist
from checklist_reviewer.config import CHECKLIST_FILENAME, JudgeSettings
from checklist_reviewer.errors import ReviewError
from checklist_reviewer.llm_parsing import parse_verdicts, reconcile_verdicts
from checklist_reviewer.loader import load_checklist
from checklist_reviewer.models import AuditReport, ChecklistDocument, Verdict
from checklist_reviewer.presentation import Presenter
from checklist_reviewer.prompts import build_review_message
from checklist_reviewer.reporting import render_transcript, transcript_header

logger = logging.getLogger(__name__)

CHECKLIST_MISSING_MESSAGE = f"{CHECKLIST_FILENAME} not found in workspace root"
REVIEW_FAILED_MESSAGE = "Failed to run LLM review. See output for details."
REVIEW_COMPLETED_MESSAGE = "AI checklist review completed."


def review_source(
    source_text: str,
    checklist: ChecklistDocument,
    settings: JudgeSettings,
    client: Optional[httpx.Client] = None,
    reconcile: bool = True,
) -> list[Verdict]:
    """
    Judge source text against a checklist with one remote model call.

    Args:
        source_text: Full text of the document under review
        checklist: The loaded checklist
        settings: Judge credential and endpoint settings
        client: Optional httpx client (tests inject a mock transport)
        reconcile: Align the verdicts with the checklist items (see
                   reconcile_verdicts); when False the judge's list is
                   returned exactly as parsed

    Raises:
        ReviewError: On a missing credential, transport failure or an
                     unusable completion. Nothing is retried.
    """
    user_message = build_review_message(source_text, checklist)
    logger.info(
        "Reviewing %d chars against %d checklist items",
        len(source_text),
        len(checklist.item_ids()),
    )

    response_text = llm.invoke(
        user_message=user_message,
        settings=settings,
        tool="review_source",
        client=client,
    )
    verdicts = parse_verdicts(response_text)

    if reconcile:
        verdicts = reconcile_verdicts(verdicts, checklist)
    return verdicts


def review_document(
    file_path: Union[str, Path],
    workspace_root: Union[str, Path],
    settings: JudgeSettings,
    presenter: Presenter,
    client: Optional[httpx.Client] = None,
    checklist: Optional[ChecklistDocument] = None,
) -> Optional[list[Verdict]]:
    """
    Interactive review of one document, reported through a presenter.

    Returns the verdicts, or None when the run was aborted (unreadable file,
    missing checklist, or a review error). Failures are reported through the
    presenter, never raised. No network call is made unless a checklist was
    loaded.

    A caller that already holds the checklist passes it in; otherwise it is
    loaded from workspace_root.
    """
    try:
        source_text = Path(file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Cannot read %s: %s", file_path, e)
        presenter.show_error(f"Cannot read {file_path}: {e}")
        return None

    if checklist is None:
        checklist = load_checklist(workspace_root)
    if checklist is None:
        presenter.show_error(CHECKLIST_MISSING_MESSAGE)
        return None

    for line in transcript_header(file_path, checklist, source_text):
        presenter.append_transcript_line(line)
    presenter.reveal()

    try:
        verdicts = review_source(source_text, checklist, settings, client=client)
    except ReviewError as e:
        logger.error("LLM review failed for %s: %s", file_path, e)
        presenter.append_transcript_line(f"LLM error: {e}")
        presenter.show_error(REVIEW_FAILED_MESSAGE)
        return None

    presenter.append_transcript_line("")
    presenter.append_transcript_line("AI Checklist Results:")
    for line in render_transcript(verdicts):
        presenter.append_transcript_line(line)
    presenter.show_info(REVIEW_COMPLETED_MESSAGE)
    return verdicts


def audit_repository(
    root: Union[str, Path],
    runner: Optional[ScriptRunner] = None,
) -> Optional[AuditReport]:
    """
    Heuristic audit of a repository against its checklist.

    Returns None when the repository has no usable checklist.
    """
    root = Path(root)
    checklist = load_checklist(root)
    if checklist is None:
        return None

    report = audit_checklist(checklist, root, runner=runner)
    logger.info(
        "Audit of %s: %d items, %s",
        root,
        len(report.results),
        "failures found" if report.has_failures else "no failures",
    )
    return report
