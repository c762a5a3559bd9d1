"""MCP tool definitions for the checklist reviewer."""

from __future__ import annotations

import asyncio
import json
import logging
import traceback

from fastmcp import FastMCP

from checklist_reviewer.analyzer import audit_repository as _audit_repository
from checklist_reviewer.analyzer import review_document as _review_document
from checklist_reviewer.config import CHECKLIST_FILENAME, JudgeSettings
from checklist_reviewer.loader import load_checklist
from checklist_reviewer.presentation import TranscriptPresenter

logger = logging.getLogger(__name__)


def _error_response(tool_name: str, error: Exception) -> str:
    """Build a structured JSON error response for MCP tool failures."""
    logger.error("Tool %s failed: %s\n%s", tool_name, error, traceback.format_exc())
    return json.dumps(
        {
            "status": "error",
            "summary": f"Tool '{tool_name}' failed: {error}",
            "results": [],
            "error": str(error),
        },
        indent=2,
    )


def checklist_missing_response(root: str) -> str:
    """Error payload for a workspace without a usable checklist."""
    message = f"{CHECKLIST_FILENAME} not found in {root}"
    logger.warning("get_checklist: %s", message)
    return json.dumps(
        {
            "status": "error",
            "summary": f"Tool 'get_checklist' failed: {message}",
            "results": [],
            "error": message,
        },
        indent=2,
    )


def review_file_payload(
    file_path: str, workspace_root: str, settings: JudgeSettings
) -> dict:
    """Run an interactive review and package the transcript as a tool result."""
    presenter = TranscriptPresenter()
    verdicts = _review_document(
        file_path,
        workspace_root,
        settings=settings,
        presenter=presenter,
    )
    return {
        "status": "ok" if verdicts is not None else "error",
        "results": [v.to_dict() for v in verdicts or []],
        "messages": presenter.infos + presenter.errors,
        "transcript": presenter.transcript,
    }


def audit_repository_payload(root: str) -> dict:
    report = _audit_repository(root)
    if report is None:
        return {
            "status": "error",
            "results": [],
            "error": f"{CHECKLIST_FILENAME} not found in {root}",
            "exit_code": 2,
        }
    return {
        "status": "ok",
        "results": report.to_dict()["results"],
        "exit_code": report.exit_code,
    }


def register_tools(mcp: FastMCP, settings: JudgeSettings) -> None:
    """Register all review tools on the given FastMCP server instance."""

    @mcp.tool()
    async def review_file(file_path: str, workspace_root: str) -> str:
        """Review one source file against the workspace checklist with the LLM judge.

        Loads `.aicodechecklist.json` from the workspace root, sends the file
        and the checklist to the judge in a single request, and returns one
        verdict (Pass, Fail or NeedsAttention) per checklist item together
        with the review transcript.

        Args:
            file_path: Path of the file to review
            workspace_root: Directory holding `.aicodechecklist.json`
        """
        try:
            payload = await asyncio.to_thread(
                review_file_payload, file_path, workspace_root, settings
            )
            return json.dumps(payload, indent=2)
        except Exception as e:
            return _error_response("review_file", e)

    @mcp.tool()
    async def audit_repository(root: str) -> str:
        """Run the local heuristic audit of a repository against its checklist.

        Checks for tests, runs the lint or test script, greps for secrets and
        looks for formatter configuration. Every other checklist item is
        flagged for manual review. `exit_code` is 1 when any item failed.

        Args:
            root: Repository root holding `.aicodechecklist.json`
        """
        try:
            payload = await asyncio.to_thread(audit_repository_payload, root)
            return json.dumps(payload, indent=2)
        except Exception as e:
            return _error_response("audit_repository", e)

    @mcp.tool()
    def get_checklist(root: str) -> str:
        """Return the checklist found at a workspace root as JSON.

        Args:
            root: Directory holding `.aicodechecklist.json`
        """
        checklist = load_checklist(root)
        if checklist is None:
            return checklist_missing_response(root)
        return checklist.to_json()
