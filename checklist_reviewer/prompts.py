"""Review instruction builder for the remote judge."""

from __future__ import annotations

from checklist_reviewer.models import ChecklistDocument

# ── Persona ──────────────────────────────────────────────────────────────────

REVIEWER_PERSONA = "You are a senior software engineer doing a strict code review."

# ── Output directive ─────────────────────────────────────────────────────────

OUTPUT_FORMAT = """For EACH checklist item, decide:
- status: "Pass", "Fail", or "NeedsAttention"
- reason: short explanation (one or two sentences)

Return ONLY a JSON array with exactly one object per checklist item, using these exact field names:
[
  {
    "id": "func_req",
    "status": "Pass",
    "reason": "Explanation.",
    "category": "Functionality & Logic",
    "priority": "Critical"
  }
]"""


def build_review_message(source_text: str, checklist: ChecklistDocument) -> str:
    """Build the single user message carrying the whole review task.

    Args:
        source_text: Full text of the document under review, embedded verbatim.
        checklist: The loaded checklist, embedded as indented JSON.
    """
    parts = [
        REVIEWER_PERSONA,
        "",
        "Here is the code to review:",
        "---",
        source_text,
        "---",
        "",
        "Here is a JSON checklist of review items:",
        "---",
        checklist.to_json(indent=2),
        "---",
        "",
        OUTPUT_FORMAT,
    ]
    return "\n".join(parts) + "\n"
