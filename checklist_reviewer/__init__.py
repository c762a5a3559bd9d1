"""
Checklist Reviewer: checklist-driven code review.

Loads `.aicodechecklist.json` from a workspace root and produces one verdict
per checklist item, either from a remote chat-completion judge or from local
heuristics.
"""
from checklist_reviewer.analyzer import audit_repository, review_document, review_source
from checklist_reviewer.config import JudgeSettings
from checklist_reviewer.loader import load_checklist
from checklist_reviewer.models import (
    AuditReport,
    Category,
    ChecklistDocument,
    ChecklistItem,
    Verdict,
    VerdictStatus,
)

__all__ = [
    "AuditReport",
    "Category",
    "ChecklistDocument",
    "ChecklistItem",
    "JudgeSettings",
    "Verdict",
    "VerdictStatus",
    "audit_repository",
    "load_checklist",
    "review_document",
    "review_source",
]
