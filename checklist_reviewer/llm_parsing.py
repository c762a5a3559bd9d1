"""Turn a completion into validated Verdict objects."""

from __future__ import annotations

import json
import logging
import re

from checklist_reviewer.errors import JudgeResponseError
from checklist_reviewer.models import ChecklistDocument, Verdict, VerdictStatus

logger = logging.getLogger(__name__)

MISSING_VERDICT_REASON = "Judge returned no verdict for this item."

_OPENING_FENCE_INLINE = re.compile(r"^```[\w+-]*\s*")


def strip_code_fence(text: str) -> str:
    """Strip a markdown code fence (```...```) wrapped around LLM response text.

    Handles an opening fence with or without a language tag, a closing fence,
    and text with no fence at all. The closing fence is only removed when an
    opening fence was found. Unfenced text is returned trimmed and otherwise
    unchanged, so stripping twice gives the same result as stripping once.
    """
    cleaned = text.strip()

    if not cleaned.startswith("```"):
        return cleaned

    newline_pos = cleaned.find("\n")
    if newline_pos == -1:
        # Single-line payload such as ```[...]```
        cleaned = _OPENING_FENCE_INLINE.sub("", cleaned, count=1)
    else:
        cleaned = cleaned[newline_pos + 1 :]

    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]

    return cleaned.strip()


def parse_verdicts(response_text: str) -> list[Verdict]:
    """Parse a judge completion into a list of verdicts.

    The completion must be (optionally fenced) JSON: an array of objects with
    string ``id`` and ``reason`` and a ``status`` of Pass, Fail or
    NeedsAttention. Anything else raises JudgeResponseError carrying the
    unfenced text. Ids are not checked against the checklist here; see
    reconcile_verdicts.
    """
    cleaned = strip_code_fence(response_text)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse judge response as JSON: %s", e)
        raise JudgeResponseError(
            f"Failed to parse LLM JSON: {cleaned}", raw_text=cleaned
        ) from e

    if not isinstance(data, list):
        raise JudgeResponseError(
            f"Expected a JSON array of verdicts, got {type(data).__name__}: {cleaned}",
            raw_text=cleaned,
        )

    return [_verdict_from_dict(entry, index, cleaned) for index, entry in enumerate(data)]


def _verdict_from_dict(entry: object, index: int, raw_text: str) -> Verdict:
    """Convert one raw array element to a Verdict, rejecting malformed entries."""
    if not isinstance(entry, dict):
        raise JudgeResponseError(
            f"Verdict #{index} is not an object: {entry!r}", raw_text=raw_text
        )

    for key in ("id", "status", "reason"):
        if not isinstance(entry.get(key), str):
            raise JudgeResponseError(
                f"Verdict #{index} is missing string field '{key}': {entry!r}",
                raw_text=raw_text,
            )

    try:
        status = VerdictStatus(entry["status"])
    except ValueError as e:
        raise JudgeResponseError(
            f"Verdict '{entry['id']}' has unknown status '{entry['status']}'",
            raw_text=raw_text,
        ) from e

    for key in ("category", "priority"):
        value = entry.get(key)
        if value is not None and not isinstance(value, str):
            raise JudgeResponseError(
                f"Verdict '{entry['id']}' has non-string '{key}': {value!r}",
                raw_text=raw_text,
            )

    return Verdict(
        id=entry["id"],
        status=status,
        reason=entry["reason"],
        category=entry.get("category"),
        priority=entry.get("priority"),
    )


def reconcile_verdicts(
    verdicts: list[Verdict], checklist: ChecklistDocument
) -> list[Verdict]:
    """Align judge verdicts with the checklist: one verdict per item, in order.

    Items the judge skipped become NeedsAttention, ids the checklist does not
    contain are dropped, and missing category/priority are copied from the
    checklist. When the judge repeats an id, the last verdict wins.
    """
    by_id: dict[str, Verdict] = {}
    for v in verdicts:
        if not checklist.has_item(v.id):
            logger.warning("Dropping verdict for unknown checklist id '%s'", v.id)
            continue
        if v.id in by_id:
            logger.warning("Judge returned more than one verdict for '%s'", v.id)
        by_id[v.id] = v

    reconciled: list[Verdict] = []
    for category in checklist.categories:
        for item in category.items:
            v = by_id.get(item.id)
            if v is None:
                logger.warning("Judge returned no verdict for '%s'", item.id)
                v = Verdict(
                    id=item.id,
                    status=VerdictStatus.NEEDS_ATTENTION,
                    reason=MISSING_VERDICT_REASON,
                )
            reconciled.append(
                Verdict(
                    id=v.id,
                    status=v.status,
                    reason=v.reason,
                    category=v.category or category.name,
                    priority=v.priority or category.priority,
                )
            )

    return reconciled
