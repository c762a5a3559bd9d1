"""
Tests for judge response parsing and reconciliation.
"""
import pytest

from checklist_reviewer.errors import JudgeResponseError
from checklist_reviewer.llm_parsing import (
    MISSING_VERDICT_REASON,
    parse_verdicts,
    reconcile_verdicts,
    strip_code_fence,
)
from checklist_reviewer.models import Verdict, VerdictStatus

PAYLOAD = '[{"id":"a","status":"Pass","reason":"ok"}]'


@pytest.mark.parametrize(
    "text",
    [
        PAYLOAD,
        f"```json\n{PAYLOAD}\n```",
        f"```\n{PAYLOAD}\n```",
        f"  ```json\n{PAYLOAD}\n```  \n",
        f"```{PAYLOAD}```",
    ],
)
def test_strip_code_fence_variants(text):
    assert strip_code_fence(text) == PAYLOAD


def test_strip_code_fence_is_idempotent():
    once = strip_code_fence(f"```json\n{PAYLOAD}\n```")
    assert strip_code_fence(once) == once


def test_closing_fence_kept_without_opening_fence():
    assert strip_code_fence("[1]\n```") == "[1]\n```"


def test_fenced_and_plain_parse_to_same_verdicts():
    plain = parse_verdicts(PAYLOAD)
    assert parse_verdicts(f"```json\n{PAYLOAD}\n```") == plain
    assert parse_verdicts(f"```\n{PAYLOAD}\n```") == plain


def test_parse_fenced_judge_output():
    verdicts = parse_verdicts('```json\n[{"id":"a","status":"Pass","reason":"ok"}]\n```')
    assert verdicts == [Verdict(id="a", status=VerdictStatus.PASS, reason="ok")]
    assert verdicts[0].to_dict() == {"id": "a", "status": "Pass", "reason": "ok"}


def test_parse_keeps_category_and_priority():
    verdicts = parse_verdicts(
        '[{"id":"sec","status":"Fail","reason":"key in source",'
        '"category":"Security","priority":"Critical"}]'
    )
    assert verdicts[0].status == VerdictStatus.FAIL
    assert verdicts[0].category == "Security"
    assert verdicts[0].priority == "Critical"


def test_parse_does_not_check_ids_against_checklist():
    verdicts = parse_verdicts('[{"id":"invented","status":"NeedsAttention","reason":"?"}]')
    assert [v.id for v in verdicts] == ["invented"]


def test_malformed_json_reports_raw_text():
    raw = "Sure! Here are the results: [{id: a}]"
    with pytest.raises(JudgeResponseError) as exc_info:
        parse_verdicts(raw)
    assert raw in str(exc_info.value)
    assert exc_info.value.raw_text == raw


def test_malformed_json_inside_fence_reports_unfenced_text():
    with pytest.raises(JudgeResponseError) as exc_info:
        parse_verdicts("```json\n[{broken\n```")
    assert exc_info.value.raw_text == "[{broken"
    assert "[{broken" in str(exc_info.value)


def test_empty_response_is_an_error():
    with pytest.raises(JudgeResponseError):
        parse_verdicts("")


@pytest.mark.parametrize(
    "text",
    [
        '{"id":"a","status":"Pass","reason":"ok"}',
        '["a"]',
        '[{"status":"Pass","reason":"ok"}]',
        '[{"id":"a","reason":"ok"}]',
        '[{"id":"a","status":"Pass"}]',
        '[{"id":"a","status":"Maybe","reason":"ok"}]',
        '[{"id":"a","status":"pass","reason":"ok"}]',
        '[{"id":"a","status":"Pass","reason":"ok","priority":3}]',
    ],
)
def test_shape_violations_raise_typed_error(text):
    with pytest.raises(JudgeResponseError) as exc_info:
        parse_verdicts(text)
    assert exc_info.value.raw_text == text


def test_reconcile_fills_missing_drops_unknown_and_keeps_order(checklist):
    judged = [
        Verdict("custom_x", VerdictStatus.PASS, "consistent"),
        Verdict("made_up", VerdictStatus.FAIL, "not in checklist"),
        Verdict("test_exists", VerdictStatus.FAIL, "no tests", category="Judge says"),
    ]
    reconciled = reconcile_verdicts(judged, checklist)

    assert [v.id for v in reconciled] == checklist.item_ids()
    by_id = {v.id: v for v in reconciled}
    assert by_id["custom_x"].status == VerdictStatus.PASS
    assert by_id["custom_x"].category == "Readability"
    assert by_id["custom_x"].priority is None
    assert by_id["test_exists"].category == "Judge says"
    assert by_id["test_exists"].priority == "High"
    assert by_id["sec_secrets"].status == VerdictStatus.NEEDS_ATTENTION
    assert by_id["sec_secrets"].reason == MISSING_VERDICT_REASON
    assert by_id["sec_secrets"].priority == "Critical"


def test_reconcile_last_duplicate_wins(checklist):
    judged = [
        Verdict("custom_x", VerdictStatus.PASS, "first"),
        Verdict("custom_x", VerdictStatus.FAIL, "second"),
    ]
    reconciled = {v.id: v for v in reconcile_verdicts(judged, checklist)}
    assert reconciled["custom_x"].reason == "second"
