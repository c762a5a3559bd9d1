"""
Tests for the command-line entry points.
"""
import json
import os
import subprocess
import sys
from pathlib import Path

from conftest import write_checklist

PROJECT_ROOT = Path(__file__).parent.parent

TESTS_ONLY_CHECKLIST = {
    "version": "1",
    "categories": [{"name": "Tests", "items": [{"id": "test_exists", "description": "x"}]}],
}


def run_cli(*args, env=None):
    return subprocess.run(
        [sys.executable, "-m", "checklist_reviewer.cli", *args],
        capture_output=True,
        text=True,
        cwd=PROJECT_ROOT,
        env=env,
    )


def env_without_key():
    env = dict(os.environ)
    env.pop("OPENAI_API_KEY", None)
    return env


def test_audit_no_tests_exits_1(tmp_path):
    """No test directory and no package.json: test_exists fails."""
    write_checklist(tmp_path, TESTS_ONLY_CHECKLIST)
    result = run_cli("audit", str(tmp_path))

    assert result.returncode == 1
    out = json.loads(result.stdout)
    assert [(r["id"], r["status"]) for r in out["results"]] == [("test_exists", "Fail")]
    assert "One or more checks failed." in result.stderr


def test_audit_empty_tests_dir_exits_0(tmp_path):
    write_checklist(tmp_path, TESTS_ONLY_CHECKLIST)
    (tmp_path / "tests").mkdir()
    result = run_cli("audit", str(tmp_path))

    assert result.returncode == 0
    out = json.loads(result.stdout)
    assert [(r["id"], r["status"]) for r in out["results"]] == [("test_exists", "Pass")]


def test_audit_unknown_item_needs_attention(tmp_path):
    write_checklist(
        tmp_path,
        {"version": "1", "categories": [{"name": "Misc", "items": [{"id": "custom_x", "description": "x"}]}]},
    )
    result = run_cli("audit", str(tmp_path))

    assert result.returncode == 0
    (verdict,) = json.loads(result.stdout)["results"]
    assert verdict["id"] == "custom_x"
    assert verdict["status"] == "NeedsAttention"
    assert verdict["reason"] == "Automated check not available; manual review recommended."


def test_audit_missing_checklist_exits_2(tmp_path):
    result = run_cli("audit", str(tmp_path))
    assert result.returncode == 2
    assert result.stdout == ""
    assert ".aicodechecklist.json" in result.stderr


def test_review_missing_checklist_exits_2(tmp_path):
    source_file = tmp_path / "app.py"
    source_file.write_text("print('hi')\n")
    result = run_cli("review", str(source_file), "--root", str(tmp_path), env=env_without_key())
    assert result.returncode == 2


def test_review_without_credential_exits_1(tmp_path):
    write_checklist(tmp_path)
    source_file = tmp_path / "app.py"
    source_file.write_text("print('hi')\n")
    result = run_cli("review", str(source_file), "--root", str(tmp_path), env=env_without_key())

    assert result.returncode == 1
    assert "LLM error: OPENAI_API_KEY environment variable not set." in result.stdout
