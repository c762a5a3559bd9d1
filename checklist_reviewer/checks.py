"""Local heuristic checks run by the repository audit."""

from __future__ import annotations

import json
import logging
import os
import subprocess
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from checklist_reviewer.config import (
    CHECKLIST_FILENAME,
    FORMAT_CONFIG_FILES,
    FORMAT_DEPENDENCIES,
    MANUAL_REVIEW_REASON,
    PACKAGE_MANIFEST,
    SCRIPT_TIMEOUT_SECONDS,
    SECRET_SCAN_EXCLUDED_DIRS,
    SECRET_SCAN_EXCLUDED_EXTENSIONS,
    SECRET_SCAN_MAX_REPORTED,
    SECRET_TOKENS,
    TEST_DIRECTORIES,
    TEST_FRAMEWORK_DEPENDENCIES,
)
from checklist_reviewer.models import (
    AuditReport,
    ChecklistDocument,
    Verdict,
    VerdictStatus,
)

logger = logging.getLogger(__name__)

# Type alias for script runners: (argv, cwd) -> None, raising on failure
ScriptRunner = Callable[[list[str], Path], None]


def run_script(command: list[str], cwd: Path) -> None:
    """Run a package script with a fixed timeout.

    stdin and stderr are inherited; the script's stdout is sent to our
    stderr so stdout stays reserved for the audit report.

    Raises CalledProcessError on a non-zero exit, TimeoutExpired when the
    timeout elapses and OSError when the executable cannot be launched.
    """
    logger.info("Running `%s` in %s", " ".join(command), cwd)
    subprocess.run(
        command,
        cwd=cwd,
        check=True,
        timeout=SCRIPT_TIMEOUT_SECONDS,
        stdout=sys.stderr,
    )


# ── Helpers ──────────────────────────────────────────────────────────────────


def read_manifest(root: Path) -> Optional[dict[str, Any]]:
    """Read package.json at the root; unreadable or non-object content counts as absent."""
    path = root / PACKAGE_MANIFEST
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable %s: %s", path, e)
        return None
    return data if isinstance(data, dict) else None


def _section(manifest: Optional[dict[str, Any]], name: str) -> dict[str, Any]:
    if not manifest:
        return {}
    value = manifest.get(name)
    return value if isinstance(value, dict) else {}


@dataclass
class AuditContext:
    """Everything a heuristic may look at for one repository."""

    root: Path
    manifest: Optional[dict[str, Any]] = None
    runner: ScriptRunner = run_script
    excluded_files: frozenset[Path] = field(default_factory=frozenset)

    @property
    def scripts(self) -> dict[str, Any]:
        return _section(self.manifest, "scripts")

    @property
    def dev_dependencies(self) -> dict[str, Any]:
        return _section(self.manifest, "devDependencies")

    @property
    def dependencies(self) -> dict[str, Any]:
        return _section(self.manifest, "dependencies")


# ── Heuristics ───────────────────────────────────────────────────────────────


def check_test_exists(ctx: AuditContext) -> Verdict:
    """Pass when a test directory, test script or test framework is present."""
    has_dir = any((ctx.root / name).is_dir() for name in TEST_DIRECTORIES)
    has_script = bool(ctx.scripts.get("test"))
    has_framework = any(
        name in ctx.dev_dependencies or name in ctx.dependencies
        for name in TEST_FRAMEWORK_DEPENDENCIES
    )
    if has_dir or has_script or has_framework:
        return Verdict("test_exists", VerdictStatus.PASS, "Tests folder or test script detected.")
    return Verdict(
        "test_exists",
        VerdictStatus.FAIL,
        "No tests detected (no test folder or test script).",
    )


def check_test_commands(ctx: AuditContext) -> Verdict:
    """Run the lint script, or failing that the test script; only the exit status counts."""
    if ctx.scripts.get("lint"):
        command, label = ["npm", "run", "lint", "--silent"], "Lint"
    elif ctx.scripts.get("test"):
        command, label = ["npm", "test", "--silent"], "Tests"
    else:
        return Verdict(
            "test_checks",
            VerdictStatus.NEEDS_ATTENTION,
            "No lint/test script found to run.",
        )

    try:
        ctx.runner(command, ctx.root)
    except (subprocess.SubprocessError, OSError) as e:
        logger.warning("`%s` failed: %s", " ".join(command), e)
        return Verdict(
            "test_checks",
            VerdictStatus.FAIL,
            f"{label} failed (see job logs).",
        )
    return Verdict("test_checks", VerdictStatus.PASS, f"{label} passed.")


def find_secret_candidates(
    root: Path, excluded_files: frozenset[Path] = frozenset()
) -> list[Path]:
    """Return files under root whose text contains a secret-indicating token.

    Dependency and VCS directories, binary/doc extensions and the given files
    are skipped. Content is decoded as UTF-8 with replacement characters, so
    files in other encodings are still scanned; only files that cannot be
    opened are skipped. This is a plain substring match: variable names count
    as hits.
    """
    tokens = [t.lower() for t in SECRET_TOKENS]
    hits: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in SECRET_SCAN_EXCLUDED_DIRS)
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if path.suffix.lower() in SECRET_SCAN_EXCLUDED_EXTENSIONS:
                continue
            if path in excluded_files:
                continue
            try:
                text = path.read_text(encoding="utf-8", errors="replace").lower()
            except OSError:
                logger.debug("Skipping unreadable file %s", path)
                continue
            if any(token in text for token in tokens):
                hits.append(path)

    return hits


def check_secrets(ctx: AuditContext) -> Verdict:
    suspicious = find_secret_candidates(ctx.root, ctx.excluded_files)
    if suspicious:
        shown = ", ".join(
            p.relative_to(ctx.root).as_posix()
            for p in suspicious[:SECRET_SCAN_MAX_REPORTED]
        )
        return Verdict(
            "sec_secrets",
            VerdictStatus.FAIL,
            f"Potential secrets found in files: {shown}",
        )
    return Verdict("sec_secrets", VerdictStatus.PASS, "No obvious hardcoded secrets found.")


def check_format_config(ctx: AuditContext) -> Verdict:
    has_config = any((ctx.root / name).exists() for name in FORMAT_CONFIG_FILES)
    has_dependency = any(name in ctx.dev_dependencies for name in FORMAT_DEPENDENCIES)
    if has_config or has_dependency:
        return Verdict("read_format", VerdictStatus.PASS, "Formatter/linter config detected.")
    return Verdict(
        "read_format",
        VerdictStatus.NEEDS_ATTENTION,
        "No linter/formatter config found (recommend adding ESLint/Prettier).",
    )


HEURISTICS: dict[str, Callable[[AuditContext], Verdict]] = {
    "test_exists": check_test_exists,
    "test_checks": check_test_commands,
    "sec_secrets": check_secrets,
    "read_format": check_format_config,
}


# ── Audit ────────────────────────────────────────────────────────────────────


def audit_checklist(
    checklist: ChecklistDocument,
    root: Path,
    runner: Optional[ScriptRunner] = None,
) -> AuditReport:
    """Evaluate every checklist item against the repository at root.

    Items with a known heuristic are checked; every other item is marked
    NeedsAttention. Results follow checklist order, one per item.
    """
    root = Path(root)
    ctx = AuditContext(
        root=root,
        manifest=read_manifest(root),
        runner=runner or run_script,
        # The checklist names the sec_secrets item, so scanning it would
        # always report a hit.
        excluded_files=frozenset({root / CHECKLIST_FILENAME}),
    )

    report = AuditReport()
    for category in checklist.categories:
        for item in category.items:
            heuristic = HEURISTICS.get(item.id)
            if heuristic is None:
                verdict = Verdict(item.id, VerdictStatus.NEEDS_ATTENTION, MANUAL_REVIEW_REASON)
            else:
                try:
                    verdict = heuristic(ctx)
                except Exception as e:
                    logger.exception("Heuristic %s raised", item.id)
                    verdict = Verdict(
                        item.id, VerdictStatus.FAIL, f"Automated check errored: {e}"
                    )
            verdict.category = category.name
            verdict.priority = category.priority
            logger.debug("%s -> %s", item.id, verdict.status)
            report.results.append(verdict)

    return report
