"""
Command-line entry points.

Usage:
  checklist-review review path/to/file.py [--root WORKSPACE] [--json]
  checklist-review audit [ROOT]

Exit codes: 0 = no failures, 1 = a checklist item failed (audit) or the
review could not be completed (review), 2 = checklist file missing.
"""
from __future__ import annotations

import argparse
import logging
import sys

from checklist_reviewer.analyzer import audit_repository, review_document
from checklist_reviewer.config import CHECKLIST_FILENAME, JudgeSettings
from checklist_reviewer.loader import load_checklist
from checklist_reviewer.presentation import ConsolePresenter
from checklist_reviewer.reporting import verdicts_to_json

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NO_CHECKLIST = 2


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    # Keep HTTP client noise at WARNING
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _run_review(file_path: str, root: str, as_json: bool) -> int:
    checklist = load_checklist(root)
    if checklist is None:
        print(f"ERROR: {CHECKLIST_FILENAME} not found in {root}", file=sys.stderr)
        return EXIT_NO_CHECKLIST

    presenter = ConsolePresenter(stream=sys.stderr if as_json else sys.stdout)
    verdicts = review_document(
        file_path,
        root,
        settings=JudgeSettings.from_env(),
        presenter=presenter,
        checklist=checklist,
    )
    if verdicts is None:
        return EXIT_FAILED

    if as_json:
        print(verdicts_to_json(verdicts))
    return EXIT_OK


def _run_audit(root: str) -> int:
    report = audit_repository(root)
    if report is None:
        print(f"ERROR: {CHECKLIST_FILENAME} not found", file=sys.stderr)
        return EXIT_NO_CHECKLIST

    print(report.to_json())

    if report.has_failures:
        print("One or more checks failed.", file=sys.stderr)
    else:
        print("All automated checks passed or flagged for attention.", file=sys.stderr)
    return report.exit_code


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="checklist-review",
        description=f"Review code against the {CHECKLIST_FILENAME} checklist",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    review = sub.add_parser("review", help="LLM review of one file")
    review.add_argument("file", help="File to review")
    review.add_argument(
        "--root",
        default=".",
        help="Workspace root holding the checklist (default: current directory)",
    )
    review.add_argument(
        "--json",
        action="store_true",
        help="Print verdicts as JSON on stdout (transcript goes to stderr)",
    )

    audit = sub.add_parser("audit", help="Heuristic audit of a repository")
    audit.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Repository root (default: current directory)",
    )

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "review":
        return _run_review(args.file, args.root, args.json)
    return _run_audit(args.root)


if __name__ == "__main__":
    sys.exit(main())
