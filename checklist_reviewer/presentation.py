"""Presentation port for the interactive reviewer's transcript and notifications."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Protocol, TextIO

logger = logging.getLogger(__name__)


class Presenter(Protocol):
    """Host surface used by the interactive reviewer.

    ``show_info``/``show_error`` are short notifications; the transcript is a
    persistent panel that ``reveal`` brings to the front.
    """

    def show_info(self, message: str) -> None: ...

    def show_error(self, message: str) -> None: ...

    def append_transcript_line(self, line: str) -> None: ...

    def reveal(self) -> None: ...


class ConsolePresenter:
    """Transcript on a text stream (stdout by default), notifications through logging."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def show_info(self, message: str) -> None:
        logger.info(message)

    def show_error(self, message: str) -> None:
        logger.error(message)

    def append_transcript_line(self, line: str) -> None:
        print(line, file=self.stream)

    def reveal(self) -> None:
        self.stream.flush()


@dataclass
class TranscriptPresenter:
    """Collects everything in memory (MCP tool responses, tests)."""

    lines: list[str] = field(default_factory=list)
    infos: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    revealed: bool = False

    def show_info(self, message: str) -> None:
        self.infos.append(message)

    def show_error(self, message: str) -> None:
        self.errors.append(message)

    def append_transcript_line(self, line: str) -> None:
        self.lines.append(line)

    def reveal(self) -> None:
        self.revealed = True

    @property
    def transcript(self) -> str:
        return "\n".join(self.lines)
