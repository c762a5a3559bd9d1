"""Exceptions raised by the remote-judge review path."""

from __future__ import annotations

from typing import Optional


class ReviewError(Exception):
    """Base class for errors that abort a review run."""


class MissingCredentialError(ReviewError):
    """No API key was configured for the judge endpoint."""


class JudgeTransportError(ReviewError):
    """The judge endpoint could not be reached or answered with an error status."""

    def __init__(self, status_code: Optional[int], body: str) -> None:
        self.status_code = status_code
        self.body = body
        if status_code is None:
            super().__init__(f"Judge API request failed: {body}")
        else:
            super().__init__(f"Judge API error: {status_code} {body}")


class JudgeResponseError(ReviewError):
    """The judge answered, but its completion is not a usable verdict list.

    ``raw_text`` holds the completion (after fence stripping) so callers can
    show what the model actually returned.
    """

    def __init__(self, message: str, raw_text: str = "") -> None:
        self.raw_text = raw_text
        super().__init__(message)
