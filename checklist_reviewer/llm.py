"""Chat-completion client for the remote review judge."""

from __future__ import annotations

import logging
import time
from typing import Optional

import httpx

from checklist_reviewer.config import API_KEY_ENV, JudgeSettings
from checklist_reviewer.errors import (
    JudgeResponseError,
    JudgeTransportError,
    MissingCredentialError,
)

logger = logging.getLogger(__name__)


def _log_usage(
    tool: str,
    model: str,
    input_tokens: int,
    output_tokens: int,
    latency_ms: int,
) -> None:
    logger.info(
        "Judge usage [%s]: input=%d output=%d total=%d latency=%dms model=%s",
        tool,
        input_tokens,
        output_tokens,
        input_tokens + output_tokens,
        latency_ms,
        model,
    )


def invoke(
    user_message: str,
    settings: JudgeSettings,
    tool: str = "review",
    client: Optional[httpx.Client] = None,
) -> str:
    """
    Send one chat-completion request and return the completion text.

    The whole task travels in a single user message. There is no streaming,
    no follow-up turn and no retry.

    Args:
        user_message: The full review instruction
        settings: Credential, endpoint, model and sampling settings
        tool: Name of the calling operation (for usage logging)
        client: Optional pre-built httpx client; one is created per call otherwise

    Returns:
        The text of ``choices[0].message.content``.

    Raises:
        MissingCredentialError: If no API key is configured (no request is sent)
        JudgeTransportError: If the request fails or returns a non-success status
        JudgeResponseError: If the response envelope has no completion text
    """
    if not settings.api_key:
        raise MissingCredentialError(f"{API_KEY_ENV} environment variable not set.")

    body = {
        "model": settings.model,
        "messages": [
            {"role": "user", "content": user_message},
        ],
        "temperature": settings.temperature,
    }
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {settings.api_key}",
    }

    start = time.monotonic()
    logger.info("Judge request starting [%s] model=%s", tool, settings.model)

    try:
        if client is None:
            with httpx.Client(timeout=settings.timeout) as owned_client:
                response = owned_client.post(
                    settings.api_url, headers=headers, json=body
                )
        else:
            response = client.post(
                settings.api_url,
                headers=headers,
                json=body,
                timeout=settings.timeout,
            )
    except httpx.HTTPError as e:
        latency_ms = int((time.monotonic() - start) * 1000)
        logger.error("Judge request failed after %dms: %s", latency_ms, e)
        raise JudgeTransportError(None, str(e)) from e

    latency_ms = int((time.monotonic() - start) * 1000)

    if not response.is_success:
        logger.error(
            "Judge API returned %d after %dms [%s]",
            response.status_code,
            latency_ms,
            tool,
        )
        raise JudgeTransportError(response.status_code, response.text)

    try:
        data = response.json()
        content = data["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise JudgeResponseError(
            f"Unexpected judge response envelope: {response.text}",
            raw_text=response.text,
        ) from e

    if not isinstance(content, str):
        raise JudgeResponseError(
            f"Judge completion is not text: {content!r}", raw_text=response.text
        )

    usage = data.get("usage") or {}
    _log_usage(
        tool=tool,
        model=settings.model,
        input_tokens=usage.get("prompt_tokens", 0),
        output_tokens=usage.get("completion_tokens", 0),
        latency_ms=latency_ms,
    )
    return content
