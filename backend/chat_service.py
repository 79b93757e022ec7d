"""
SEO assistant chat backed by Claude.

The API key must be defined in a .env file in the backend root:

ANTHROPIC_API_KEY=your_real_key_here

Each call is a single stateless exchange. Failures never reach the caller;
they get a fixed apology reply instead.
"""

import logging
import os
import random
import time

import anthropic
from anthropic import Anthropic

from config import (
    CHAT_MAX_RETRIES,
    CHAT_MAX_TOKENS,
    CHAT_MODEL_CANDIDATES,
    CHAT_RETRY_BASE_SECONDS,
    CHAT_TEMPERATURE,
)

logger = logging.getLogger(__name__)

SYSTEM_MESSAGE = (
    "You are an expert SEO assistant helping users optimize their websites. "
    "Provide clear, actionable SEO advice. Keep responses concise and helpful."
)

ERROR_REPLY = "Sorry, I encountered an error. Please try again."


def _reply_text(message: object) -> str:
    """Join the text blocks of a Messages API reply."""
    parts = [
        block.text
        for block in getattr(message, "content", None) or []
        if getattr(block, "type", None) == "text" and block.text
    ]
    return "\n".join(parts).strip()


def _is_transient(exc: Exception) -> bool:
    """HTTP 429 or 5xx (529 is overload), or a connection that never completed."""
    if isinstance(exc, anthropic.APIConnectionError):
        return True
    if isinstance(exc, anthropic.APIStatusError):
        return exc.status_code == 429 or exc.status_code >= 500
    return False


def _call_claude(client: Anthropic, user_message: str) -> str:
    last_error: Exception | None = None

    for model in CHAT_MODEL_CANDIDATES:
        for attempt in range(CHAT_MAX_RETRIES):
            try:
                response = client.messages.create(
                    model=model,
                    max_tokens=CHAT_MAX_TOKENS,
                    system=SYSTEM_MESSAGE,
                    messages=[{"role": "user", "content": user_message}],
                    temperature=CHAT_TEMPERATURE,
                )
                content = _reply_text(response)
                if content:
                    return content
                last_error = RuntimeError("Empty Claude response content.")
            except Exception as e:
                last_error = e
                if not _is_transient(e):
                    break
            if attempt < CHAT_MAX_RETRIES - 1:
                delay = CHAT_RETRY_BASE_SECONDS * (2 ** attempt) + random.uniform(0, 0.35)
                logger.warning("Chat retry: model=%s attempt=%d wait=%.2fs", model, attempt + 1, delay)
                time.sleep(delay)

    if last_error is not None:
        raise last_error
    return ""


def send_message(user_message: str, client: Anthropic | None = None) -> str:
    """Ask the assistant one question and return its reply text."""
    try:
        if client is None:
            api_key = os.getenv("ANTHROPIC_API_KEY")
            if not api_key:
                logger.error("ANTHROPIC_API_KEY not found in environment.")
                return ERROR_REPLY
            client = Anthropic(api_key=api_key)

        reply = _call_claude(client, user_message)
        return reply or ERROR_REPLY
    except Exception as e:
        logger.error("Chat request failed: %s", e)
        return ERROR_REPLY
