"""Shared access to the Anthropic API for the planner."""

import os
from typing import Optional

import anthropic

from tripmind.common.errors import GatewayError

MODEL = os.environ.get("TRIPMIND_MODEL", "claude-sonnet-4-20250514")

RATE_LIMIT_MESSAGE = "Rate limits exceeded, please try again later."
PAYMENT_REQUIRED_MESSAGE = "Payment required, please add credits to your AI workspace."
GATEWAY_ERROR_MESSAGE = "AI gateway error"


def create_client(api_key: Optional[str] = None) -> anthropic.Anthropic:
    """Build an Anthropic client, requiring an API key."""
    api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
    if not api_key:
        raise ValueError(
            "Anthropic API key required. Set ANTHROPIC_API_KEY env var or pass api_key."
        )
    return anthropic.Anthropic(api_key=api_key)


def translate_api_error(error: anthropic.APIError) -> GatewayError:
    """Map an Anthropic SDK error to a GatewayError with the status to answer."""
    status = getattr(error, "status_code", None)
    print(f"[PLANNER] AI gateway error: {status} {error}")

    if status == 429:
        return GatewayError(RATE_LIMIT_MESSAGE, status=429)
    if status == 402:
        return GatewayError(PAYMENT_REQUIRED_MESSAGE, status=402)
    return GatewayError(GATEWAY_ERROR_MESSAGE, status=500)
