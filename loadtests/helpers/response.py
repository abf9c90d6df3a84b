"""Response error extraction for load test observability.

Parses Storefront API error responses into human-readable messages. Every
failure is rendered as the envelope ``{"success": false, "message": "...",
"errors": {...}}``, where ``errors`` is only present for field-level
validation failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    Gracefully handles unparseable bodies and missing fields.
    """
    try:
        body = response.json()
    except ValueError:
        # Not JSON, return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    errors = body.get("errors")
    if isinstance(errors, dict) and errors:
        return " | ".join(f"{field}: {'; '.join(map(str, msgs))}" for field, msgs in errors.items())

    if "message" in body:
        return str(body["message"])

    # Unknown shape, stringify and truncate
    return str(body)[:300]
