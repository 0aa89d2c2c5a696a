from __future__ import annotations

import json
import logging
from typing import Any, Optional

import requests

from ..core.exceptions import RecordStoreError
from .connection import StoreConnection

logger = logging.getLogger(__name__)


def decode_envelope(text: str) -> Any:
    """Unwrap the store's response envelope and return its ``data``.

    The store may answer ``{"success", "message", "data"}`` directly or wrap that object
    as a JSON string under ``body`` (API-gateway proxy style).
    """
    try:
        result = json.loads(text)
    except ValueError:
        logger.error("Invalid JSON from Record Store: %r", text[:200])
        raise RecordStoreError("Invalid JSON response from server")

    if isinstance(result, dict) and isinstance(result.get("body"), str):
        try:
            result = json.loads(result["body"])
        except ValueError:
            logger.error("Invalid JSON in response body: %r", result["body"][:200])
            raise RecordStoreError("Invalid JSON in response body")

    if not isinstance(result, dict):
        return result

    if result.get("success") is False:
        raise RecordStoreError(result.get("message") or "API call failed")

    return result.get("data")


def api_call(
    conn: StoreConnection,
    endpoint: str,
    method: str = "GET",
    data: Optional[dict] = None,
    params: Optional[dict] = None,
) -> Any:
    try:
        response = conn.session.request(
            method,
            conn.url(endpoint),
            json=data,
            params=params or None,
            headers=conn.headers(),
            timeout=conn.timeout,
        )
    except requests.RequestException as e:
        logger.error("Record Store %s %s failed: %s", method, endpoint, e)
        raise RecordStoreError(f"Could not reach the server: {e}") from e

    text = response.text
    if not response.ok:
        logger.error("Record Store %s %s -> HTTP %s: %s", method, endpoint, response.status_code, text[:200])
        raise RecordStoreError(
            f"API request failed with status {response.status_code}: {text}",
            status_code=response.status_code,
        )

    return decode_envelope(text)
