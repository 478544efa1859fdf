"""
Gemini REST client.

Two raw calls against the Generative Language API, authenticated with the
`key` query parameter:

  POST {base}/{version}/models/{model}:generateContent
  GET  {base}/{version}/models

Neither call raises. generate_content classifies every outcome into an
AttemptResult; list_models returns None when a version yields nothing usable.

Outcomes classified by generate_content:
  - Transport exception (connect error, timeout)    → Failure(transport)
  - Non-2xx status                                   → Failure(http), message from error body
  - 2xx without candidates[0].content.parts[0].text  → Failure(malformed_response)
  - 2xx with the expected shape                      → Success(text)
"""

import logging
from typing import Any, Optional

from gemini.config import GEMINI_BASE_URL, GENERATE_METHOD, MODEL_NAME_PREFIX
from gemini.transport import Transport
from models.candidate import ApiVersion, DiscoveredModel
from models.result import AttemptResult, ErrorKind

logger = logging.getLogger(__name__)

UNEXPECTED_FORMAT = "Unexpected response format from API"


# ─── URL / payload builders ───────────────────────────────────────────

def generate_url(api_version: ApiVersion, model_id: str) -> str:
    return f"{GEMINI_BASE_URL}/{api_version.value}/models/{model_id}:{GENERATE_METHOD}"


def list_url(api_version: ApiVersion) -> str:
    return f"{GEMINI_BASE_URL}/{api_version.value}/models"


def build_payload(message: str) -> dict:
    return {"contents": [{"parts": [{"text": message}]}]}


# ─── Body parsers ─────────────────────────────────────────────────────

def _error_message(body: Any, status_code: int) -> str:
    """Pull error.message out of an API error body, else a generic status line."""
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return f"HTTP error! status: {status_code}"


def _extract_text(body: Any) -> Optional[str]:
    """
    Return candidates[0].content.parts[0].text, or None if the body
    doesn't have that shape.
    """
    try:
        content = body["candidates"][0]["content"]
        if not content:
            return None
        text = content["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


def _exception_message(exc: Exception) -> str:
    # httpx timeouts often stringify to ""
    return str(exc) or exc.__class__.__name__


def parse_models(body: Any) -> list[DiscoveredModel]:
    """Convert a models.list body into DiscoveredModel entries (order kept)."""
    if not isinstance(body, dict):
        return []
    raw = body.get("models")
    if not isinstance(raw, list):
        return []

    models = []
    for entry in raw:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            continue
        methods = entry.get("supportedGenerationMethods") or []
        models.append(
            DiscoveredModel(
                name=entry["name"].removeprefix(MODEL_NAME_PREFIX),
                supports_generate=GENERATE_METHOD in methods,
            )
        )
    return models


# ─── Calls ────────────────────────────────────────────────────────────

async def generate_content(
    transport: Transport,
    api_version: ApiVersion,
    model_id: str,
    message: str,
    credential: str,
) -> AttemptResult:
    """Issue one generateContent call and classify the outcome."""
    try:
        resp = await transport.request(
            "POST",
            generate_url(api_version, model_id),
            params={"key": credential},
            json=build_payload(message),
        )
    except Exception as exc:
        return AttemptResult.failure(_exception_message(exc), ErrorKind.TRANSPORT)

    if not resp.ok:
        return AttemptResult.failure(
            _error_message(resp.body, resp.status_code),
            ErrorKind.HTTP,
            status_code=resp.status_code,
        )

    text = _extract_text(resp.body)
    if text is None:
        return AttemptResult.failure(UNEXPECTED_FORMAT, ErrorKind.MALFORMED_RESPONSE)

    return AttemptResult.success(text)


async def list_models(
    transport: Transport,
    api_version: ApiVersion,
    credential: str,
) -> Optional[list[DiscoveredModel]]:
    """
    List the models visible to `credential` under one API version.
    Returns None on transport failure, error status, or an empty listing.
    """
    try:
        resp = await transport.request(
            "GET", list_url(api_version), params={"key": credential}
        )
    except Exception as exc:
        logger.info("Model listing on %s failed: %s", api_version.value, _exception_message(exc))
        return None

    if not resp.ok:
        logger.info("Model listing on %s returned HTTP %s", api_version.value, resp.status_code)
        return None

    models = parse_models(resp.body)
    return models or None
