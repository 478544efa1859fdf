"""
Model/version fallback.

resolve() walks a candidate table in priority order and returns the first
usable answer. When every candidate fails it asks the API which models the
key can actually use (discover()) and retries the first generation-capable
one once per API version. Only when that also fails is a single aggregated
error built.

  Idle → Sending → Succeeded
                 → Exhausted → DiscoveryRetry → Succeeded | Failed

Per-candidate failures are logged and never surfaced individually.
"""

import asyncio
import logging
from typing import Optional, Sequence

from gemini import client
from gemini.config import (
    API_VERSIONS,
    DEFAULT_ERROR,
    LOGGED_MODEL_LIMIT,
    MODEL_CHAIN,
    REMEDIATION_HINT,
    RESOLVE_TIMEOUT_SECS,
    SUGGESTED_MODEL_LIMIT,
)
from gemini.transport import Transport, open_transport
from models.candidate import ApiVersion, DiscoveredModel, ModelCandidate
from models.result import AttemptResult, ErrorKind, Resolution

logger = logging.getLogger(__name__)


def generation_models(models: Sequence[DiscoveredModel]) -> list[str]:
    """Names of the models that support generateContent, in listing order."""
    return [m.name for m in models if m.supports_generate]


def build_error_message(last_error: Optional[str], available: Sequence[str]) -> str:
    message = last_error or DEFAULT_ERROR
    if available:
        message += f" Available models: {', '.join(available[:SUGGESTED_MODEL_LIMIT])}."
    return f"{message} {REMEDIATION_HINT}"


async def discover(
    credential: str,
    api_versions: Sequence[ApiVersion] = API_VERSIONS,
    transport: Optional[Transport] = None,
) -> list[DiscoveredModel]:
    """
    Return the model listing from the first API version that has one.
    An empty list means nothing could be learned; it is not an error.
    """
    if not credential:
        return []
    async with open_transport(transport) as transport:
        return await _discover(credential, api_versions, transport)


async def _discover(
    credential: str,
    api_versions: Sequence[ApiVersion],
    transport: Transport,
) -> list[DiscoveredModel]:
    for version in api_versions:
        models = await client.list_models(transport, version, credential)
        if models:
            logger.info("Discovered %d models on %s", len(models), version.value)
            return models

    logger.info("Model discovery returned nothing on %s", [v.value for v in api_versions])
    return []


async def log_available_models(credential: str, transport: Optional[Transport] = None) -> None:
    """Informational discovery run after a key is saved. Never raises."""
    try:
        models = await discover(credential, transport=transport)
    except Exception:
        logger.exception("Model discovery after key save failed")
        return

    names = generation_models(models)[:LOGGED_MODEL_LIMIT]
    if names:
        logger.info("Available models: %s", names)


async def _retry_discovered(
    message: str,
    credential: str,
    model_id: str,
    api_versions: Sequence[ApiVersion],
    transport: Transport,
) -> Optional[Resolution]:
    for version in api_versions:
        result = await client.generate_content(transport, version, model_id, message, credential)
        if result.ok:
            logger.info("Discovered model %s/%s answered", version.value, model_id)
            return Resolution.succeeded(result.text, model_id, version)
        logger.warning(
            "Discovered model %s/%s failed: %s", version.value, model_id, result.message
        )
    return None


async def resolve(
    message: str,
    credential: str,
    candidates: Sequence[ModelCandidate] = MODEL_CHAIN,
    transport: Optional[Transport] = None,
    api_versions: Sequence[ApiVersion] = API_VERSIONS,
) -> Resolution:
    """
    Turn one user message into response text or one aggregated error.

    Candidates are tried strictly in the given order; the first well-formed
    success short-circuits. An empty credential fails before any network call.
    """
    if not credential:
        return Resolution.failed(
            "Please enter your Gemini API key first!", ErrorKind.MISSING_CREDENTIAL
        )
    async with open_transport(transport) as transport:
        return await _resolve(message, credential, candidates, transport, api_versions)


async def _resolve(
    message: str,
    credential: str,
    candidates: Sequence[ModelCandidate],
    transport: Transport,
    api_versions: Sequence[ApiVersion],
) -> Resolution:
    last_failure: Optional[AttemptResult] = None
    for candidate in candidates:
        result = await client.generate_content(
            transport, candidate.api_version, candidate.model_id, message, credential
        )
        if result.ok:
            return Resolution.succeeded(result.text, candidate.model_id, candidate.api_version)

        logger.warning(
            "Model %s/%s failed (%s): %s — trying next",
            candidate.api_version.value,
            candidate.model_id,
            result.error.value,
            result.message,
        )
        last_failure = result

    logger.warning("All %d candidates failed, falling back to model discovery", len(candidates))

    available = generation_models(await _discover(credential, api_versions, transport))
    if available:
        retried = await _retry_discovered(
            message, credential, available[0], api_versions, transport
        )
        if retried is not None:
            return retried

    error_message = build_error_message(
        last_failure.message if last_failure else None, available
    )
    logger.error("Resolution failed: %s", error_message)
    return Resolution.failed(
        error_message,
        ErrorKind.EXHAUSTED if available else ErrorKind.DISCOVERY_EMPTY,
    )


async def try_send(
    message: str,
    credential: Optional[str],
    transport: Optional[Transport] = None,
    timeout: Optional[float] = RESOLVE_TIMEOUT_SECS,
) -> Resolution:
    """
    Entry point for the chat shell. Never raises for remote failures —
    the caller always gets a displayable Resolution.
    """
    message = (message or "").strip()
    if not message:
        return Resolution.failed("Message is empty.", ErrorKind.EMPTY_MESSAGE)

    try:
        async with open_transport(transport) as shared:
            return await asyncio.wait_for(
                resolve(message, (credential or "").strip(), transport=shared),
                timeout=timeout,
            )
    except asyncio.TimeoutError:
        logger.error("Resolution exceeded %ss deadline", timeout)
        return Resolution.failed(
            f"The request timed out. {REMEDIATION_HINT}", ErrorKind.TIMEOUT
        )
