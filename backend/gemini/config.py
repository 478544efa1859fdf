"""
Gemini model configuration.

Priority chain: newest/most capable model first, oldest stable model last,
v1beta before v1. The resolver walks MODEL_CHAIN in order and stops at the
first candidate that answers with usable content.

Environment overrides (e.g. in .env):
  GEMINI_BASE_URL=https://generativelanguage.googleapis.com
  GEMINI_ATTEMPT_TIMEOUT=10     # seconds, per network call
  GEMINI_RESOLVE_TIMEOUT=120    # seconds, whole resolution

One resolution makes at most len(MODEL_CHAIN) + 2 * len(API_VERSIONS) = 11
sequential calls (chain, listings, discovered-model retries). Keep
11 * GEMINI_ATTEMPT_TIMEOUT <= GEMINI_RESOLVE_TIMEOUT, otherwise a hanging
network ends in `timeout` before the discovery fallback gets its turn.
"""

import os

from models.candidate import ApiVersion, ModelCandidate

GEMINI_BASE_URL = os.environ.get(
    "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com"
).rstrip("/")

ATTEMPT_TIMEOUT_SECS = float(os.environ.get("GEMINI_ATTEMPT_TIMEOUT", "10"))
RESOLVE_TIMEOUT_SECS = float(os.environ.get("GEMINI_RESOLVE_TIMEOUT", "120"))

API_VERSIONS: tuple[ApiVersion, ...] = (ApiVersion.V1BETA, ApiVersion.V1)

MODEL_CHAIN: tuple[ModelCandidate, ...] = tuple(
    ModelCandidate(api_version=version, model_id=model)
    for version, model in [
        (ApiVersion.V1BETA, "gemini-2.0-flash-exp"),
        (ApiVersion.V1BETA, "gemini-1.5-pro"),
        (ApiVersion.V1BETA, "gemini-1.5-flash"),
        (ApiVersion.V1BETA, "gemini-pro"),
        (ApiVersion.V1, "gemini-1.5-pro"),
        (ApiVersion.V1, "gemini-1.5-flash"),
        (ApiVersion.V1, "gemini-pro"),
    ]
)

# Discovery limits
LOGGED_MODEL_LIMIT = 5      # names logged after a key is saved
SUGGESTED_MODEL_LIMIT = 3   # names quoted in the final error message

GENERATE_METHOD = "generateContent"
MODEL_NAME_PREFIX = "models/"

REMEDIATION_HINT = (
    "Please check your API key and ensure the Generative Language API is enabled."
)
DEFAULT_ERROR = "Failed to connect to Gemini API."
