from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel

from models.candidate import ApiVersion


class ErrorKind(str, Enum):
    MISSING_CREDENTIAL = "missing_credential"
    EMPTY_MESSAGE = "empty_message"
    TRANSPORT = "transport"
    HTTP = "http"
    MALFORMED_RESPONSE = "malformed_response"
    DISCOVERY_EMPTY = "discovery_empty"
    EXHAUSTED = "exhausted"
    TIMEOUT = "timeout"


class AttemptResult(BaseModel):
    """Outcome of a single generateContent call. Exactly one of text/message is set."""

    ok: bool
    text: Optional[str] = None
    message: Optional[str] = None
    error: Optional[ErrorKind] = None
    status_code: Optional[int] = None

    @classmethod
    def success(cls, text: str) -> "AttemptResult":
        return cls(ok=True, text=text)

    @classmethod
    def failure(
        cls,
        message: str,
        error: ErrorKind,
        status_code: Optional[int] = None,
    ) -> "AttemptResult":
        return cls(ok=False, message=message, error=error, status_code=status_code)


class Resolution(BaseModel):
    kind: Literal["success", "error"]
    text: Optional[str] = None
    model: Optional[str] = None
    api_version: Optional[ApiVersion] = None
    message: Optional[str] = None
    error: Optional[ErrorKind] = None

    @classmethod
    def succeeded(cls, text: str, model: str, api_version: ApiVersion) -> "Resolution":
        return cls(kind="success", text=text, model=model, api_version=api_version)

    @classmethod
    def failed(cls, message: str, error: ErrorKind) -> "Resolution":
        return cls(kind="error", message=message, error=error)
