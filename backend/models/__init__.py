from models.candidate import ApiVersion, ModelCandidate, DiscoveredModel
from models.result import AttemptResult, ErrorKind, Resolution
from models.session import ChatSession

__all__ = [
    "ApiVersion",
    "ModelCandidate",
    "DiscoveredModel",
    "AttemptResult",
    "ErrorKind",
    "Resolution",
    "ChatSession",
]
