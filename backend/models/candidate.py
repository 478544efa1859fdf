from enum import Enum

from pydantic import BaseModel, ConfigDict


class ApiVersion(str, Enum):
    V1BETA = "v1beta"
    V1 = "v1"


class ModelCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_version: ApiVersion
    model_id: str       # e.g. "gemini-1.5-pro", no "models/" prefix


class DiscoveredModel(BaseModel):
    name: str               # "models/" prefix already stripped
    supports_generate: bool
