"""
Shared fixtures. No test touches the network — every Gemini call goes
through FakeTransport, which answers from a scripted route table and records
each request in order.
"""

import pytest

from gemini.config import GEMINI_BASE_URL
from gemini.transport import TransportResponse


def ok_body(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def error_response(status: int, message: str = None) -> TransportResponse:
    body = {"error": {"code": status, "message": message}} if message else None
    return TransportResponse(status_code=status, body=body)


def success_response(text: str) -> TransportResponse:
    return TransportResponse(status_code=200, body=ok_body(text))


def models_response(*entries: tuple[str, list[str]]) -> TransportResponse:
    return TransportResponse(
        status_code=200,
        body={
            "models": [
                {"name": name, "supportedGenerationMethods": methods}
                for name, methods in entries
            ]
        },
    )


def gen_path(version: str, model: str) -> str:
    return f"{version}/models/{model}:generateContent"


class FakeTransport:
    """
    routes maps (method, path) → TransportResponse or Exception, where path is
    the URL with the base stripped, e.g. ("GET", "v1beta/models").
    Unrouted requests get `default` (a 404 unless overridden).
    """

    def __init__(self, routes=None, default=None):
        self.routes = dict(routes or {})
        self.default = default or error_response(404, "model not found")
        self.calls = []

    async def request(self, method, url, *, params=None, json=None):
        path = url.removeprefix(GEMINI_BASE_URL + "/")
        self.calls.append((method, path, params, json))
        outcome = self.routes.get((method, path), self.default)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def paths(self) -> list[str]:
        return [path for _, path, _, _ in self.calls]


@pytest.fixture
def make_transport():
    return FakeTransport
