from __future__ import annotations

from typing import Any

import pytest
import requests

from patent_dashboard.core.config import AppSettings

EXPORT_CSV = (
    "文献番号,出願日,出願人/権利者,FI\n"
    "JP2020-000001,2020/01/01,A Corp; B Inc,G06F16/30\n"
    "JP2020-000002,20200615,B Inc,G06F16/28;H04L9/32\n"
    "JP2021-000003,2021-03-01,C KK,H04L9/08\n"
).encode("utf-8")


class StubResponse:
    def __init__(self, payload: Any = None, *, status_code: int = 200, invalid_json: bool = False) -> None:
        self._payload = payload
        self.status_code = status_code
        self._invalid_json = invalid_json

    def json(self) -> Any:
        if self._invalid_json:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class StubSession:
    """Records posts and replays a canned response or transport failure."""

    def __init__(self, response: StubResponse | None = None, *, error: Exception | None = None) -> None:
        self._response = response
        self._error = error
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def post(self, url: str, files=None, timeout=None) -> StubResponse:
        self.calls.append({"url": url, "files": files, "timeout": timeout})
        if self._error is not None:
            raise self._error
        assert self._response is not None
        return self._response

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def export_csv() -> bytes:
    return EXPORT_CSV


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(wordcloud_url="http://wordcloud.test/generate-wordcloud", dashboard_max_sessions=8)


@pytest.fixture
def ok_session() -> StubSession:
    return StubSession(StubResponse({"success": True, "image": "data:image/png;base64,AAAA"}))


@pytest.fixture
def offline_session() -> StubSession:
    return StubSession(error=requests.ConnectionError("connection refused"))


@pytest.fixture
def make_session():
    def factory(
        payload: Any = None,
        *,
        status_code: int = 200,
        invalid_json: bool = False,
        error: Exception | None = None,
    ) -> StubSession:
        response = StubResponse(payload, status_code=status_code, invalid_json=invalid_json)
        return StubSession(response, error=error)

    return factory
