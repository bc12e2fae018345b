"""Shared fixtures: a client wired to a mocked ``requests.Session``."""

from typing import Any, Optional
from unittest.mock import MagicMock

import pytest
import requests

from orderdaily.client import Client

INVALID_JSON = object()


def mock_response(body: Any = None, status: int = 200, headers: Optional[dict] = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.headers = headers or {}
    if body is INVALID_JSON:
        resp.json.side_effect = ValueError("Expecting value")
    else:
        resp.json.return_value = {} if body is None else body
    return resp


@pytest.fixture
def session() -> MagicMock:
    session = MagicMock(spec=requests.Session)
    session.request.return_value = mock_response({"data": []})
    session.head.return_value = mock_response(status=200, headers={"Content-Length": "2048"})
    return session


@pytest.fixture
def client(session: MagicMock) -> Client:
    return Client(
        {
            "application_name": "test-app",
            "main_api_key": "main-key",
            "partner_api_key": "partner-key",
        },
        session=session,
    )
