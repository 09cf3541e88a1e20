"""Pytest configuration and fixtures for pixoo_pusher tests."""

import json
from typing import Any, Optional
from unittest.mock import Mock

import pytest
import requests

from pixoo_pusher.core.transport import Transport
from pixoo_pusher.protocol.cloud_client import CloudClient
from pixoo_pusher.protocol.local_client import LocalClient

# ============================================================================
# Helper Functions
# ============================================================================


def make_response(
    body: Any = None,
    status_code: int = 200,
    content_type: Optional[str] = "application/json",
) -> requests.Response:
    """Build a real requests.Response for stubbing a session.

    Args:
        body: Dict/list serialized as JSON, or str/bytes used verbatim
        status_code: HTTP status
        content_type: Content-Type header (None to omit)

    Returns:
        Response instance
    """
    response = requests.Response()
    response.status_code = status_code
    if isinstance(body, bytes):
        response._content = body
    elif isinstance(body, str):
        response._content = body.encode("utf-8")
    else:
        response._content = json.dumps(body).encode("utf-8")
    if content_type:
        response.headers["Content-Type"] = content_type
    return response


def make_session(*responses: requests.Response) -> Mock:
    """Mock session returning the given responses in order."""
    session = Mock(spec=requests.Session)
    if len(responses) == 1:
        session.request.return_value = responses[0]
    else:
        session.request.side_effect = list(responses)
    return session


def sent_json(session: Mock, call_index: int = -1) -> Any:
    """Decode the JSON body of a request made through a mock session."""
    return json.loads(session.request.call_args_list[call_index].kwargs["data"])


# ============================================================================
# Pytest Fixtures
# ============================================================================


@pytest.fixture
def session():
    """Mock session answering every request with {"error_code": 0}."""
    return make_session(make_response({"error_code": 0}))


@pytest.fixture
def local_client(session):
    """LocalClient with DeviceId DEV123 on top of the mock session."""
    return LocalClient(Transport("192.168.0.42", port=80, session=session), device_id="DEV123")


@pytest.fixture
def cloud_client(session):
    """CloudClient on top of the mock session."""
    return CloudClient(Transport("app.divoom-gz.com", port=443, use_ssl=True, session=session))
