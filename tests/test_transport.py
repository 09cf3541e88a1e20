"""Tests for the HTTP transport."""

import io
import json
from unittest.mock import Mock

import pytest
import requests

from pixoo_pusher.core.transport import (
    BodyEncoding,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    Endpoint,
    RequestBody,
    Transport,
)
from pixoo_pusher.errors import ConfigurationError, DecodeError, NetworkError, TransportError
from tests.conftest import make_response, make_session


class TestTransportInitialization:
    """Test endpoint configuration and validation."""

    def test_defaults(self):
        """Test default port, timeout and scheme."""
        transport = Transport("device.local", session=Mock(spec=requests.Session))
        assert transport.endpoint.port == DEFAULT_PORT == 8181
        assert transport.endpoint.timeout == DEFAULT_TIMEOUT == 5.0
        assert transport.base_url == "http://device.local:8181"

    def test_ssl_uses_https(self):
        """Test use_ssl switches the scheme."""
        transport = Transport("cloud.example.com", port=443, use_ssl=True)
        assert transport.base_url == "https://cloud.example.com:443"

    @pytest.mark.parametrize("host", ["", "   ", None, 42])
    def test_rejects_invalid_host(self, host):
        """Test empty or non-string hosts fail at construction."""
        session = Mock(spec=requests.Session)
        with pytest.raises(ConfigurationError, match="host must be a non-empty string"):
            Transport(host, session=session)
        session.request.assert_not_called()

    def test_configuration_error_is_value_error(self):
        """Test ConfigurationError can be caught as ValueError."""
        with pytest.raises(ValueError):
            Transport("")

    def test_endpoint_is_immutable(self):
        """Test the endpoint cannot be modified after construction."""
        transport = Transport("device.local")
        with pytest.raises(Exception):
            transport.endpoint.host = "other"

    def test_endpoint_base_url(self):
        """Test Endpoint builds its base URL."""
        endpoint = Endpoint(host="10.0.0.5", port=80)
        assert endpoint.base_url == "http://10.0.0.5:80"


class TestGet:
    """Test GET requests."""

    def test_get_returns_response(self):
        """Test GET merges params and headers and returns the response."""
        session = make_session(make_response({"ok": True}))
        transport = Transport("device.local", port=9999, timeout=2, session=session)

        response = transport.get("/status", params={"foo": "bar"}, headers={"X-Test": "1"})

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        args, kwargs = session.request.call_args
        assert args == ("GET", "http://device.local:9999/status")
        assert kwargs["params"] == {"foo": "bar"}
        assert kwargs["headers"] == {"X-Test": "1"}
        assert kwargs["timeout"] == 2

    def test_get_passes_through_error_status(self):
        """Test 4xx/5xx responses are returned without raising."""
        session = make_session(make_response({"error": "Missing"}, status_code=404))
        transport = Transport("device.local", session=session)

        response = transport.get("/not_found")

        assert response.status_code == 404
        assert response.json() == {"error": "Missing"}

    def test_get_wraps_connection_error(self):
        """Test connection failures become NetworkError tagged with method and path."""
        session = Mock(spec=requests.Session)
        session.request.side_effect = requests.ConnectionError("conn error")
        transport = Transport("device.local", session=session)

        with pytest.raises(NetworkError, match="Network error on GET /anything") as exc_info:
            transport.get("/anything")

        assert exc_info.value.method == "GET"
        assert exc_info.value.path == "/anything"

    def test_get_wraps_timeout(self):
        """Test timeouts become NetworkError."""
        session = Mock(spec=requests.Session)
        session.request.side_effect = requests.Timeout("timeout")
        transport = Transport("device.local", session=session)

        with pytest.raises(NetworkError, match="Network error"):
            transport.get("/timeout")

    def test_get_malformed_json(self):
        """Test an unparseable JSON body raises DecodeError, not NetworkError."""
        session = make_session(make_response("nope"))
        transport = Transport("device.local", session=session)

        with pytest.raises(DecodeError, match="Decode error on GET /bad_json") as exc_info:
            transport.get("/bad_json")

        assert not isinstance(exc_info.value, NetworkError)
        assert exc_info.value.surface is None

    def test_get_skips_validation_for_non_json(self):
        """Test non-JSON content types are not parsed."""
        session = make_session(make_response("plain text", content_type="text/plain"))
        transport = Transport("device.local", session=session)

        response = transport.get("/text")

        assert response.text == "plain text"

    def test_get_skips_validation_when_disabled(self):
        """Test parse_json=False skips the JSON check."""
        session = make_session(make_response("nope"))
        transport = Transport("device.local", session=session)

        response = transport.get("/bad_json", parse_json=False)

        assert response.text == "nope"


class TestPost:
    """Test POST requests and body encoding."""

    def test_post_mapping_defaults_to_json(self):
        """Test a dict payload is sent as JSON."""
        session = make_session(make_response({"success": True}, status_code=201))
        transport = Transport("device.local", session=session)

        response = transport.post("/upload", payload={"data": "123"})

        assert response.status_code == 201
        kwargs = session.request.call_args.kwargs
        assert json.loads(kwargs["data"]) == {"data": "123"}
        assert kwargs["headers"]["Content-Type"] == "application/json"

    def test_post_form_encoded(self):
        """Test a dict payload with a form content type is urlencoded."""
        session = make_session(make_response({"ok": True}))
        transport = Transport("device.local", session=session)

        transport.post(
            "/form",
            payload={"a": "1", "b": "two words"},
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

        kwargs = session.request.call_args.kwargs
        assert kwargs["data"] == "a=1&b=two+words"
        assert kwargs["headers"] == {"Content-Type": "application/x-www-form-urlencoded"}

    def test_post_raw_passthrough(self):
        """Test other content types send the payload unmodified."""
        session = make_session(make_response({"ok": True}))
        transport = Transport("device.local", session=session)

        transport.post("/raw", payload=b"\x00\x01", headers={"Content-Type": "application/octet-stream"})

        assert session.request.call_args.kwargs["data"] == b"\x00\x01"

    def test_post_serialized_json_passthrough(self):
        """Test pre-serialized bytes with a JSON content type are not re-encoded."""
        session = make_session(make_response({"ok": True}))
        transport = Transport("device.local", session=session)

        transport.post("/raw", payload=b'{"a": 1}', headers={"Content-Type": "application/json"})

        kwargs = session.request.call_args.kwargs
        assert kwargs["data"] == b'{"a": 1}'
        assert kwargs["headers"] == {"Content-Type": "application/json"}

    def test_post_stream_without_content_type(self):
        """Test a non-mapping payload without content type passes through."""
        session = make_session(make_response({"ok": True}))
        transport = Transport("device.local", session=session)
        stream = io.BytesIO(b"abc")

        transport.post("/stream", payload=stream)

        kwargs = session.request.call_args.kwargs
        assert kwargs["data"] is stream
        assert "Content-Type" not in kwargs["headers"]

    def test_post_without_payload(self):
        """Test a POST with no payload sends no body."""
        session = make_session(make_response({"ok": True}))
        transport = Transport("device.local", session=session)

        transport.post("/empty")

        assert session.request.call_args.kwargs["data"] is None

    def test_post_with_request_body(self):
        """Test an explicit RequestBody is used as-is."""
        session = make_session(make_response({"ok": True}))
        transport = Transport("device.local", session=session)

        transport.post("/explicit", payload=RequestBody.json({"x": 1}))

        kwargs = session.request.call_args.kwargs
        assert json.loads(kwargs["data"]) == {"x": 1}
        assert kwargs["headers"]["Content-Type"] == "application/json"

    def test_post_wraps_connection_error(self):
        """Test connection failures on POST become NetworkError."""
        session = Mock(spec=requests.Session)
        session.request.side_effect = requests.ConnectionError("oops")
        transport = Transport("device.local", session=session)

        with pytest.raises(NetworkError, match="Network error on POST /upload") as exc_info:
            transport.post("/upload", payload={})

        assert exc_info.value.method == "POST"
        assert exc_info.value.path == "/upload"
        assert isinstance(exc_info.value, TransportError)

    def test_post_malformed_json(self):
        """Test a malformed JSON response to a POST raises DecodeError."""
        session = make_session(make_response("{broken"))
        transport = Transport("device.local", session=session)

        with pytest.raises(DecodeError, match="Decode error on POST /post"):
            transport.post("/post", payload={})


class TestRequestBody:
    """Test encoding selection."""

    def test_infer_mapping(self):
        assert RequestBody.infer({"a": 1}).encoding is BodyEncoding.JSON

    def test_infer_string(self):
        body = RequestBody.infer("hello")
        assert body.encoding is BodyEncoding.RAW
        assert body.content_type is None
        assert body.encode() == "hello"

    def test_infer_json_content_type_with_charset(self):
        body = RequestBody.infer({"a": 1}, "application/json; charset=utf-8")
        assert body.encoding is BodyEncoding.JSON
        assert body.content_type == "application/json; charset=utf-8"

    def test_infer_form_requires_mapping(self):
        """Test a string payload on a form content type is passed through."""
        body = RequestBody.infer("a=1", "application/x-www-form-urlencoded")
        assert body.encoding is BodyEncoding.RAW
        assert body.encode() == "a=1"

    def test_infer_other_content_type(self):
        body = RequestBody.infer({"a": 1}, "text/plain")
        assert body.encoding is BodyEncoding.RAW
        assert body.encode() == {"a": 1}

    def test_infer_json_string_is_raw(self):
        """Test a JSON string keeps its content type but is not encoded again."""
        body = RequestBody.infer('{"a": 1}', "application/json")
        assert body.encoding is BodyEncoding.RAW
        assert body.content_type == "application/json"
        assert body.encode() == '{"a": 1}'

    def test_infer_list(self):
        body = RequestBody.infer([1, 2], "application/json")
        assert body.encoding is BodyEncoding.JSON
        assert body.encode() == "[1, 2]"
