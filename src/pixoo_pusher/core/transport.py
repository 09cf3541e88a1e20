"""HTTP transport shared by the local device API and the Divoom cloud API."""

import json
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Literal, Optional
from urllib.parse import urlencode

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pixoo_pusher.errors import ConfigurationError, DecodeError, NetworkError

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8181
DEFAULT_TIMEOUT = 5.0

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class Endpoint(BaseModel):
    """Where a transport sends its requests."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(description="Device IP address or hostname")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, description="TCP port")
    scheme: Literal["http", "https"] = Field(default="http", description="URL scheme")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds")

    @field_validator("host", mode="before")
    @classmethod
    def validate_host(cls, v: Any) -> str:
        """Reject anything but a non-empty string."""
        if not isinstance(v, str) or not v.strip():
            raise ValueError("host must be a non-empty string")
        return v

    @property
    def base_url(self) -> str:
        """Base URL without a trailing slash."""
        return f"{self.scheme}://{self.host}:{self.port}"


class BodyEncoding(Enum):
    """How a request body is put on the wire."""

    JSON = "json"
    FORM = "form"
    RAW = "raw"


class RequestBody:
    """A request payload with its encoding chosen up front.

    Use the ``json``/``form``/``raw`` constructors when the encoding is known,
    or ``infer`` to pick one from the payload and an optional content type.
    """

    __slots__ = ("content", "encoding", "content_type")

    def __init__(self, content: Any, encoding: BodyEncoding, content_type: Optional[str] = None):
        self.content = content
        self.encoding = encoding
        self.content_type = content_type

    @classmethod
    def json(cls, data: Any) -> "RequestBody":
        return cls(data, BodyEncoding.JSON, JSON_CONTENT_TYPE)

    @classmethod
    def form(cls, data: Mapping) -> "RequestBody":
        return cls(data, BodyEncoding.FORM, FORM_CONTENT_TYPE)

    @classmethod
    def raw(cls, data: Any, content_type: Optional[str] = None) -> "RequestBody":
        return cls(data, BodyEncoding.RAW, content_type)

    @classmethod
    def infer(cls, payload: Any, content_type: Optional[str] = None) -> "RequestBody":
        """Select an encoding for ``payload``.

        Args:
            payload: Mapping, string, bytes or file-like object
            content_type: Content-Type the caller asked for, if any

        Returns:
            RequestBody with the matching encoding
        """
        structured = isinstance(payload, (Mapping, list))
        if content_type is None:
            if structured:
                return cls.json(payload)
            return cls.raw(payload)

        # Strings, bytes and streams are already serialized
        if JSON_CONTENT_TYPE in content_type and structured:
            return cls(payload, BodyEncoding.JSON, content_type)
        if FORM_CONTENT_TYPE in content_type and isinstance(payload, Mapping):
            return cls(payload, BodyEncoding.FORM, content_type)
        return cls.raw(payload, content_type)

    def encode(self) -> Any:
        """Return the body in the form handed to requests."""
        if self.encoding is BodyEncoding.JSON:
            return json.dumps(self.content)
        if self.encoding is BodyEncoding.FORM:
            return urlencode(self.content, doseq=True)
        return self.content

    def __repr__(self) -> str:
        return f"RequestBody(encoding={self.encoding.name}, content_type={self.content_type!r})"


def _content_type(headers: Mapping) -> Optional[str]:
    for key, value in headers.items():
        if key.lower() == "content-type":
            return value
    return None


class Transport:
    """Single-attempt HTTP requests against one endpoint.

    Network failures and timeouts are raised as NetworkError. When a
    response claims to be JSON but cannot be parsed, DecodeError is raised.
    HTTP error statuses are returned to the caller unchanged.
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
        use_ssl: bool = False,
        session: Optional[requests.Session] = None,
    ):
        """Initialize transport.

        Args:
            host: Device IP address or hostname
            port: TCP port
            timeout: Request timeout in seconds
            use_ssl: Use https instead of http
            session: requests session to send through (a new one if omitted)

        Raises:
            ConfigurationError: If host is empty or the other values are invalid
        """
        try:
            self.endpoint = Endpoint(
                host=host,
                port=port,
                timeout=timeout,
                scheme="https" if use_ssl else "http",
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid endpoint configuration: {e}") from e

        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self.endpoint.base_url

    def get(
        self,
        path: str,
        params: Optional[Mapping] = None,
        headers: Optional[Mapping] = None,
        parse_json: bool = True,
    ) -> requests.Response:
        """Perform a GET request.

        Args:
            path: Endpoint path (e.g. "/status")
            params: Query parameters
            headers: Additional headers
            parse_json: Check that a JSON response body parses

        Returns:
            The HTTP response

        Raises:
            NetworkError: On connection failure or timeout
            DecodeError: If a JSON response body is malformed
        """
        response = self._request("GET", path, params=params, headers=dict(headers or {}))
        if parse_json:
            self._check_json(response, "GET", path)
        return response

    def post(
        self,
        path: str,
        payload: Any = None,
        headers: Optional[Mapping] = None,
        parse_json: bool = True,
    ) -> requests.Response:
        """Perform a POST request.

        Args:
            path: Endpoint path (e.g. "/post")
            payload: RequestBody, or a mapping/str/bytes/stream to infer one from
            headers: Additional headers; a Content-Type here drives encoding
            parse_json: Check that a JSON response body parses

        Returns:
            The HTTP response

        Raises:
            NetworkError: On connection failure or timeout
            DecodeError: If a JSON response body is malformed
        """
        headers = dict(headers or {})
        data = None

        if payload is not None:
            body = payload if isinstance(payload, RequestBody) else RequestBody.infer(
                payload, _content_type(headers)
            )
            if body.content_type and _content_type(headers) is None:
                headers["Content-Type"] = body.content_type
            data = body.encode()

        response = self._request("POST", path, data=data, headers=headers)
        if parse_json:
            self._check_json(response, "POST", path)
        return response

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            response = self._session.request(
                method,
                url,
                timeout=self.endpoint.timeout,
                **kwargs,
            )
        except requests.exceptions.RequestException as e:
            raise NetworkError(
                f"Network error on {method} {path}: {e}", method=method, path=path
            ) from e

        logger.debug(f"{method} {path} -> {response.status_code}")
        return response

    @staticmethod
    def _check_json(response: requests.Response, method: str, path: str) -> None:
        content_type = response.headers.get("Content-Type", "")
        if JSON_CONTENT_TYPE not in content_type:
            return

        try:
            response.json()
        except ValueError as e:
            raise DecodeError(
                f"Decode error on {method} {path}: {e}", method=method, path=path
            ) from e

    def __repr__(self) -> str:
        return f"Transport(base_url='{self.base_url}')"
