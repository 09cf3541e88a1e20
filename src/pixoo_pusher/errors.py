"""Error types raised by pixoo_pusher."""

from typing import Optional


class PixooError(Exception):
    """Base class for all pixoo_pusher errors."""


class ConfigurationError(PixooError, ValueError):
    """Invalid construction arguments, raised before any network activity."""


class TransportError(PixooError):
    """A request could not be completed or its response could not be read.

    Attributes:
        method: HTTP method of the failed request (e.g. "POST")
        path: Request path (e.g. "/post")
    """

    def __init__(self, message: str, method: Optional[str] = None, path: Optional[str] = None):
        super().__init__(message)
        self.method = method
        self.path = path


class NetworkError(TransportError):
    """Connection failure or timeout."""


class DecodeError(TransportError):
    """Malformed response body, or a response missing a required field.

    ``surface`` is "local" for the device API, "cloud" for the Divoom cloud
    API and None when raised by the transport's own JSON check.
    """

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        path: Optional[str] = None,
        surface: Optional[str] = None,
    ):
        super().__init__(message, method=method, path=path)
        self.surface = surface


class PixelOutOfRangeError(PixooError, IndexError):
    """Frame buffer coordinate outside the buffer."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(
            f"coordinates ({x}, {y}) out of bounds for {width}x{height} frame"
        )
        self.x = x
        self.y = y
        self.width = width
        self.height = height
