"""Client library for Divoom Pixoo displays."""

__version__ = "0.1.0"

from pixoo_pusher.core import FrameBuffer, Pixoo, Transport
from pixoo_pusher.errors import (
    ConfigurationError,
    DecodeError,
    NetworkError,
    PixelOutOfRangeError,
    PixooError,
    TransportError,
)
from pixoo_pusher.protocol import CloudClient, LocalClient

__all__ = [
    "__version__",
    "Pixoo",
    "FrameBuffer",
    "Transport",
    "LocalClient",
    "CloudClient",
    "PixooError",
    "ConfigurationError",
    "TransportError",
    "NetworkError",
    "DecodeError",
    "PixelOutOfRangeError",
]
