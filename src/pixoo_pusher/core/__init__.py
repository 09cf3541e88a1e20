"""Core functionality for pixoo_pusher."""

from pixoo_pusher.core.discovery import discover_device, get_device
from pixoo_pusher.core.frame import FrameBuffer, parse_color, rgb
from pixoo_pusher.core.pixoo import Pixoo
from pixoo_pusher.core.transport import BodyEncoding, Endpoint, RequestBody, Transport

__all__ = [
    "Pixoo",
    "discover_device",
    "get_device",
    "FrameBuffer",
    "parse_color",
    "rgb",
    "BodyEncoding",
    "Endpoint",
    "RequestBody",
    "Transport",
]
