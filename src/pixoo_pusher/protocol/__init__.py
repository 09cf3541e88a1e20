"""Local device and cloud API clients."""

from pixoo_pusher.protocol.cloud_client import CloudClient
from pixoo_pusher.protocol.local_client import LocalClient

__all__ = ["CloudClient", "LocalClient"]
