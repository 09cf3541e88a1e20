"""Data models for pixoo_pusher."""

from pixoo_pusher.models.commands import DeviceCommand
from pixoo_pusher.models.config import DeviceConfig, Settings

__all__ = ["DeviceCommand", "DeviceConfig", "Settings"]
