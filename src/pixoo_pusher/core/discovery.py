"""Device discovery for Pixoo devices via the Divoom cloud."""

import json
import logging
from pathlib import Path
from typing import Optional

import requests

from pixoo_pusher.core.pixoo import CLOUD_PORT, Pixoo
from pixoo_pusher.core.transport import Transport
from pixoo_pusher.models.config import DEFAULT_CLOUD_HOST, DeviceConfig
from pixoo_pusher.protocol.cloud_client import CloudClient

logger = logging.getLogger(__name__)

DEVICE_CONFIG_FILE = "device.json"


def load_device_config(config_path: Path) -> Optional[DeviceConfig]:
    """Load device configuration from file.

    Args:
        config_path: Path to device.json

    Returns:
        DeviceConfig if file exists and is valid, None otherwise
    """
    if not config_path.exists():
        logger.debug(f"No config file at {config_path}")
        return None

    try:
        with open(config_path) as f:
            data = json.load(f)
        config = DeviceConfig.model_validate(data)
        logger.debug(f"Loaded device config: {config}")
        return config
    except (json.JSONDecodeError, ValueError) as e:
        logger.warning(f"Invalid device config at {config_path}: {e}")
        return None


def save_device_config(config: DeviceConfig, config_path: Path) -> None:
    """Save device configuration to file.

    Args:
        config: Device configuration to save
        config_path: Path to save to
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        json.dump(config.model_dump(exclude_none=True), f, indent=2)
    logger.info(f"Saved device config to {config_path}")


def scan_network(
    cloud_host: str = DEFAULT_CLOUD_HOST,
    session: Optional[requests.Session] = None,
) -> list[dict]:
    """Ask the Divoom cloud which devices share this network.

    Returns:
        Device entries as reported by the cloud
    """
    client = CloudClient(Transport(cloud_host, port=CLOUD_PORT, use_ssl=True, session=session))
    return client.discover_devices()


def discover_device(
    config_dir: Optional[Path] = None,
    cloud_host: str = DEFAULT_CLOUD_HOST,
    session: Optional[requests.Session] = None,
) -> Optional[DeviceConfig]:
    """Discover a Pixoo device.

    Priority:
    1. Check config file for a manual host
    2. Ask the cloud for devices on this LAN

    Args:
        config_dir: Path to config directory (default: ./config)
        cloud_host: Divoom cloud API host
        session: requests session for the cloud query

    Returns:
        Configuration of the device to use, or None
    """
    config_dir = config_dir or Path("config")
    config_path = config_dir / DEVICE_CONFIG_FILE

    config = load_device_config(config_path)
    if config and config.host:
        logger.info(f"Using configured host: {config.host}")
        return config

    logger.info("No configured host, asking the cloud for LAN devices...")
    devices = [d for d in scan_network(cloud_host, session) if d.get("DevicePrivateIP")]

    if not devices:
        logger.warning("No Pixoo devices found")
        return None

    found = devices[0]
    logger.info(f"Using discovered device {found.get('DeviceName', '?')} at {found['DevicePrivateIP']}")

    update = {
        "host": found["DevicePrivateIP"],
        "device_id": found.get("DeviceId"),
        "cloud_host": cloud_host,
    }
    new_config = config.model_copy(update=update) if config else DeviceConfig(**update)
    save_device_config(new_config, config_path)
    return new_config


def get_device(
    config_dir: Optional[Path] = None,
    cloud_host: str = DEFAULT_CLOUD_HOST,
    session: Optional[requests.Session] = None,
) -> Optional[Pixoo]:
    """Get a Pixoo client for the configured or discovered device.

    Args:
        config_dir: Path to config directory
        cloud_host: Divoom cloud API host
        session: requests session for all requests

    Returns:
        Pixoo instance, or None if no device found
    """
    config = discover_device(config_dir, cloud_host, session)
    if config is None:
        return None
    return Pixoo.from_config(config, session=session)
