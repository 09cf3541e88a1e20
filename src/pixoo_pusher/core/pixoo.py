"""High-level Pixoo device combining the local and cloud APIs."""

import logging
from collections.abc import Sequence
from typing import Any, Callable, Optional, Union

import requests

from pixoo_pusher.core.frame import DEFAULT_HEIGHT, DEFAULT_WIDTH, FrameBuffer
from pixoo_pusher.core.transport import DEFAULT_TIMEOUT, Transport
from pixoo_pusher.errors import TransportError
from pixoo_pusher.models.commands import DeviceCommand
from pixoo_pusher.models.config import DEFAULT_CLOUD_HOST, DeviceConfig
from pixoo_pusher.protocol.cloud_client import CloudClient
from pixoo_pusher.protocol.local_client import DEFAULT_ANIMATION_SPEED, DEFAULT_FRAME_SPEED, LocalClient

logger = logging.getLogger(__name__)

LOCAL_PORT = 80
CLOUD_PORT = 443


class Pixoo:
    """Client for a Pixoo device and the Divoom cloud catalogs."""

    def __init__(
        self,
        host: str,
        device_id: Optional[Union[int, str]] = None,
        cloud_host: str = DEFAULT_CLOUD_HOST,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize Pixoo client.

        Args:
            host: IP address or hostname of the Pixoo device
            device_id: Optional DeviceId sent with local commands
            cloud_host: Divoom cloud API host
            timeout: Request timeout in seconds
            session: requests session shared by both transports

        Raises:
            ConfigurationError: If host or cloud_host is empty
        """
        self.local = LocalClient(
            Transport(host, port=LOCAL_PORT, timeout=timeout, session=session),
            device_id=device_id,
        )
        self.cloud = CloudClient(
            Transport(cloud_host, port=CLOUD_PORT, timeout=timeout, use_ssl=True, session=session)
        )

    @classmethod
    def from_config(cls, config: DeviceConfig, session: Optional[requests.Session] = None) -> "Pixoo":
        """Build a client from a saved device configuration."""
        if not config.host:
            raise ValueError("Device configuration has no host")
        return cls(
            config.host,
            device_id=config.device_id,
            cloud_host=config.cloud_host,
            timeout=config.timeout,
            session=session,
        )

    @property
    def host(self) -> str:
        return self.local.transport.endpoint.host

    @property
    def device_id(self) -> Optional[Union[int, str]]:
        return self.local.device_id

    def ping(self) -> bool:
        """Check if device is reachable.

        Returns:
            True if device responds, False otherwise
        """
        try:
            self.get_all_settings()
            return True
        except TransportError as e:
            logger.debug(f"Ping to {self.host} failed: {e}")
            return False

    def draw(
        self,
        paint: Callable[[FrameBuffer], Any],
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
    ) -> bool:
        """Paint a fresh frame and upload it.

        Args:
            paint: Called with an empty FrameBuffer to draw on
            width: Frame width
            height: Frame height

        Returns:
            Result of ``upload_frame``
        """
        frame = FrameBuffer(width, height)
        paint(frame)
        return self.upload_frame(frame)

    # -- Cloud API -----------------------------------------------------------

    def discover_devices(self) -> list[dict[str, Any]]:
        return self.cloud.discover_devices()

    def list_fonts(self, font_type: int) -> list[dict[str, Any]]:
        return self.cloud.list_fonts(font_type)

    def list_dials(self, dial_type: Union[str, int], page: int = 1) -> dict[str, Any]:
        return self.cloud.list_dials(dial_type, page=page)

    def list_dial_types(self) -> list[str]:
        return self.cloud.list_dial_types()

    def list_galleries(self, gallery_type: Union[str, int], page: int = 1) -> dict[str, Any]:
        return self.cloud.list_galleries(gallery_type, page=page)

    def list_images(self, gallery_id: Union[str, int], page: int = 1) -> dict[str, Any]:
        return self.cloud.list_images(gallery_id, page=page)

    # -- Local API -----------------------------------------------------------

    def execute_raw(self, command: str, **params: Any) -> dict[str, Any]:
        return self.local.execute_raw(command, **params)

    def execute(self, command: str, **params: Any) -> bool:
        return self.local.execute(command, **params)

    def send(self, command: DeviceCommand) -> bool:
        return self.local.send(command)

    def send_raw(self, command: DeviceCommand) -> dict[str, Any]:
        return self.local.send_raw(command)

    def get_time(self) -> int:
        return self.local.get_time()

    def set_time(self, utc: int) -> bool:
        return self.local.set_time(utc)

    def set_timezone(self, time_zone_value: str) -> bool:
        return self.local.set_timezone(time_zone_value)

    def set_geo(self, longitude: Union[str, float], latitude: Union[str, float]) -> bool:
        return self.local.set_geo(longitude, latitude)

    def play_buzzer(self, active_time_in_cycle: int, off_time_in_cycle: int, play_total_time: int) -> bool:
        return self.local.play_buzzer(active_time_in_cycle, off_time_in_cycle, play_total_time)

    def get_all_settings(self) -> dict[str, Any]:
        return self.local.get_all_settings()

    def screen_on(self) -> bool:
        return self.local.screen_on()

    def screen_off(self) -> bool:
        return self.local.screen_off()

    def set_brightness(self, level: int) -> bool:
        return self.local.set_brightness(level)

    def set_channel_index(self, select_index: int) -> bool:
        return self.local.set_channel_index(select_index)

    def set_custom_page_index(self, custom_page_index: int) -> bool:
        return self.local.set_custom_page_index(custom_page_index)

    def set_eq_position(self, eq_position: int) -> bool:
        return self.local.set_eq_position(eq_position)

    def set_cloud_index(self, index: int) -> bool:
        return self.local.set_cloud_index(index)

    def get_channel_index(self) -> int:
        return self.local.get_channel_index()

    def set_clock_select_id(self, clock_id: int) -> bool:
        return self.local.set_clock_select_id(clock_id)

    def get_clock_info(self) -> dict[str, Any]:
        return self.local.get_clock_info()

    def play_builtin_gif(self, file_type: int = 0, file_id: Optional[str] = None) -> bool:
        return self.local.play_builtin_gif(file_type=file_type, file_id=file_id)

    def send_http_gif(
        self,
        pic_num: int,
        pic_width: int,
        pic_offset: int,
        pic_id: int,
        pic_speed: int,
        pic_data: str,
    ) -> bool:
        return self.local.send_http_gif(pic_num, pic_width, pic_offset, pic_id, pic_speed, pic_data)

    def get_next_gif_id(self) -> int:
        return self.local.get_next_gif_id()

    def reset_gif_id(self) -> bool:
        return self.local.reset_gif_id()

    def send_http_text(
        self,
        text_id: int,
        x: int,
        y: int,
        direction: int,
        font: int,
        text_width: int,
        speed: int,
        text_string: str,
        color: str,
        align: int,
    ) -> bool:
        return self.local.send_http_text(
            text_id, x, y, direction, font, text_width, speed, text_string, color, align
        )

    def clear_http_text(self) -> bool:
        return self.local.clear_http_text()

    def send_remote(self, file_id: str) -> bool:
        return self.local.send_remote(file_id)

    def send_http_item_list(self, item_list: list[dict[str, Any]]) -> bool:
        return self.local.send_http_item_list(item_list)

    def set_timer(self, minute: int, second: int, status: int) -> bool:
        return self.local.set_timer(minute, second, status)

    def set_stopwatch(self, status: int) -> bool:
        return self.local.set_stopwatch(status)

    def set_scoreboard(self, blue_score: int, red_score: int) -> bool:
        return self.local.set_scoreboard(blue_score, red_score)

    def set_noise_status(self, noise_status: int) -> bool:
        return self.local.set_noise_status(noise_status)

    def batch_command_list(self, command_list: Sequence[Union[DeviceCommand, dict[str, Any]]]) -> bool:
        return self.local.batch_command_list(command_list)

    def use_http_command_source(self, url: str) -> bool:
        return self.local.use_http_command_source(url)

    def upload_frame(
        self,
        frame: FrameBuffer,
        pic_id: Optional[int] = None,
        speed: int = DEFAULT_FRAME_SPEED,
    ) -> bool:
        return self.local.upload_frame(frame, pic_id=pic_id, speed=speed)

    def upload_animation(self, frames: Sequence[FrameBuffer], speed: int = DEFAULT_ANIMATION_SPEED) -> bool:
        return self.local.upload_animation(frames, speed=speed)

    def __repr__(self) -> str:
        return f"Pixoo(host='{self.host}', device_id={self.device_id!r})"
