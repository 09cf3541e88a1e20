"""Client for the Pixoo local device API.

Every command is a POST to ``http://<device>:80/post`` with a JSON body
``{"Command": "Namespace/Action", ...}``. The device answers with a JSON
object carrying ``error_code`` (0 on success).
"""

import logging
from collections.abc import Sequence
from typing import Any, Optional, Union

from pixoo_pusher.core.frame import FrameBuffer
from pixoo_pusher.core.transport import RequestBody, Transport
from pixoo_pusher.errors import DecodeError
from pixoo_pusher.models import commands as cmd

logger = logging.getLogger(__name__)

POST_PATH = "/post"
DEFAULT_FRAME_SPEED = 1000
DEFAULT_ANIMATION_SPEED = 100


class LocalClient:
    """Builds command envelopes and interprets device acknowledgements."""

    def __init__(self, transport: Transport, device_id: Optional[Union[int, str]] = None):
        """Initialize local client.

        Args:
            transport: Transport pointing at the device
            device_id: Sent as ``DeviceId`` with every command when set
        """
        self._transport = transport
        self.device_id = device_id

    @property
    def transport(self) -> Transport:
        return self._transport

    # -- Generic execution ---------------------------------------------------

    def build_envelope(self, command: str, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """Build the JSON body for one command.

        Args:
            command: Command name (e.g. "Channel/SetBrightness")
            params: Command-specific parameters, merged last; None values dropped

        Returns:
            Envelope dictionary
        """
        envelope: dict[str, Any] = {"Command": command}
        if self.device_id is not None:
            envelope["DeviceId"] = self.device_id
        for key, value in (params or {}).items():
            if value is not None:
                envelope[key] = value
        return envelope

    def execute_raw(self, command: str, **params: Any) -> dict[str, Any]:
        """Execute a command and return the decoded response.

        Args:
            command: Command name
            **params: JSON parameters keyed by their device names

        Returns:
            Response dictionary

        Raises:
            NetworkError: If the device cannot be reached
            DecodeError: If the response body is not a JSON object
        """
        payload = self.build_envelope(command, params)
        logger.debug(f"Sending {command} to {self._transport.base_url}")
        response = self._transport.post(
            POST_PATH, payload=RequestBody.json(payload), parse_json=False
        )

        try:
            body = response.json()
        except ValueError as e:
            raise DecodeError(
                f"Local JSON parse error: {e}", method="POST", path=POST_PATH, surface="local"
            ) from e

        if not isinstance(body, dict):
            raise DecodeError(
                f"Local JSON parse error: expected an object, got {type(body).__name__}",
                method="POST",
                path=POST_PATH,
                surface="local",
            )
        return body

    def execute(self, command: str, **params: Any) -> bool:
        """Execute a command and report whether the device accepted it.

        Returns:
            True if ``error_code`` is 0, False for any other value

        Raises:
            DecodeError: If the response has no ``error_code``
        """
        body = self.execute_raw(command, **params)
        error_code = self._require(body, "error_code")
        if error_code != 0:
            logger.warning(f"Device rejected {command}: error_code={error_code}")
        return error_code == 0

    def send(self, command: cmd.DeviceCommand) -> bool:
        """Execute a typed command; see ``execute``."""
        return self.execute(command.command, **command.params())

    def send_raw(self, command: cmd.DeviceCommand) -> dict[str, Any]:
        """Execute a typed command; see ``execute_raw``."""
        return self.execute_raw(command.command, **command.params())

    @staticmethod
    def _require(body: dict[str, Any], field: str) -> Any:
        try:
            return body[field]
        except KeyError:
            raise DecodeError(
                f"Local response missing required field '{field}'",
                method="POST",
                path=POST_PATH,
                surface="local",
            ) from None

    def _fetch(self, command: cmd.DeviceCommand, field: str) -> Any:
        return self._require(self.send_raw(command), field)

    # -- System / device -----------------------------------------------------

    def get_time(self) -> int:
        """Get the device clock as a UTC timestamp."""
        return self._fetch(cmd.GetDeviceTime(), "Utc")

    def set_time(self, utc: int) -> bool:
        return self.send(cmd.SetUtc(utc=utc))

    def set_timezone(self, time_zone_value: str) -> bool:
        """Set timezone string (e.g. "GMT-5")."""
        return self.send(cmd.SetTimeZone(time_zone_value=time_zone_value))

    def set_geo(self, longitude: Union[str, float], latitude: Union[str, float]) -> bool:
        """Set geographic location used for weather."""
        return self.send(cmd.SetGeo(longitude=longitude, latitude=latitude))

    def play_buzzer(self, active_time_in_cycle: int, off_time_in_cycle: int, play_total_time: int) -> bool:
        return self.send(
            cmd.PlayBuzzer(
                active_time_in_cycle=active_time_in_cycle,
                off_time_in_cycle=off_time_in_cycle,
                play_total_time=play_total_time,
            )
        )

    # -- Channel -------------------------------------------------------------

    def get_all_settings(self) -> dict[str, Any]:
        """Get all channel-related settings (brightness, rotation, clock id...)."""
        return self.send_raw(cmd.GetAllConf())

    def screen_on(self) -> bool:
        return self.send(cmd.OnOffScreen(on_off=1))

    def screen_off(self) -> bool:
        return self.send(cmd.OnOffScreen(on_off=0))

    def set_brightness(self, level: int) -> bool:
        """Set global brightness.

        Args:
            level: Brightness level (0-100)
        """
        return self.send(cmd.SetBrightness(level=level))

    def set_channel_index(self, select_index: int) -> bool:
        """Select channel (0=Faces, 1=Cloud, 2=Visualizer, 3=Custom, 4=Blackout)."""
        return self.send(cmd.SetChannelIndex(select_index=select_index))

    def set_custom_page_index(self, custom_page_index: int) -> bool:
        return self.send(cmd.SetCustomPageIndex(custom_page_index=custom_page_index))

    def set_eq_position(self, eq_position: int) -> bool:
        return self.send(cmd.SetEqPosition(eq_position=eq_position))

    def set_cloud_index(self, index: int) -> bool:
        return self.send(cmd.SetCloudIndex(index=index))

    def get_channel_index(self) -> int:
        return self._fetch(cmd.GetChannelIndex(), "SelectIndex")

    # -- Clock faces ---------------------------------------------------------

    def set_clock_select_id(self, clock_id: int) -> bool:
        return self.send(cmd.SetClockSelectId(clock_id=clock_id))

    def get_clock_info(self) -> dict[str, Any]:
        return self.send_raw(cmd.GetClockInfo())

    # -- Animation, GIFs and text --------------------------------------------

    def play_builtin_gif(self, file_type: int = 0, file_id: Optional[str] = None) -> bool:
        return self.send(cmd.PlayBuiltinGif(file_type=file_type, file_id=file_id))

    def send_http_gif(
        self,
        pic_num: int,
        pic_width: int,
        pic_offset: int,
        pic_id: int,
        pic_speed: int,
        pic_data: str,
    ) -> bool:
        """Send one frame of an animation as base64 packed RGB."""
        return self.send(
            cmd.SendHttpGif(
                pic_num=pic_num,
                pic_width=pic_width,
                pic_offset=pic_offset,
                pic_id=pic_id,
                pic_speed=pic_speed,
                pic_data=pic_data,
            )
        )

    def get_next_gif_id(self) -> int:
        """Get the next free animation id."""
        return self._fetch(cmd.GetHttpGifId(), "PicId")

    def reset_gif_id(self) -> bool:
        return self.send(cmd.ResetHttpGifId())

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
        """Overlay scrolling text on the current animation."""
        return self.send(
            cmd.SendHttpText(
                text_id=text_id,
                x=x,
                y=y,
                direction=direction,
                font=font,
                text_width=text_width,
                speed=speed,
                text_string=text_string,
                color=color,
                align=align,
            )
        )

    def clear_http_text(self) -> bool:
        return self.send(cmd.ClearHttpText())

    def send_remote(self, file_id: str) -> bool:
        return self.send(cmd.SendRemote(file_id=file_id))

    def send_http_item_list(self, item_list: list[dict[str, Any]]) -> bool:
        return self.send(cmd.SendHttpItemList(item_list=item_list))

    # -- Tools ---------------------------------------------------------------

    def set_timer(self, minute: int, second: int, status: int) -> bool:
        return self.send(cmd.SetTimer(minute=minute, second=second, status=status))

    def set_stopwatch(self, status: int) -> bool:
        return self.send(cmd.SetStopwatch(status=status))

    def set_scoreboard(self, blue_score: int, red_score: int) -> bool:
        return self.send(cmd.SetScoreboard(blue_score=blue_score, red_score=red_score))

    def set_noise_status(self, noise_status: int) -> bool:
        return self.send(cmd.SetNoiseStatus(noise_status=noise_status))

    # -- Batch & external command sources ------------------------------------

    def batch_command_list(
        self, command_list: Sequence[Union[cmd.DeviceCommand, dict[str, Any]]]
    ) -> bool:
        """Run several commands in one request.

        Args:
            command_list: Typed commands or ready-made ``{"Command": ...}`` dicts
        """
        entries = [
            entry.to_envelope() if isinstance(entry, cmd.DeviceCommand) else dict(entry)
            for entry in command_list
        ]
        return self.send(cmd.CommandList(command_list=entries))

    def use_http_command_source(self, url: str) -> bool:
        """Make the device fetch and run a command list from ``url``."""
        return self.send(cmd.UseHttpCommandSource(url=url))

    # -- Frame upload --------------------------------------------------------

    def upload_frame(
        self,
        frame: FrameBuffer,
        pic_id: Optional[int] = None,
        speed: int = DEFAULT_FRAME_SPEED,
    ) -> bool:
        """Display a frame buffer as a single-frame animation.

        Args:
            frame: Frame to send
            pic_id: Animation id (next free id from the device if omitted)
            speed: Frame duration in ms

        Returns:
            True if the device accepted the frame
        """
        if pic_id is None:
            pic_id = self.get_next_gif_id()

        logger.debug(f"Uploading {frame.width}x{frame.height} frame as PicID {pic_id}")
        return self.send_http_gif(
            pic_num=1,
            pic_width=frame.width,
            pic_offset=0,
            pic_id=pic_id,
            pic_speed=speed,
            pic_data=frame.to_base64(),
        )

    def upload_animation(
        self,
        frames: Sequence[FrameBuffer],
        speed: int = DEFAULT_ANIMATION_SPEED,
    ) -> bool:
        """Display frames as a looping animation.

        Args:
            frames: Frames in playback order, all of the same width
            speed: Frame duration in ms

        Returns:
            True if every frame was accepted
        """
        if not frames:
            raise ValueError("Animation needs at least one frame")
        width = frames[0].width
        if any(frame.width != width for frame in frames):
            raise ValueError("All animation frames must have the same width")

        pic_id = self.get_next_gif_id()
        logger.debug(f"Uploading {len(frames)}-frame animation as PicID {pic_id}")

        accepted = True
        for offset, frame in enumerate(frames):
            if not self.send_http_gif(
                pic_num=len(frames),
                pic_width=width,
                pic_offset=offset,
                pic_id=pic_id,
                pic_speed=speed,
                pic_data=frame.to_base64(),
            ):
                accepted = False
        return accepted

    def __repr__(self) -> str:
        return f"LocalClient(transport={self._transport!r}, device_id={self.device_id!r})"
