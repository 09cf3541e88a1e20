"""Typed parameter sets for local device commands.

Each model names its ``Command`` string and maps Python field names to the
device's JSON keys via ``serialization_alias``. Fields left as None are not
sent.
"""

from typing import Any, ClassVar, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class DeviceCommand(BaseModel):
    """Base for a single local API command."""

    model_config = ConfigDict(frozen=True)

    command: ClassVar[str]

    def params(self) -> dict[str, Any]:
        """Command-specific JSON parameters, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_envelope(self) -> dict[str, Any]:
        """Standalone ``{"Command": ..., **params}`` dict, as used in command lists."""
        return {"Command": self.command, **self.params()}


# System / device


class GetDeviceTime(DeviceCommand):
    command: ClassVar[str] = "Device/GetDeviceTime"


class SetUtc(DeviceCommand):
    command: ClassVar[str] = "Device/SetUTC"

    utc: int = Field(serialization_alias="Utc", description="Unix timestamp")


class SetTimeZone(DeviceCommand):
    command: ClassVar[str] = "Sys/TimeZone"

    time_zone_value: str = Field(serialization_alias="TimeZoneValue", description='e.g. "GMT-5"')


class SetGeo(DeviceCommand):
    command: ClassVar[str] = "Sys/LogAndLat"

    longitude: Union[str, float] = Field(serialization_alias="Longitude")
    latitude: Union[str, float] = Field(serialization_alias="Latitude")


class PlayBuzzer(DeviceCommand):
    command: ClassVar[str] = "Device/PlayBuzzer"

    active_time_in_cycle: int = Field(serialization_alias="ActiveTimeInCycle")
    off_time_in_cycle: int = Field(serialization_alias="OffTimeInCycle")
    play_total_time: int = Field(serialization_alias="PlayTotalTime")


# Channel


class GetAllConf(DeviceCommand):
    command: ClassVar[str] = "Channel/GetAllConf"


class OnOffScreen(DeviceCommand):
    command: ClassVar[str] = "Channel/OnOffScreen"

    on_off: int = Field(serialization_alias="OnOff", ge=0, le=1)


class SetBrightness(DeviceCommand):
    command: ClassVar[str] = "Channel/SetBrightness"

    level: int = Field(serialization_alias="Brightness", ge=0, le=100)


class SetChannelIndex(DeviceCommand):
    """0=Faces, 1=Cloud, 2=Visualizer, 3=Custom, 4=Blackout."""

    command: ClassVar[str] = "Channel/SetIndex"

    select_index: int = Field(serialization_alias="SelectIndex", ge=0)


class SetCustomPageIndex(DeviceCommand):
    command: ClassVar[str] = "Channel/SetCustomPageIndex"

    custom_page_index: int = Field(serialization_alias="CustomPageIndex", ge=0)


class SetEqPosition(DeviceCommand):
    command: ClassVar[str] = "Channel/SetEqPosition"

    eq_position: int = Field(serialization_alias="EqPosition", ge=0)


class SetCloudIndex(DeviceCommand):
    command: ClassVar[str] = "Channel/CloudIndex"

    index: int = Field(serialization_alias="Index", ge=0)


class GetChannelIndex(DeviceCommand):
    command: ClassVar[str] = "Channel/GetIndex"


class SetClockSelectId(DeviceCommand):
    command: ClassVar[str] = "Channel/SetClockSelectId"

    clock_id: int = Field(serialization_alias="ClockId")


class GetClockInfo(DeviceCommand):
    command: ClassVar[str] = "Channel/GetClockInfo"


# Animation, GIFs and text


class PlayBuiltinGif(DeviceCommand):
    command: ClassVar[str] = "Device/PlayTFGif"

    file_type: int = Field(default=0, serialization_alias="FileType", description="0=internal, 1=uploaded")
    file_id: Optional[str] = Field(default=None, serialization_alias="FileId")


class SendHttpGif(DeviceCommand):
    command: ClassVar[str] = "Draw/SendHttpGif"

    pic_num: int = Field(serialization_alias="PicNum", ge=1, description="Total frames in the animation")
    pic_width: int = Field(serialization_alias="PicWidth", gt=0)
    pic_offset: int = Field(serialization_alias="PicOffset", ge=0, description="Index of this frame")
    pic_id: int = Field(serialization_alias="PicID")
    pic_speed: int = Field(serialization_alias="PicSpeed", description="Frame duration in ms")
    pic_data: str = Field(serialization_alias="PicData", description="Base64 packed RGB")


class GetHttpGifId(DeviceCommand):
    command: ClassVar[str] = "Draw/GetHttpGifId"


class ResetHttpGifId(DeviceCommand):
    command: ClassVar[str] = "Draw/ResetHttpGifId"


class SendHttpText(DeviceCommand):
    command: ClassVar[str] = "Draw/SendHttpText"

    text_id: int = Field(serialization_alias="TextId")
    x: int
    y: int
    direction: int = Field(serialization_alias="dir", description="0=left, 1=right")
    font: int
    text_width: int = Field(serialization_alias="TextWidth")
    speed: int
    text_string: str = Field(serialization_alias="TextString")
    color: str = Field(description='Hex color, e.g. "#FFFF00"')
    align: int = Field(description="1=left, 2=middle, 3=right")


class ClearHttpText(DeviceCommand):
    command: ClassVar[str] = "Draw/ClearHttpText"


class SendRemote(DeviceCommand):
    command: ClassVar[str] = "Draw/SendRemote"

    file_id: str = Field(serialization_alias="FileId")


class SendHttpItemList(DeviceCommand):
    command: ClassVar[str] = "Draw/SendHttpItemList"

    item_list: list[dict[str, Any]] = Field(serialization_alias="ItemList")


# Tools


class SetTimer(DeviceCommand):
    command: ClassVar[str] = "Tools/SetTimer"

    minute: int = Field(serialization_alias="Minute", ge=0)
    second: int = Field(serialization_alias="Second", ge=0)
    status: int = Field(serialization_alias="Status", description="1=start, 0=stop")


class SetStopwatch(DeviceCommand):
    command: ClassVar[str] = "Tools/SetStopWatch"

    status: int = Field(serialization_alias="Status", description="0=stop, 1=start, 2=reset")


class SetScoreboard(DeviceCommand):
    command: ClassVar[str] = "Tools/SetScoreBoard"

    blue_score: int = Field(serialization_alias="BlueScore", ge=0)
    red_score: int = Field(serialization_alias="RedScore", ge=0)


class SetNoiseStatus(DeviceCommand):
    command: ClassVar[str] = "Tools/SetNoiseStatus"

    noise_status: int = Field(serialization_alias="NoiseStatus", description="1=start, 0=stop")


# Batch and external command sources


class CommandList(DeviceCommand):
    command: ClassVar[str] = "Draw/CommandList"

    command_list: list[dict[str, Any]] = Field(serialization_alias="CommandList")


class UseHttpCommandSource(DeviceCommand):
    command: ClassVar[str] = "Draw/UseHTTPCommandSource"

    url: str = Field(serialization_alias="Url")
