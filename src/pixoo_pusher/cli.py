"""CLI for pixoo_pusher."""

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
from PIL import Image

from pixoo_pusher import __version__
from pixoo_pusher.core.discovery import get_device, scan_network
from pixoo_pusher.core.frame import FrameBuffer, parse_color, rgb
from pixoo_pusher.core.pixoo import CLOUD_PORT, Pixoo
from pixoo_pusher.core.transport import Transport
from pixoo_pusher.errors import PixooError
from pixoo_pusher.models.config import Settings
from pixoo_pusher.protocol.cloud_client import CloudClient

app = typer.Typer(
    name="pixoo",
    help="Control Divoom Pixoo displays",
    no_args_is_help=True,
)


def setup_logging(verbose: bool = False, log_level: str = "INFO") -> None:
    """Configure logging.

    Args:
        verbose: Log at DEBUG regardless of ``log_level``
        log_level: Level name used otherwise (e.g. "WARNING")
    """
    level = logging.DEBUG if verbose else log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


@contextmanager
def _failures(action: str) -> Iterator[None]:
    """Report library errors as one line on stderr and exit 1."""
    try:
        yield
    except PixooError as e:
        typer.echo(f"{action} failed: {e}", err=True)
        raise typer.Exit(1)


def _connect(ctx: typer.Context, host: Optional[str]) -> Pixoo:
    settings: Settings = ctx.obj["settings"]
    host = host or settings.host
    if host:
        return Pixoo(
            host,
            device_id=settings.device_id,
            cloud_host=settings.cloud_host,
            timeout=settings.timeout,
        )

    device = get_device(settings.config_dir, cloud_host=settings.cloud_host)
    if device is None:
        typer.echo("No device found.", err=True)
        raise typer.Exit(1)
    return device


def _cloud(ctx: typer.Context) -> CloudClient:
    settings: Settings = ctx.obj["settings"]
    return CloudClient(
        Transport(settings.cloud_host, port=CLOUD_PORT, timeout=settings.timeout, use_ssl=True)
    )


def _report(ok: bool, message: str) -> None:
    if not ok:
        typer.echo("Device rejected the command.", err=True)
        raise typer.Exit(1)
    typer.echo(message)


HostOption = typer.Option(None, "--host", help="IP address of Pixoo device (auto-discover if not specified)")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
) -> None:
    """Control Divoom Pixoo displays."""
    settings = Settings()
    setup_logging(verbose, settings.log_level)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["settings"] = settings


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"pixoo-pusher v{__version__}")


@app.command()
def discover(ctx: typer.Context) -> None:
    """List Pixoo devices the cloud reports on this network."""
    settings: Settings = ctx.obj["settings"]
    typer.echo("Asking the Divoom cloud for devices on this network...")

    with _failures("Discovery"):
        devices = scan_network(settings.cloud_host)

    if devices:
        typer.echo(f"\nFound {len(devices)} device(s):")
        for device in devices:
            typer.echo(
                f"  - {device.get('DeviceName', '?')} "
                f"(id {device.get('DeviceId', '?')}) at {device.get('DevicePrivateIP', '?')}"
            )
    else:
        typer.echo("\nNo devices found.")
        typer.echo("Make sure your Pixoo is powered on and connected to the same network.")


@app.command()
def info(ctx: typer.Context, host: Optional[str] = HostOption) -> None:
    """Show device settings."""
    with _failures("Reading device settings"):
        device = _connect(ctx, host)
        settings = device.get_all_settings()

    typer.echo(f"Pixoo at {device.host}")
    typer.echo(json.dumps(settings, indent=2))


@app.command()
def brightness(
    ctx: typer.Context,
    level: int = typer.Argument(..., min=0, max=100, help="Brightness level (0-100)"),
    host: Optional[str] = HostOption,
) -> None:
    """Set display brightness."""
    with _failures("Setting brightness"):
        _report(_connect(ctx, host).set_brightness(level), f"Brightness set to {level}%")


@app.command()
def on(ctx: typer.Context, host: Optional[str] = HostOption) -> None:
    """Turn display on."""
    with _failures("Turning display on"):
        _report(_connect(ctx, host).screen_on(), "Display turned on")


@app.command()
def off(ctx: typer.Context, host: Optional[str] = HostOption) -> None:
    """Turn display off."""
    with _failures("Turning display off"):
        _report(_connect(ctx, host).screen_off(), "Display turned off")


@app.command()
def channel(
    ctx: typer.Context,
    index: Optional[int] = typer.Argument(
        None, min=0, max=4, help="0=Faces, 1=Cloud, 2=Visualizer, 3=Custom, 4=Blackout"
    ),
    host: Optional[str] = HostOption,
) -> None:
    """Show or select the active channel."""
    with _failures("Channel"):
        device = _connect(ctx, host)
        if index is None:
            typer.echo(f"Current channel: {device.get_channel_index()}")
            return
        _report(device.set_channel_index(index), f"Channel set to {index}")


@app.command()
def time(
    ctx: typer.Context,
    utc: Optional[int] = typer.Option(None, "--set", help="Set the device clock to this UTC timestamp"),
    host: Optional[str] = HostOption,
) -> None:
    """Show or set the device clock."""
    with _failures("Device time"):
        device = _connect(ctx, host)
        if utc is None:
            typer.echo(f"Device time (UTC): {device.get_time()}")
            return
        _report(device.set_time(utc), f"Device time set to {utc}")


@app.command()
def clear(
    ctx: typer.Context,
    color: str = typer.Option("#000000", "--color", help="Fill color (hex)"),
    width: int = typer.Option(64, "--width", help="Frame width"),
    height: int = typer.Option(64, "--height", help="Frame height"),
    host: Optional[str] = HostOption,
) -> None:
    """Clear the display with a solid color."""
    try:
        fill = parse_color(color)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--color")

    with _failures("Clearing display"):
        device = _connect(ctx, host)
        _report(
            device.draw(lambda frame: frame.fill(fill), width=width, height=height),
            f"Display cleared with color #{fill:06X}",
        )


@app.command()
def demo(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Save demo frame to image file instead of sending to device",
    ),
    host: Optional[str] = HostOption,
) -> None:
    """Render a demo frame to test the display."""
    frame = FrameBuffer(64, 64)
    frame.fill(parse_color("#000033"))

    frame.draw_rect(0, 0, 64, 10, rgb(0, 50, 100), filled=True)
    frame.draw_line(0, 10, 63, 10, rgb(100, 100, 100))

    frame.draw_rect(5, 20, 15, 15, rgb(255, 0, 0), filled=True)
    frame.draw_rect(25, 20, 15, 15, rgb(0, 255, 0), filled=True)
    frame.draw_rect(45, 20, 15, 15, rgb(0, 0, 255), filled=True)
    frame.draw_rect(2, 40, 60, 20, rgb(255, 255, 255), filled=False)

    if output:
        frame.save(str(output))
        typer.echo(f"Demo frame saved to {output}")
        return

    with _failures("Sending demo frame"):
        device = _connect(ctx, host)
        _report(device.upload_frame(frame), f"Demo frame sent to device at {device.host}")


@app.command()
def image(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Image file to display"),
    size: int = typer.Option(64, "--size", help="Display size in pixels"),
    host: Optional[str] = HostOption,
) -> None:
    """Send an image file to the display."""
    if not path.exists():
        typer.echo(f"Image file not found: {path}", err=True)
        raise typer.Exit(1)

    with Image.open(path) as img:
        frame = FrameBuffer.from_image(img, size, size)

    with _failures("Sending image"):
        device = _connect(ctx, host)
        _report(device.upload_frame(frame), f"Sent {path.name} to device at {device.host}")


@app.command()
def fonts(
    ctx: typer.Context,
    font_type: int = typer.Option(0, "--type", help="Font type"),
) -> None:
    """List clock face fonts from the cloud."""
    with _failures("Listing fonts"):
        font_list = _cloud(ctx).list_fonts(font_type)
    typer.echo(json.dumps(font_list, indent=2))


@app.command("dial-types")
def dial_types(ctx: typer.Context) -> None:
    """List clock face categories from the cloud."""
    with _failures("Listing dial types"):
        names = _cloud(ctx).list_dial_types()
    for name in names:
        typer.echo(f"  {name}")


@app.command()
def dials(
    ctx: typer.Context,
    dial_type: str = typer.Argument(..., help="Clock face category"),
    page: int = typer.Option(1, "--page", min=1, help="Result page"),
) -> None:
    """List clock faces of one category from the cloud."""
    with _failures("Listing clock faces"):
        result = _cloud(ctx).list_dials(dial_type, page=page)
    typer.echo(f"{result['total']} clock face(s), page {page}:")
    typer.echo(json.dumps(result["dials"], indent=2))


@app.command()
def galleries(
    ctx: typer.Context,
    gallery_type: str = typer.Argument(..., help="Gallery type"),
    page: int = typer.Option(1, "--page", min=1, help="Result page"),
) -> None:
    """List image galleries from the cloud."""
    with _failures("Listing galleries"):
        result = _cloud(ctx).list_galleries(gallery_type, page=page)
    typer.echo(f"{result['total']} galleries, page {page}:")
    typer.echo(json.dumps(result["galleries"], indent=2))


@app.command()
def images(
    ctx: typer.Context,
    gallery_id: str = typer.Argument(..., help="Gallery id"),
    page: int = typer.Option(1, "--page", min=1, help="Result page"),
) -> None:
    """List images within a gallery from the cloud."""
    with _failures("Listing images"):
        result = _cloud(ctx).list_images(gallery_id, page=page)
    typer.echo(f"{result['total']} image(s), page {page}:")
    typer.echo(json.dumps(result["images"], indent=2))


if __name__ == "__main__":
    app()
