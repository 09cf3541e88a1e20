"""Pixel buffer and its wire encodings."""

import base64
import operator
from typing import Optional

from PIL import Image

from pixoo_pusher.errors import PixelOutOfRangeError

DEFAULT_WIDTH = 64
DEFAULT_HEIGHT = 32
COLOR_MASK = 0xFFFFFF


def rgb(r: int, g: int, b: int) -> int:
    """Pack 8-bit channels into a 0xRRGGBB integer."""
    return ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def parse_color(color: str) -> int:
    """Parse a hex color string to a packed 0xRRGGBB integer.

    Args:
        color: Hex color string (e.g., "#FF0000" or "FF0000")

    Returns:
        Packed 24-bit color
    """
    color = color.lstrip("#")
    if len(color) != 6:
        raise ValueError(f"Invalid color: {color}")
    return int(color, 16)


class FrameBuffer:
    """A width x height grid of 24-bit colors stored row-major."""

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT):
        """Initialize an all-black frame.

        Args:
            width: Number of columns
            height: Number of rows
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid frame size: {width}x{height}")
        self.width = width
        self.height = height
        self._pixels: list[int] = [0] * (width * height)

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _offset(self, x: int, y: int) -> int:
        x, y = operator.index(x), operator.index(y)
        if not self._in_bounds(x, y):
            raise PixelOutOfRangeError(x, y, self.width, self.height)
        return y * self.width + x

    def set_pixel(self, x: int, y: int, color: int) -> None:
        """Set a single pixel.

        Args:
            x: Column (0 to width - 1)
            y: Row (0 to height - 1)
            color: Any integer; only the low 24 bits are stored

        Raises:
            PixelOutOfRangeError: If (x, y) is outside the frame
            TypeError: If x or y is not an integer
        """
        self._pixels[self._offset(x, y)] = color & COLOR_MASK

    def get_pixel(self, x: int, y: int) -> int:
        """Get a single pixel as 0xRRGGBB.

        Raises:
            PixelOutOfRangeError: If (x, y) is outside the frame
        """
        return self._pixels[self._offset(x, y)]

    def _plot(self, x: int, y: int, color: int) -> None:
        # Drawing helpers clip instead of raising.
        if self._in_bounds(x, y):
            self._pixels[y * self.width + x] = color & COLOR_MASK

    def fill(self, color: int = 0) -> None:
        """Set every pixel to one color."""
        self._pixels = [color & COLOR_MASK] * (self.width * self.height)

    def draw_rect(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        color: int,
        filled: bool = True,
    ) -> None:
        """Draw a rectangle, clipped to the frame.

        Args:
            x: Top-left X coordinate
            y: Top-left Y coordinate
            width: Rectangle width
            height: Rectangle height
            color: Packed 0xRRGGBB color
            filled: If True, fill the rectangle; otherwise draw outline only
        """
        if filled:
            for py in range(y, y + height):
                for px in range(x, x + width):
                    self._plot(px, py, color)
        else:
            for px in range(x, x + width):
                self._plot(px, y, color)
                self._plot(px, y + height - 1, color)
            for py in range(y, y + height):
                self._plot(x, py, color)
                self._plot(x + width - 1, py, color)

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, color: int) -> None:
        """Draw a line using Bresenham's algorithm, clipped to the frame."""
        dx = abs(x2 - x1)
        dy = abs(y2 - y1)
        sx = 1 if x1 < x2 else -1
        sy = 1 if y1 < y2 else -1
        err = dx - dy

        x, y = x1, y1
        while True:
            self._plot(x, y, color)
            if x == x2 and y == y2:
                break
            e2 = 2 * err
            if e2 > -dy:
                err -= dy
                x += sx
            if e2 < dx:
                err += dx
                y += sy

    def draw_image(
        self,
        x: int,
        y: int,
        image: Image.Image,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> None:
        """Draw an image onto the frame.

        Args:
            x: Top-left X coordinate
            y: Top-left Y coordinate
            image: PIL Image to draw
            width: Scale width (None = original)
            height: Scale height (None = original)
        """
        if width or height:
            image = image.resize(
                (width or image.width, height or image.height), Image.Resampling.NEAREST
            )

        if image.mode != "RGBA":
            image = image.convert("RGBA")

        for py in range(image.height):
            for px in range(image.width):
                r, g, b, a = image.getpixel((px, py))
                if a > 128:
                    self._plot(x + px, y + py, rgb(r, g, b))

    @classmethod
    def from_image(
        cls,
        image: Image.Image,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
    ) -> "FrameBuffer":
        """Build a frame from a PIL image scaled to width x height."""
        frame = cls(width, height)
        frame.draw_image(0, 0, image, width, height)
        return frame

    def to_flat_list(self) -> list[int]:
        """Return a copy of the pixels in row-major order."""
        return list(self._pixels)

    def to_packed_bytes(self) -> bytes:
        """Pack pixels as consecutive [R, G, B] byte triples."""
        data = bytearray(3 * len(self._pixels))
        for i, color in enumerate(self._pixels):
            data[3 * i] = (color >> 16) & 0xFF
            data[3 * i + 1] = (color >> 8) & 0xFF
            data[3 * i + 2] = color & 0xFF
        return bytes(data)

    def to_base64(self) -> str:
        """Standard base64 of ``to_packed_bytes()``, no line breaks."""
        return base64.b64encode(self.to_packed_bytes()).decode("ascii")

    def to_image(self) -> Image.Image:
        """Convert frame to an RGB PIL Image."""
        return Image.frombytes("RGB", (self.width, self.height), self.to_packed_bytes())

    def save(self, path: str) -> None:
        """Save frame as image file.

        Args:
            path: Output file path (PNG, JPG, etc.)
        """
        self.to_image().save(path)

    def __repr__(self) -> str:
        return f"FrameBuffer(width={self.width}, height={self.height})"
