"""Client for the Divoom cloud API (app.divoom-gz.com).

All calls are HTTPS POSTs with JSON in and out. Responses carry fixed
top-level keys per endpoint; there is no shared status field.
"""

import logging
from typing import Any, Union

from pixoo_pusher.core.transport import RequestBody, Transport
from pixoo_pusher.errors import DecodeError

logger = logging.getLogger(__name__)


class CloudClient:
    """Queries device, font, dial and gallery catalogs."""

    def __init__(self, transport: Transport):
        """Initialize cloud client.

        Args:
            transport: Transport pointing at the cloud host
        """
        self._transport = transport

    @property
    def transport(self) -> Transport:
        return self._transport

    def discover_devices(self) -> list[dict[str, Any]]:
        """List Pixoo devices registered on the caller's LAN.

        Returns:
            Device entries (DeviceName, DeviceId, DevicePrivateIP, ...)
        """
        body = self._post("/Device/ReturnSameLANDevice", {})
        devices = self._require(body, "DeviceList", "/Device/ReturnSameLANDevice")
        logger.info(f"Cloud reported {len(devices)} device(s) on this LAN")
        return devices

    def list_fonts(self, font_type: int) -> list[dict[str, Any]]:
        path = "/Device/GetTimeDialFontList"
        body = self._post(path, {"FontType": font_type})
        return self._require(body, "FontList", path)

    def list_dials(self, dial_type: Union[str, int], page: int = 1) -> dict[str, Any]:
        """Fetch one page of clock faces of a given type.

        Returns:
            {"dials": [...], "total": <int>}
        """
        path = "/Channel/GetDialList"
        body = self._post(path, {"DialType": dial_type, "Page": page})
        return {
            "dials": self._require(body, "DialList", path),
            "total": self._require(body, "TotalNum", path),
        }

    def list_dial_types(self) -> list[str]:
        """Fetch clock face categories."""
        path = "/Channel/GetDialType"
        body = self._post(path, {})
        return self._require(body, "DialTypeList", path)

    def list_galleries(self, gallery_type: Union[str, int], page: int = 1) -> dict[str, Any]:
        """Fetch one page of image galleries.

        Returns:
            {"galleries": [...], "total": <int>}
        """
        path = "/Channel/GetGalleryList"
        body = self._post(path, {"GalleryType": gallery_type, "Page": page})
        return {
            "galleries": self._require(body, "GalleryList", path),
            "total": self._require(body, "TotalNum", path),
        }

    def list_images(self, gallery_id: Union[str, int], page: int = 1) -> dict[str, Any]:
        """Fetch one page of images within a gallery.

        Returns:
            {"images": [...], "total": <int>}
        """
        path = "/Channel/GetImageList"
        body = self._post(path, {"GalleryId": gallery_id, "Page": page})
        return {
            "images": self._require(body, "ImageList", path),
            "total": self._require(body, "TotalNum", path),
        }

    def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        logger.debug(f"Querying cloud {path}")
        response = self._transport.post(path, payload=RequestBody.json(payload), parse_json=False)

        try:
            body = response.json()
        except ValueError as e:
            raise DecodeError(
                f"Cloud JSON parse error: {e}", method="POST", path=path, surface="cloud"
            ) from e

        if not isinstance(body, dict):
            raise DecodeError(
                f"Cloud JSON parse error: expected an object, got {type(body).__name__}",
                method="POST",
                path=path,
                surface="cloud",
            )
        return body

    @staticmethod
    def _require(body: dict[str, Any], field: str, path: str) -> Any:
        try:
            return body[field]
        except KeyError:
            raise DecodeError(
                f"Cloud response missing required field '{field}'",
                method="POST",
                path=path,
                surface="cloud",
            ) from None

    def __repr__(self) -> str:
        return f"CloudClient(transport={self._transport!r})"
