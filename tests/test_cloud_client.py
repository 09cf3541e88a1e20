"""Tests for the Divoom cloud API client."""

from unittest.mock import Mock

import pytest
import requests

from pixoo_pusher.core.transport import Transport
from pixoo_pusher.errors import DecodeError, NetworkError
from pixoo_pusher.protocol.cloud_client import CloudClient
from tests.conftest import make_response, make_session, sent_json


def client_with(body, **kwargs):
    """Build a CloudClient whose session answers with one response."""
    session = make_session(make_response(body, **kwargs))
    client = CloudClient(Transport("app.divoom-gz.com", port=443, use_ssl=True, session=session))
    return client, session


class TestCatalogQueries:
    """Test each cloud endpoint."""

    def test_discover_devices(self):
        devices = [{"DeviceName": "Pixoo64", "DeviceId": 300000001, "DevicePrivateIP": "192.168.1.20"}]
        client, session = client_with({"ReturnCode": 0, "DeviceList": devices})

        assert client.discover_devices() == devices

        args, kwargs = session.request.call_args
        assert args == ("POST", "https://app.divoom-gz.com:443/Device/ReturnSameLANDevice")
        assert sent_json(session) == {}
        assert kwargs["headers"]["Content-Type"] == "application/json"

    def test_list_fonts(self):
        fonts = [{"id": 2, "name": "8*8"}]
        client, session = client_with({"FontList": fonts})

        assert client.list_fonts(font_type=0) == fonts
        assert sent_json(session) == {"FontType": 0}

    def test_list_dials(self):
        client, session = client_with({"DialList": [{"ClockId": 1}], "TotalNum": 42})

        result = client.list_dials(dial_type="game", page=2)

        assert result == {"dials": [{"ClockId": 1}], "total": 42}
        assert sent_json(session) == {"DialType": "game", "Page": 2}
        assert session.request.call_args.args[1].endswith("/Channel/GetDialList")

    def test_list_dials_default_page(self):
        client, session = client_with({"DialList": [], "TotalNum": 0})

        client.list_dials(dial_type="Social")

        assert sent_json(session) == {"DialType": "Social", "Page": 1}

    def test_list_dial_types(self):
        client, session = client_with({"DialTypeList": ["Social", "normal", "game"]})

        assert client.list_dial_types() == ["Social", "normal", "game"]
        assert sent_json(session) == {}

    def test_list_galleries(self):
        client, session = client_with({"GalleryList": [{"GalleryId": 5}], "TotalNum": 7})

        result = client.list_galleries(gallery_type=1)

        assert result == {"galleries": [{"GalleryId": 5}], "total": 7}
        assert sent_json(session) == {"GalleryType": 1, "Page": 1}

    def test_list_images(self):
        client, session = client_with({"ImageList": [{"FileId": "x"}], "TotalNum": 1})

        result = client.list_images(gallery_id=5, page=3)

        assert result == {"images": [{"FileId": "x"}], "total": 1}
        assert sent_json(session) == {"GalleryId": 5, "Page": 3}
        assert session.request.call_args.args[1].endswith("/Channel/GetImageList")


class TestCloudErrors:
    """Test error reporting from the cloud surface."""

    def test_missing_list_field(self):
        client, _ = client_with({"ReturnCode": 0})

        with pytest.raises(DecodeError, match="Cloud response missing required field 'DeviceList'") as exc_info:
            client.discover_devices()

        assert exc_info.value.surface == "cloud"
        assert exc_info.value.path == "/Device/ReturnSameLANDevice"

    def test_missing_total(self):
        client, _ = client_with({"DialList": []})

        with pytest.raises(DecodeError, match="'TotalNum'"):
            client.list_dials(dial_type="game")

    def test_malformed_json(self):
        client, _ = client_with("<html>oops</html>")

        with pytest.raises(DecodeError, match="Cloud JSON parse error") as exc_info:
            client.list_dial_types()

        assert exc_info.value.surface == "cloud"

    def test_malformed_json_without_json_content_type(self):
        client, _ = client_with("<html>oops</html>", content_type="text/html")

        with pytest.raises(DecodeError, match="Cloud JSON parse error"):
            client.list_fonts(font_type=1)

    def test_network_error(self):
        session = Mock(spec=requests.Session)
        session.request.side_effect = requests.Timeout("read timed out")
        client = CloudClient(Transport("app.divoom-gz.com", port=443, use_ssl=True, session=session))

        with pytest.raises(NetworkError, match="Network error on POST /Channel/GetDialType"):
            client.list_dial_types()
