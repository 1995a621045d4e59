"""Tests for the shortlink proxy and its relay fallback."""

from __future__ import annotations

import gzip
import io
from unittest.mock import MagicMock, patch

import pytest
import requests
from urllib3.exceptions import ProtocolError
from urllib3.response import HTTPResponse

from modules.downloader.errors import RelayFetchFailure, ShortlinkUpstreamError
from modules.shortlink.resolver import ShortlinkResolver, should_relay

from .conftest import build_response

SERVICE_URL = "https://short.example/get.php"
VIDEO_URL = "https://cdn.example/clip"
FALLBACK_PAYLOAD = {"status": "error", "message": "wrong type of the web page content"}
PAGE = b"<html>" + b"<p>wrong type of the web page content</p>" * 200 + b"</html>"


def build_gzip_response(body: bytes) -> requests.Response:
    """A streamed response whose raw body is still gzip-compressed, as requests sees it on the wire."""
    compressed = gzip.compress(body)
    headers = {
        "Content-Type": "text/html",
        "Content-Encoding": "gzip",
        "Content-Length": str(len(compressed)),
    }
    response = requests.Response()
    response.status_code = 200
    response.headers.update(headers)
    response.raw = HTTPResponse(
        body=io.BytesIO(compressed),
        headers=headers,
        status=200,
        preload_content=False,
        decode_content=False,
    )
    return response


def build_broken_stream_response(headers=None) -> requests.Response:
    """A streamed response whose connection drops on the first read."""
    response = requests.Response()
    response.status_code = 200
    response.headers.update(headers or {})
    response.raw = MagicMock()
    response.raw.stream.side_effect = ProtocolError("Connection broken: reset")
    response.close = MagicMock()
    return response


@pytest.mark.parametrize(
    "payload,expected",
    [
        (FALLBACK_PAYLOAD, True),
        ({"status": "error", "message": "This is Not A Valid Video File"}, True),
        ({"status": "error", "message": "quota exceeded"}, False),
        ({"status": "ok", "message": "wrong type of the web page content"}, False),
        (["status", "error"], False),
        (None, False),
    ],
)
def test_should_relay(payload, expected):
    assert should_relay(payload) is expected


class TestShortlinkResolver:

    def make_resolver(self, *responses):
        session = MagicMock()
        session.get.side_effect = list(responses)
        return ShortlinkResolver(base_url=SERVICE_URL, timeout=3, chunk_size=4, session=session)

    def test_json_passthrough(self):
        payload = {"status": "success", "url": "https://sho.rt/abc"}
        resolver = self.make_resolver(build_response(200, payload))

        outcome = resolver.resolve(VIDEO_URL, "web")

        assert outcome.payload == payload
        assert outcome.relay is None
        resolver.session.get.assert_called_once_with(
            SERVICE_URL, params={"send": VIDEO_URL, "source": "web"}, timeout=3
        )

    def test_fallback_opens_stream(self):
        video = build_response(200, b"0123456789", {"Content-Length": "10"})
        resolver = self.make_resolver(build_response(200, FALLBACK_PAYLOAD), video)

        outcome = resolver.resolve(VIDEO_URL)

        assert outcome.payload is None
        relay = outcome.relay
        assert relay.content_type == "video/mp4"
        assert relay.headers == {
            "Content-Disposition": 'inline; filename="video.mp4"',
            "Content-Length": "10",
        }
        assert list(relay.iter_chunks()) == [b"0123", b"4567", b"89"]
        second_call = resolver.session.get.call_args_list[1]
        assert second_call[0][0] == VIDEO_URL
        assert second_call[1]["stream"] is True

    def test_compressed_upstream_is_relayed_as_is(self):
        resolver = self.make_resolver(build_response(200, FALLBACK_PAYLOAD), build_gzip_response(PAGE))

        relay = resolver.resolve(VIDEO_URL).relay
        streamed = b"".join(relay.iter_chunks())

        assert relay.headers["Content-Encoding"] == "gzip"
        assert int(relay.headers["Content-Length"]) == len(streamed)
        assert gzip.decompress(streamed) == PAGE

    def test_stream_drop_ends_iteration_and_closes(self):
        broken = build_broken_stream_response({"Content-Encoding": "gzip"})
        resolver = self.make_resolver(build_response(200, FALLBACK_PAYLOAD), broken)

        relay = resolver.resolve(VIDEO_URL).relay

        with pytest.raises(requests.exceptions.ChunkedEncodingError):
            list(relay.iter_chunks())
        broken.close.assert_called()

    def test_invalid_json(self):
        resolver = self.make_resolver(build_response(200, "<html>oops</html>"))

        with pytest.raises(ShortlinkUpstreamError, match="not JSON"):
            resolver.resolve(VIDEO_URL)

    def test_service_unreachable(self):
        session = MagicMock()
        session.get.side_effect = requests.exceptions.ConnectionError("refused")
        resolver = ShortlinkResolver(base_url=SERVICE_URL, timeout=3, chunk_size=4, session=session)

        with pytest.raises(ShortlinkUpstreamError, match="Failed to connect to get.php"):
            resolver.resolve(VIDEO_URL)

    def test_relay_http_error(self):
        resolver = self.make_resolver(build_response(200, FALLBACK_PAYLOAD), build_response(404, b"gone"))

        with pytest.raises(RelayFetchFailure, match="HTTP 404"):
            resolver.resolve(VIDEO_URL)

    def test_relay_network_error(self):
        resolver = self.make_resolver(
            build_response(200, FALLBACK_PAYLOAD),
            requests.exceptions.ConnectionError("reset"),
        )

        with pytest.raises(RelayFetchFailure, match="Relay fallback failed"):
            resolver.resolve(VIDEO_URL)


class TestProxyRoute:

    def test_missing_send(self, client):
        response = client.get("/proxy/get.php")

        assert response.status_code == 400
        assert response.get_json() == {"status": "error", "message": "Missing 'send' parameter."}

    def test_json_passthrough(self, client):
        payload = {"status": "success", "short": "https://sho.rt/x"}
        with patch.object(requests.Session, "get", return_value=build_response(200, payload)) as mock_get:
            response = client.get("/proxy/get.php", query_string={"send": VIDEO_URL, "source": "bot"})

        assert response.status_code == 200
        assert response.get_json() == payload
        assert mock_get.call_args[1]["params"] == {"send": VIDEO_URL, "source": "bot"}

    def test_relay_streams_upstream_bytes(self, client):
        video = build_response(200, b"video-bytes", {"Content-Type": "video/webm"})
        with patch.object(
            requests.Session, "get", side_effect=[build_response(200, FALLBACK_PAYLOAD), video]
        ):
            response = client.get("/proxy/get.php", query_string={"send": VIDEO_URL})
            body = response.get_data()

        assert response.status_code == 200
        assert body == b"video-bytes"
        assert response.headers["Content-Type"] == "video/webm"
        assert response.headers["Content-Disposition"] == 'inline; filename="video.mp4"'

    def test_relay_keeps_gzip_body_and_length_consistent(self, client):
        with patch.object(
            requests.Session, "get", side_effect=[build_response(200, FALLBACK_PAYLOAD), build_gzip_response(PAGE)]
        ):
            response = client.get("/proxy/get.php", query_string={"send": VIDEO_URL})
            body = response.get_data()

        assert response.status_code == 200
        assert response.headers["Content-Encoding"] == "gzip"
        assert int(response.headers["Content-Length"]) == len(body)
        assert gzip.decompress(body) == PAGE

    def test_relay_drop_mid_stream_ends_response(self, client):
        broken = build_broken_stream_response({"Content-Type": "video/mp4"})
        with patch.object(requests.Session, "get", side_effect=[build_response(200, FALLBACK_PAYLOAD), broken]):
            response = client.get("/proxy/get.php", query_string={"send": VIDEO_URL})

            assert response.status_code == 200
            with pytest.raises(requests.exceptions.ChunkedEncodingError):
                response.get_data()
            response.close()

        broken.close.assert_called()

    def test_head_request_releases_upstream(self, client):
        video = build_response(200, b"video-bytes", {"Content-Type": "video/mp4"})
        video.close = MagicMock()
        with patch.object(requests.Session, "get", side_effect=[build_response(200, FALLBACK_PAYLOAD), video]):
            response = client.head("/proxy/get.php", query_string={"send": VIDEO_URL})
            response.close()

        assert response.status_code == 200
        video.close.assert_called()

    def test_invalid_json_is_500(self, client):
        with patch.object(requests.Session, "get", return_value=build_response(200, "not json")):
            response = client.get("/proxy/get.php", query_string={"send": VIDEO_URL})

        assert response.status_code == 500
        assert response.get_json() == {"status": "error", "message": "Invalid shortlink response (not JSON)."}

    def test_relay_failure_is_500(self, client):
        with patch.object(
            requests.Session, "get",
            side_effect=[build_response(200, FALLBACK_PAYLOAD), build_response(503, b"")],
        ):
            response = client.get("/proxy/get.php", query_string={"send": VIDEO_URL})

        assert response.status_code == 500
        assert response.get_json() == {"status": "error", "message": "Relay fallback failed: HTTP 503"}
