"""Pytest configuration and shared fixtures.

This module provides:
- Client configurations and clients
- A patched requests.Session for the HTTP layer
- A local HTTP endpoint that records the requests it receives
- Sample job specifications and notification bodies
"""

import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any, Dict, Generator, List, Tuple
from unittest.mock import MagicMock, patch

import pytest

from zencoder_client import ClientConfig, EncodingJobClient, JobSpec, Output, Stream

TEST_ENDPOINT = "https://zencoder.test/api/v2/jobs"


def make_response(status_code: int = 200, text: str = "") -> MagicMock:
    """Build a stand-in for requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    return response


# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def config() -> ClientConfig:
    """Configuration pointing at a test endpoint."""
    return ClientConfig(api_key="test-api-key", api_endpoint=TEST_ENDPOINT)


@pytest.fixture
def client(config: ClientConfig) -> EncodingJobClient:
    """JSON client against the test endpoint."""
    return EncodingJobClient(config)


@pytest.fixture
def mock_session() -> Generator[MagicMock, None, None]:
    """Patch requests.Session as used by the client and yield the session instance."""
    with patch("zencoder_client.client.requests.Session") as session_cls:
        session = session_cls.return_value
        session.post.return_value = make_response(200, '{"id": 123}')
        yield session


# =============================================================================
# Sample Data
# =============================================================================


@pytest.fixture
def minimal_job() -> JobSpec:
    """Job with only an input."""
    return JobSpec(input="s3://bucket/input.mov")


@pytest.fixture
def full_job() -> JobSpec:
    """Job using every supported field."""
    return JobSpec(
        input="s3://bucket/input.mov",
        outputs=[
            Output(
                label="web",
                format="mp4",
                url="s3://bucket/output/web.mp4",
                video_bitrate=1500,
                height=720,
                notifications=["ops@example.com"],
                headers={"Cache-Control": "max-age=3600"},
            ),
            Output(
                type="playlist",
                streaming_delivery_format="hls",
                url="s3://bucket/output/playlist.m3u8",
                credentials="s3-production",
                streams=[Stream(source="web", path="web/index.m3u8")],
            ),
        ],
        notifications=["https://example.com/notify"],
        test=True,
        region="europe",
        pass_through="order-42",
    )


@pytest.fixture
def sample_notification() -> Dict[str, Any]:
    """Notification body as posted by the service when a job finishes."""
    return {
        "job": {
            "id": 1234567,
            "state": "finished",
            "created_at": "2013-04-26T16:19:40Z",
            "updated_at": "2013-04-26T16:21:53Z",
            "submitted_at": "2013-04-26T16:19:40Z",
            "pass_through": "order-42",
            "test": True,
        },
        "input": {
            "id": 1234,
            "format": "mpeg4",
            "duration_in_ms": 24883,
            "video_codec": "h264",
            "audio_codec": "aac",
            "width": 1920,
            "height": 1080,
            "frame_rate": 29.97,
            "md5_checksum": "7f106918e02a69466afa0ee014174143",
            "file_size_in_bytes": 1862748,
            "state": "finished",
        },
        "outputs": [
            {
                "id": 4321,
                "label": "web",
                "url": "https://bucket.s3.amazonaws.com/output/web.mp4",
                "state": "finished",
                "format": "mpeg4",
                "duration_in_ms": 24883,
                "video_codec": "h264",
                "audio_codec": "aac",
                "video_bitrate_in_kbps": 1441,
                "audio_bitrate_in_kbps": 59,
                "total_bitrate_in_kbps": 1500,
                "width": 1280,
                "height": 720,
                "md5_checksum": "1cd5b0e8b3c1a4f9f1f5a1b1e1b0f0c0",
                "file_size_in_bytes": 4679552,
                "thumbnails": [
                    {
                        "label": "poster",
                        "images": [
                            {
                                "url": "https://bucket.s3.amazonaws.com/thumbs/frame_0000.png",
                                "format": "PNG",
                                "dimensions": "1280x720",
                                "file_size_bytes": 123456,
                            }
                        ],
                    }
                ],
            }
        ],
    }


# =============================================================================
# Local HTTP Endpoint
# =============================================================================


class RecordingHandler(BaseHTTPRequestHandler):
    """Answers from the server's route table and records every request."""

    def _handle(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        self.server.received.append({
            "method": self.command,
            "path": self.path,
            "headers": dict(self.headers),
            "body": body,
        })

        status, headers, text = self.server.routes.get(
            (self.command, self.path), (404, {}, "not found")
        )
        payload = text.encode("utf-8")
        self.send_response(status)
        for name, value in headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    do_GET = _handle
    do_POST = _handle

    def log_message(self, format: str, *args: Any) -> None:
        pass


class LocalEndpoint:
    """A threaded HTTP server on 127.0.0.1 with a configurable route table."""

    def __init__(self) -> None:
        self.server = HTTPServer(("127.0.0.1", 0), RecordingHandler)
        self.server.routes: Dict[Tuple[str, str], Tuple[int, Dict[str, str], str]] = {}
        self.server.received: List[Dict[str, Any]] = []
        self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)

    def url(self, path: str) -> str:
        host, port = self.server.server_address
        return f"http://{host}:{port}{path}"

    def route(self, method: str, path: str, status: int, text: str = "", headers: Dict[str, str] = None) -> None:
        self.server.routes[(method, path)] = (status, headers or {}, text)

    @property
    def received(self) -> List[Dict[str, Any]]:
        return self.server.received


@pytest.fixture
def local_endpoint() -> Generator[LocalEndpoint, None, None]:
    """Real HTTP endpoint for exercising the client over a socket."""
    endpoint = LocalEndpoint()
    endpoint.thread.start()
    try:
        yield endpoint
    finally:
        endpoint.server.shutdown()
        endpoint.server.server_close()
