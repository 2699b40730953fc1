"""
Pytest configuration: default runs unit tests; use --run-slow to include live API tests.
"""

import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

import pytest

from claysculptor.core.config import Config
from claysculptor.core.providers import GeneratedImage

# 1x1 transparent PNG, base64-encoded the way the Gemini REST API returns images
ONE_PIXEL_PNG_B64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run slow tests (live Gemini API). Default: skip them.",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--run-slow", False):
        return
    skip_slow = pytest.mark.skip(reason="Slow test; run with --run-slow to include")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


class StubBackend:
    """In-memory backend: raises queued errors first, then returns ``images``."""

    def __init__(self, images: list[GeneratedImage] | None = None) -> None:
        self.images = (
            images
            if images is not None
            else [GeneratedImage(image_bytes=ONE_PIXEL_PNG_B64, mime_type="image/png")]
        )
        self.errors: list[Exception] = []
        self.fail_on_call: int | None = None
        self.calls: list[dict] = []

    async def generate_images(self, prompt, model, *, number_of_images, api_key, config):
        self.calls.append(
            {
                "prompt": prompt,
                "model": model,
                "number_of_images": number_of_images,
                "api_key": api_key,
            }
        )
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise RuntimeError(f"backend failure on call {self.fail_on_call}")
        if self.errors:
            raise self.errors.pop(0)
        return list(self.images)


class _PredictHandler(BaseHTTPRequestHandler):
    """Answers every POST with one base64 PNG prediction, like the predict endpoint."""

    def do_POST(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        raw = self.rfile.read(length) if length else b""
        self.server.received.append(
            {
                "path": self.path,
                "api_key": self.headers.get("x-goog-api-key"),
                "body": json.loads(raw) if raw else {},
            }
        )
        payload = json.dumps(
            {"predictions": [{"bytesBase64Encoded": ONE_PIXEL_PNG_B64, "mimeType": "image/png"}]}
        ).encode()
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args) -> None:
        pass


@pytest.fixture
def png_b64() -> str:
    return ONE_PIXEL_PNG_B64


@pytest.fixture
def png_magic() -> bytes:
    return PNG_MAGIC


@pytest.fixture
def make_backend() -> type[StubBackend]:
    """The StubBackend class, for tests that need custom images or a subclass."""
    return StubBackend


@pytest.fixture
def stub_backend() -> StubBackend:
    return StubBackend()


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Validated-looking config that writes under tmp_path and never sleeps between retries."""
    return Config(
        gemini_api_key="test-key",
        output_dir=tmp_path / "output",
        retry_base_delay=0.0,
        retry_max_delay=0.0,
    )


@pytest.fixture
def predict_server(monkeypatch: pytest.MonkeyPatch):
    """
    Local HTTP server standing in for the Gemini predict endpoint.

    Yields the server; ``server.base_url`` is an api_base_url for Config and
    ``server.received`` records each request's path, API key and JSON body.
    """
    for name in ("NO_PROXY", "no_proxy"):
        monkeypatch.setenv(name, "127.0.0.1,localhost")
    monkeypatch.delenv("GOOGLE_GENAI_USE_VERTEXAI", raising=False)

    server = ThreadingHTTPServer(("127.0.0.1", 0), _PredictHandler)
    server.received = []
    server.base_url = f"http://127.0.0.1:{server.server_port}/v1beta"
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()
    thread.join(timeout=5)
