"""Unit tests for the REST predict backend (requests mocked)."""

import asyncio
from unittest.mock import MagicMock, patch

import pytest
import requests

from claysculptor.core.providers.rest import RestBackend
from claysculptor.utils.exceptions import APIError, NetworkError, RequestTimeoutError


def _response(status_code=200, body=None, text=""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body
    return resp


def _generate(config, number_of_images=1):
    return asyncio.run(
        RestBackend().generate_images(
            "a clay cat",
            "imagen-4.0-generate-001",
            number_of_images=number_of_images,
            api_key="test-key",
            config=config,
        )
    )


@pytest.mark.unit
class TestRestPayload:
    def test_payload_shape(self):
        payload = RestBackend()._build_payload("a clay cat", 2)
        assert payload == {
            "instances": [{"prompt": "a clay cat"}],
            "parameters": {"sampleCount": 2},
        }


@pytest.mark.unit
class TestRestBackendMocked:
    def test_success_returns_predictions(self, config, png_b64):
        body = {"predictions": [{"bytesBase64Encoded": png_b64, "mimeType": "image/png"}]}
        with patch(
            "claysculptor.core.providers.rest.requests.post",
            return_value=_response(200, body),
        ) as post:
            images = _generate(config, number_of_images=1)
        assert len(images) == 1
        assert images[0].image_bytes == png_b64
        assert images[0].mime_type == "image/png"

        args, kwargs = post.call_args
        assert args[0] == (
            "https://generativelanguage.googleapis.com/v1beta/models/"
            "imagen-4.0-generate-001:predict"
        )
        assert kwargs["headers"]["x-goog-api-key"] == "test-key"
        assert kwargs["json"]["parameters"]["sampleCount"] == 1
        assert kwargs["timeout"] == config.request_timeout

    def test_missing_predictions_returns_empty(self, config):
        with patch(
            "claysculptor.core.providers.rest.requests.post",
            return_value=_response(200, {}),
        ):
            assert _generate(config) == []

    def test_prediction_without_bytes(self, config):
        with patch(
            "claysculptor.core.providers.rest.requests.post",
            return_value=_response(200, {"predictions": [{"mimeType": "image/png"}]}),
        ):
            images = _generate(config)
        assert images[0].image_bytes is None

    @pytest.mark.parametrize("status", [401, 403, 404, 429, 500, 503, 400])
    def test_error_status_raises_api_error(self, config, status):
        with patch(
            "claysculptor.core.providers.rest.requests.post",
            return_value=_response(status, {}, text="nope"),
        ):
            with pytest.raises(APIError) as exc_info:
                _generate(config)
        assert exc_info.value.status_code == status
        assert exc_info.value.response == "nope"

    def test_non_json_raises_api_error(self, config):
        with patch(
            "claysculptor.core.providers.rest.requests.post",
            return_value=_response(200, ValueError("not json"), text="<html>"),
        ):
            with pytest.raises(APIError, match="JSON"):
                _generate(config)

    def test_timeout_raises_request_timeout(self, config):
        with patch(
            "claysculptor.core.providers.rest.requests.post",
            side_effect=requests.exceptions.Timeout("slow"),
        ):
            with pytest.raises(RequestTimeoutError):
                _generate(config)

    def test_connection_error_raises_network_error(self, config):
        err = requests.exceptions.ConnectionError("refused")
        with patch("claysculptor.core.providers.rest.requests.post", side_effect=err):
            with pytest.raises(NetworkError) as exc_info:
                _generate(config)
        assert exc_info.value.original_error is err

    def test_custom_base_url(self, config):
        config.api_base_url = "http://localhost:8080/v1/"
        with patch(
            "claysculptor.core.providers.rest.requests.post",
            return_value=_response(200, {"predictions": []}),
        ) as post:
            _generate(config)
        assert post.call_args[0][0] == "http://localhost:8080/v1/models/imagen-4.0-generate-001:predict"


@pytest.mark.unit
class TestRestBackendLocalEndpoint:
    def test_generates_against_local_endpoint(self, config, predict_server, png_b64):
        config.api_base_url = predict_server.base_url
        images = _generate(config, number_of_images=2)
        assert images[0].image_bytes == png_b64
        request = predict_server.received[0]
        assert request["path"] == "/v1beta/models/imagen-4.0-generate-001:predict"
        assert request["api_key"] == "test-key"
        assert request["body"]["parameters"]["sampleCount"] == 2
