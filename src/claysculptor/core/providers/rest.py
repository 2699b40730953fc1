"""
Imagen backend over the Gemini REST API.

Calls the ``models/{model}:predict`` endpoint with requests. The blocking
call runs in a worker thread so concurrent variations still overlap.
"""

import asyncio
import time
from typing import Any

import requests

from claysculptor.core.config import Config
from claysculptor.core.providers.base import GeneratedImage
from claysculptor.logging_config import get_logger
from claysculptor.utils.exceptions import APIError, NetworkError, RequestTimeoutError

logger = get_logger(__name__)


class RestBackend:
    """Image generation backend for the Gemini REST predict endpoint."""

    def _build_payload(self, prompt: str, number_of_images: int) -> dict[str, Any]:
        """Build the predict payload."""
        return {
            "instances": [{"prompt": prompt}],
            "parameters": {"sampleCount": number_of_images},
        }

    def _parse_response(self, response: requests.Response) -> list[GeneratedImage]:
        """Extract predictions; raises APIError when the body is not JSON."""
        try:
            result = response.json()
        except ValueError as e:
            raise APIError(
                f"Failed to parse API response as JSON: {str(e)}",
                status_code=response.status_code,
                response=response.text,
            ) from e
        if not isinstance(result, dict):
            return []
        predictions = result.get("predictions") or []
        return [
            GeneratedImage(
                image_bytes=p.get("bytesBase64Encoded"),
                mime_type=p.get("mimeType"),
            )
            for p in predictions
            if isinstance(p, dict)
        ]

    def _do_request(
        self,
        url: str,
        headers: dict[str, str],
        payload: dict[str, Any],
        timeout: int,
        model: str,
    ) -> list[GeneratedImage]:
        """Perform HTTP POST and parse response. Maps status codes to exceptions."""
        logger.debug("API request url=%s model=%s timeout=%s", url, model, timeout)
        start_time = time.time()
        response = requests.post(url, headers=headers, json=payload, timeout=timeout)
        logger.debug(
            "API response status=%s time=%.2fs",
            response.status_code,
            time.time() - start_time,
        )

        if response.status_code in (401, 403):
            raise APIError(
                "Authentication failed. Please check your GEMINI_API_KEY.",
                status_code=response.status_code,
                response=response.text,
            )
        if response.status_code == 404:
            raise APIError(
                f"Model not found or endpoint unavailable: {model}",
                status_code=404,
                response=response.text,
            )
        if response.status_code == 429:
            raise APIError(
                "Rate limit exceeded. Please wait before making more requests.",
                status_code=429,
                response=response.text,
            )
        if response.status_code >= 500:
            raise APIError(
                f"Gemini service error: {response.status_code}",
                status_code=response.status_code,
                response=response.text,
            )
        if response.status_code != 200:
            raise APIError(
                f"API request failed with status {response.status_code}: {response.text}",
                status_code=response.status_code,
                response=response.text,
            )
        return self._parse_response(response)

    def _generate_sync(
        self,
        prompt: str,
        model: str,
        number_of_images: int,
        api_key: str,
        config: Config,
    ) -> list[GeneratedImage]:
        url = f"{config.api_base_url.rstrip('/')}/models/{model}:predict"
        headers = {
            "x-goog-api-key": api_key,
            "Content-Type": "application/json",
        }
        payload = self._build_payload(prompt, number_of_images)
        timeout = config.request_timeout
        try:
            return self._do_request(url, headers, payload, timeout, model)
        except requests.exceptions.Timeout as e:
            raise RequestTimeoutError(
                f"Request timed out after {timeout} seconds. "
                "The generation may be taking longer than expected."
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise NetworkError(
                "Failed to connect to the Gemini API. Please check your internet connection.",
                original_error=e,
            ) from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(
                f"Network error during API request: {str(e)}", original_error=e
            ) from e

    async def generate_images(
        self,
        prompt: str,
        model: str,
        *,
        number_of_images: int,
        api_key: str,
        config: Config,
    ) -> list[GeneratedImage]:
        """Generate images via the REST predict endpoint."""
        return await asyncio.to_thread(
            self._generate_sync, prompt, model, number_of_images, api_key, config
        )
