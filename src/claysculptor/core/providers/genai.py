"""
Imagen backend built on the google-genai SDK.

Uses the SDK's async surface (client.aio) so several variation requests can
be in flight on one event loop. A fresh SDK client is built for every call:
its async connection pool belongs to the loop that created it, and library
callers may drive the agent from more than one ``asyncio.run``.
"""

import asyncio

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from claysculptor.core.config import Config
from claysculptor.core.providers.base import GeneratedImage
from claysculptor.logging_config import get_logger
from claysculptor.utils.exceptions import APIError, NetworkError, RequestTimeoutError

logger = get_logger(__name__)


def _http_options(config: Config) -> types.HttpOptions:
    """
    SDK transport options derived from Config.

    api_base_url carries the API version as its last path segment
    (".../v1beta"); the SDK wants the two apart. An explicit httpx transport
    keeps the SDK on httpx even when aiohttp is importable, so timeouts and
    connection failures arrive as httpx errors.
    """
    root, _, api_version = config.api_base_url.rstrip("/").rpartition("/")
    return types.HttpOptions(
        base_url=root + "/",
        api_version=api_version,
        timeout=config.request_timeout * 1000,
        async_client_args={"transport": httpx.AsyncHTTPTransport()},
    )


class GenaiBackend:
    """Image generation backend for the Gemini API via google-genai."""

    def _client(self, api_key: str, config: Config) -> genai.Client:
        return genai.Client(api_key=api_key, http_options=_http_options(config))

    async def generate_images(
        self,
        prompt: str,
        model: str,
        *,
        number_of_images: int,
        api_key: str,
        config: Config,
    ) -> list[GeneratedImage]:
        """Generate images with client.aio.models.generate_images."""
        client = self._client(api_key, config)
        logger.debug("genai request model=%s number_of_images=%d", model, number_of_images)
        try:
            response = await client.aio.models.generate_images(
                model=model,
                prompt=prompt,
                config=types.GenerateImagesConfig(
                    number_of_images=number_of_images,
                    include_rai_reason=False,
                ),
            )
        except genai_errors.APIError as e:
            status = e.code if isinstance(e.code, int) else 0
            raise APIError(
                f"Gemini API request failed ({status}): {e.message or e}",
                status_code=status,
                response=str(e.details or ""),
            ) from e
        except (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError) as e:
            raise RequestTimeoutError(
                f"Request timed out after {config.request_timeout} seconds."
            ) from e
        except (httpx.TransportError, OSError) as e:
            raise NetworkError(
                "Failed to connect to the Gemini API. Please check your internet connection.",
                original_error=e,
            ) from e

        generated = getattr(response, "generated_images", None) or []
        images: list[GeneratedImage] = []
        for item in generated:
            image = getattr(item, "image", None)
            images.append(
                GeneratedImage(
                    image_bytes=getattr(image, "image_bytes", None),
                    mime_type=getattr(image, "mime_type", None),
                )
            )
        logger.debug("genai response images=%d", len(images))
        return images
