"""
Backend protocol for image generation.

Defines the capability every image generation backend must implement.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from claysculptor.core.config import Config


@dataclass(frozen=True)
class GeneratedImage:
    """One image from a backend response.

    ``image_bytes`` is a base64 string or raw bytes depending on the
    backend, and may be missing when the API filtered the image.
    """

    image_bytes: str | bytes | None
    mime_type: str | None = None


class ImageGenerationBackend(Protocol):
    """Protocol for image generation backends.

    Backends talk to the remote API and return whatever images it produced;
    validation and decoding happen in GenerationClient.
    """

    async def generate_images(
        self,
        prompt: str,
        model: str,
        *,
        number_of_images: int,
        api_key: str,
        config: Config,
    ) -> list[GeneratedImage]:
        """Request images for prompt.

        May raise APIError, NetworkError, or RequestTimeoutError.
        """
        ...
