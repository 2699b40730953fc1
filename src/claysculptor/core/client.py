"""
Generation client: one retried backend call, payload decoding, file output.

GenerationClient asks the configured backend for a single image, retries
transient failures with bounded backoff, checks that an image with a
payload came back, and decodes it to raw bytes. The filesystem helpers in
this module create output directories and write image files.
"""

import base64
import binascii
from pathlib import Path

from claysculptor.core.config import Config, get_config
from claysculptor.core.providers import GeneratedImage, ImageGenerationBackend, get_registry
from claysculptor.core.retry import retry_async
from claysculptor.logging_config import PROMPTS_LOGGER_NAME, get_logger
from claysculptor.utils.exceptions import (
    ConfigurationError,
    EmptyImagePayloadError,
    FilesystemError,
    GenerationError,
    NoImageReturnedError,
    ValidationError,
)

logger = get_logger(__name__)
prompt_logger = get_logger(PROMPTS_LOGGER_NAME)


def decode_image_bytes(payload: str | bytes | bytearray) -> bytes:
    """
    Return raw image bytes from a backend payload.

    Strings are base64-decoded; bytes are returned unchanged.

    Raises:
        GenerationError: If a string payload is not valid base64
    """
    if isinstance(payload, str):
        try:
            return base64.b64decode("".join(payload.split()), validate=True)
        except (binascii.Error, ValueError) as e:
            raise GenerationError(f"Generated image payload is not valid base64: {e}") from e
    return bytes(payload)


def ensure_directory(path: str | Path) -> Path:
    """
    Create path (and parents) if absent. An existing directory is not an error.

    Raises:
        FilesystemError: If the directory cannot be created
    """
    directory = Path(path)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(
            f"Could not create output directory {directory}: {e}", path=str(directory)
        ) from e
    return directory


def write_image(path: str | Path, data: bytes) -> Path:
    """
    Write image bytes to path, creating the parent directory if needed.

    Raises:
        FilesystemError: If the file cannot be written
    """
    target = Path(path)
    ensure_directory(target.parent)
    try:
        target.write_bytes(data)
    except OSError as e:
        raise FilesystemError(f"Could not write image to {target}: {e}", path=str(target)) from e
    logger.debug("Wrote %d bytes to %s", len(data), target)
    return target


class GenerationClient:
    """Calls an image generation backend once per request, with bounded retry."""

    def __init__(
        self,
        api_key: str,
        config: Config | None = None,
        backend: ImageGenerationBackend | None = None,
    ) -> None:
        """
        Args:
            api_key: Credential passed through to the backend
            config: Retry policy, timeout and backend id; defaults to get_config()
            backend: Explicit backend; looked up by config.backend when omitted

        Raises:
            ValidationError: If api_key is empty
            ConfigurationError: If config.backend is not registered
        """
        if not api_key:
            raise ValidationError("API key cannot be empty", field="api_key")
        self.config = config or get_config()
        if backend is None:
            backend = get_registry().get(self.config.backend)
            if backend is None:
                raise ConfigurationError(f"Unknown backend: {self.config.backend!r}.")
        self._api_key = api_key
        self.backend = backend

    async def generate(self, prompt: str, model: str) -> bytes:
        """
        Generate one image and return its raw bytes.

        Raises:
            NoImageReturnedError: If the API returned zero images
            EmptyImagePayloadError: If the first image has no payload
            APIError, NetworkError, RequestTimeoutError: Once retries are exhausted
        """
        logger.debug("Generating image model=%s backend=%s", model, self.config.backend)
        prompt_logger.info("Prompt (used): %s", prompt)

        async def attempt() -> list[GeneratedImage]:
            return await self.backend.generate_images(
                prompt,
                model,
                number_of_images=1,
                api_key=self._api_key,
                config=self.config,
            )

        images = await retry_async(
            attempt,
            attempts=self.config.retry_attempts,
            base_delay=self.config.retry_base_delay,
            max_delay=self.config.retry_max_delay,
        )
        if not images:
            raise NoImageReturnedError("No images generated")
        payload = images[0].image_bytes
        if not payload:
            raise EmptyImagePayloadError("Generated image has no bytes")
        return decode_image_bytes(payload)

    async def generate_to_file(self, prompt: str, model: str, path: str | Path) -> Path:
        """Generate one image and write it to path."""
        data = await self.generate(prompt, model)
        return write_image(path, data)


__all__ = [
    "GenerationClient",
    "decode_image_bytes",
    "ensure_directory",
    "write_image",
]
