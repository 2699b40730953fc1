"""
The sculptor agent: one clay image, or a batch of concurrent variations.

SculptorAgent resolves each request against the configured defaults, builds
the clay prompt, asks the GenerationClient for image bytes, and writes them
to a generated (or explicitly requested) path. Variation batches are issued
concurrently with asyncio.gather and fail as a whole when any one fails.
"""

import asyncio
import time
from dataclasses import dataclass
from pathlib import Path

from claysculptor.core.client import GenerationClient, ensure_directory, write_image
from claysculptor.core.config import Config, get_config
from claysculptor.core.filenames import MAX_FILENAME_BYTES, generate_filename
from claysculptor.core.prompt import build_clay_prompt, validate_description
from claysculptor.logging_config import get_logger
from claysculptor.utils.exceptions import ValidationError

logger = get_logger(__name__)


@dataclass(frozen=True)
class GenerationRequest:
    """A single image request. None fields fall back to the agent's Config."""

    description: str
    model: str | None = None
    output_dir: Path | None = None
    output_path: Path | None = None
    shadows: bool | None = None
    variation_index: int | None = None


class SculptorAgent:
    """Generates clay images for text descriptions."""

    def __init__(self, client: GenerationClient, config: Config | None = None) -> None:
        self.client = client
        self.config = config or get_config()

    def resolve_output_path(self, request: GenerationRequest) -> Path:
        """Explicit output_path wins; otherwise output_dir / generated filename."""
        if request.output_path is not None:
            return Path(request.output_path)
        output_dir = Path(request.output_dir or self.config.output_dir)
        filename = generate_filename(
            request.description,
            is_variation=request.variation_index is not None,
            variation_index=request.variation_index,
        )
        return output_dir / filename

    async def generate_clay_image(self, request: GenerationRequest) -> Path:
        """
        Generate one clay image and return the path it was written to.

        Raises:
            ValidationError: If the description is empty, or the output
                filename would exceed MAX_FILENAME_BYTES
            GenerationError, APIError, NetworkError, RequestTimeoutError,
            FilesystemError: Propagated unchanged from the client
        """
        validate_description(request.description)
        model = request.model or self.config.default_model
        shadows = self.config.shadows if request.shadows is None else request.shadows
        output_dir = Path(request.output_dir or self.config.output_dir)

        output_path = self.resolve_output_path(request)
        if len(output_path.name.encode("utf-8")) > MAX_FILENAME_BYTES:
            field = "description" if request.output_path is None else "output_path"
            raise ValidationError(
                f"Output filename is longer than {MAX_FILENAME_BYTES} bytes; "
                "use a shorter description or pass an explicit output path.",
                field=field,
            )

        ensure_directory(output_dir)
        prompt = build_clay_prompt(request.description, shadows=shadows)

        logger.info("Generating clay image for %r model=%s", request.description, model)
        start_time = time.time()
        data = await self.client.generate(prompt, model)
        output_path = write_image(output_path, data)
        logger.info("Clay image saved to %s in %.1fs", output_path, time.time() - start_time)
        return output_path

    async def generate_multiple_variations(
        self,
        description: str,
        count: int | None = None,
        *,
        model: str | None = None,
        output_dir: Path | None = None,
        shadows: bool | None = None,
    ) -> list[Path]:
        """
        Generate count variations of description concurrently.

        Every variation gets its own index in the filename. If any request
        fails the whole call raises and no paths are returned.

        Raises:
            ValidationError: If count is below 1 or the description is empty
        """
        count = self.config.variation_count if count is None else count
        if count < 1:
            raise ValidationError(
                f"Variation count must be at least 1, got {count}.",
                field="count",
            )
        validate_description(description)

        logger.info("Generating %d variations of %r", count, description)
        requests = [
            GenerationRequest(
                description=description,
                model=model,
                output_dir=output_dir,
                shadows=shadows,
                variation_index=index,
            )
            for index in range(count)
        ]
        results = await asyncio.gather(*(self.generate_clay_image(r) for r in requests))
        logger.info("Generated %d variations successfully", len(results))
        return list(results)


__all__ = ["GenerationRequest", "SculptorAgent"]
