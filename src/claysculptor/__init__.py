"""
claysculptor - text-to-clay image generation

Turns short text descriptions into stylized 3D "clay" props with Google
Imagen (Gemini API) and saves them as PNG files.

Library usage:
- Build a GenerationClient with an API key, wrap it in a SculptorAgent and
  await generate_clay_image(GenerationRequest(...)) or
  generate_multiple_variations(description, count).
- Configuration can be passed per agent/client or via the shared config:
  use get_config() / set_config().
- Logging: configure_logging(verbosity, quiet) attaches a stderr handler;
  the CLI also reads CLAYSCULPTOR_VERBOSITY (0/1/2).
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("claysculptor")
except PackageNotFoundError:
    # Package is not installed (e.g., running from source in development)
    __version__ = "0.0.0.dev"

from claysculptor.core.agent import GenerationRequest, SculptorAgent
from claysculptor.core.client import (
    GenerationClient,
    decode_image_bytes,
    ensure_directory,
    write_image,
)
from claysculptor.core.config import (
    DEFAULT_MODEL,
    DEFAULT_OUTPUT_DIR,
    Config,
    get_config,
    set_config,
)
from claysculptor.core.filenames import generate_filename
from claysculptor.core.prompt import build_clay_prompt, validate_description
from claysculptor.logging_config import configure_logging
from claysculptor.utils.exceptions import (
    APIError,
    ConfigurationError,
    EmptyImagePayloadError,
    FilesystemError,
    GenerationError,
    MissingCredentialError,
    NetworkError,
    NoImageReturnedError,
    RequestTimeoutError,
    SculptorError,
    ValidationError,
)

__all__ = [
    "APIError",
    "Config",
    "ConfigurationError",
    "DEFAULT_MODEL",
    "DEFAULT_OUTPUT_DIR",
    "EmptyImagePayloadError",
    "FilesystemError",
    "GenerationClient",
    "GenerationError",
    "GenerationRequest",
    "MissingCredentialError",
    "NetworkError",
    "NoImageReturnedError",
    "RequestTimeoutError",
    "SculptorAgent",
    "SculptorError",
    "ValidationError",
    "build_clay_prompt",
    "configure_logging",
    "decode_image_bytes",
    "ensure_directory",
    "generate_filename",
    "get_config",
    "set_config",
    "validate_description",
    "write_image",
]
