"""
Configuration management for claysculptor.

This module handles the API key, model selection, output location, retry
policy and backend selection.
"""

import dataclasses
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from claysculptor.logging_config import get_logger
from claysculptor.utils.exceptions import ConfigurationError, MissingCredentialError

logger = get_logger(__name__)

# Load environment variables from .env file
load_dotenv()

# Default configuration constants
DEFAULT_MODEL = "imagen-4.0-generate-001"
DEFAULT_OUTPUT_DIR = "./output"
DEFAULT_VARIATION_COUNT = 3
DEFAULT_BACKEND = "genai"
DEFAULT_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

# Credential lookup order; the first non-empty value wins
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")

MIN_VARIATIONS = 1
MAX_VARIATIONS = 10

# Backend ids accepted by validate(); do not import from claysculptor.core.providers (circular import)
KNOWN_BACKENDS = ("genai", "rest")


@dataclass
class Config:
    """Configuration for claysculptor."""

    # API key excluded from repr to avoid leaking secrets
    gemini_api_key: str = field(default="", repr=False)
    api_base_url: str = DEFAULT_API_BASE_URL
    backend: str = DEFAULT_BACKEND

    # Generation defaults; per-call values win over these
    default_model: str = DEFAULT_MODEL
    output_dir: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT_DIR))
    variation_count: int = DEFAULT_VARIATION_COUNT
    shadows: bool = False

    # Retry policy around the single backend call
    retry_attempts: int = 3
    retry_base_delay: float = 1.0  # seconds; doubled on every attempt
    retry_max_delay: float = 8.0

    # Timeout Configuration (seconds)
    request_timeout: int = 120

    _validated: bool = field(default=False, repr=False)

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create a Config instance from environment variables.

        Environment variables:
            GEMINI_API_KEY: Required for image generation (GOOGLE_API_KEY is accepted too)
            CLAYSCULPTOR_MODEL: Optional default Imagen model
            CLAYSCULPTOR_OUTPUT_DIR: Optional default output directory
            CLAYSCULPTOR_BACKEND: Optional backend id (genai or rest)
            CLAYSCULPTOR_API_BASE_URL: Optional REST endpoint base
            CLAYSCULPTOR_RETRY_ATTEMPTS: Optional attempt count (default 3)
            CLAYSCULPTOR_TIMEOUT: Optional request timeout in seconds (default 120)

        Returns:
            Config instance populated from environment

        Raises:
            ConfigurationError: If a numeric variable is not a number
        """

        def _int_env(name: str, default: int) -> int:
            val = os.getenv(name)
            if val is None or val.strip() == "":
                return default
            try:
                return int(val)
            except ValueError as e:
                raise ConfigurationError(f"{name} must be an integer, got {val!r}.") from e

        return cls(
            gemini_api_key=get_api_key_from_env(),
            api_base_url=os.getenv("CLAYSCULPTOR_API_BASE_URL") or DEFAULT_API_BASE_URL,
            backend=(os.getenv("CLAYSCULPTOR_BACKEND") or DEFAULT_BACKEND).strip().lower(),
            default_model=os.getenv("CLAYSCULPTOR_MODEL") or DEFAULT_MODEL,
            output_dir=Path(os.getenv("CLAYSCULPTOR_OUTPUT_DIR") or DEFAULT_OUTPUT_DIR),
            retry_attempts=_int_env("CLAYSCULPTOR_RETRY_ATTEMPTS", 3),
            request_timeout=_int_env("CLAYSCULPTOR_TIMEOUT", 120),
        )

    def validate(self) -> None:
        """
        Validate the configuration.

        Raises:
            MissingCredentialError: If no API key is configured
            ConfigurationError: If any other setting is invalid
        """
        logger.debug("Validating config")

        if not self.gemini_api_key:
            raise MissingCredentialError(
                f"{API_KEY_ENV_VARS[0]} environment variable is required.",
                env_var=API_KEY_ENV_VARS[0],
            )
        if self.backend not in KNOWN_BACKENDS:
            raise ConfigurationError(
                f"Unknown backend: {self.backend!r}. "
                f"Must be one of: {', '.join(KNOWN_BACKENDS)}."
            )
        if not self.default_model:
            raise ConfigurationError("Model ID cannot be empty")
        if self.retry_attempts < 1:
            raise ConfigurationError(
                f"retry_attempts must be at least 1, got {self.retry_attempts}."
            )
        if self.retry_base_delay < 0 or self.retry_max_delay < 0:
            raise ConfigurationError("Retry delays must not be negative.")
        if not MIN_VARIATIONS <= self.variation_count <= MAX_VARIATIONS:
            raise ConfigurationError(
                f"variation_count must be between {MIN_VARIATIONS} and {MAX_VARIATIONS}, "
                f"got {self.variation_count}."
            )
        if self.request_timeout <= 0:
            raise ConfigurationError(
                f"request_timeout must be positive, got {self.request_timeout}."
            )

        self._validated = True

    def is_valid(self) -> bool:
        """
        Check if configuration has been validated.

        Returns:
            True if validate() has been called successfully
        """
        return self._validated

    def with_overrides(self, **overrides: object) -> "Config":
        """
        Return a copy with the given fields replaced.

        None values are skipped so callers can pass optional CLI options
        straight through; the copy must be validated again.
        """
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "output_dir" in changes:
            changes["output_dir"] = Path(changes["output_dir"])  # type: ignore[arg-type]
        changes["_validated"] = False
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]


def get_api_key_from_env() -> str:
    """Return the first non-empty credential from API_KEY_ENV_VARS, or ''."""
    for name in API_KEY_ENV_VARS:
        value = os.getenv(name, "").strip()
        if value:
            return value
    return ""


# Global configuration instance
_global_config: Config | None = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        The global Config instance
    """
    global _global_config
    if _global_config is None:
        _global_config = Config.from_env()
    return _global_config


def set_config(config: Config) -> None:
    """
    Set the global configuration instance.

    Args:
        config: The Config instance to use globally
    """
    global _global_config
    _global_config = config
