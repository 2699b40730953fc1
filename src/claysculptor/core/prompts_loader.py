"""
Load prompt templates from the bundled prompts.yaml file.

Prompts are defined in src/claysculptor/prompts.yaml and loaded once per process.
"""

import importlib.resources
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from claysculptor.utils.exceptions import ConfigurationError

# Module-level cache for parsed prompts
_prompts_data: dict[str, Any] | None = None

REQUIRED_PLACEHOLDERS = ("{description}", "{shadow_clause}")


class ClayPrompt(BaseModel):
    """Schema for the clay prompt section."""

    template: str = Field(..., min_length=1, description="Generation prompt template")
    no_shadows_clause: str = Field(
        default=", no shadows",
        description="Inserted at {shadow_clause} when shadows are disabled",
    )


class PromptsSchema(BaseModel):
    """Schema for prompts.yaml configuration file."""

    model_config = {"extra": "allow"}

    clay: ClayPrompt


def _load_prompts() -> dict[str, Any]:
    """Load and parse prompts.yaml from the package. Cached after first call.

    Returns:
        Dictionary of prompt data.

    Raises:
        ConfigurationError: If YAML is missing, malformed, or fails validation.
    """
    global _prompts_data
    if _prompts_data is not None:
        return _prompts_data

    try:
        with (
            importlib.resources.files("claysculptor")
            .joinpath("prompts.yaml")
            .open(encoding="utf-8") as f
        ):
            raw = f.read()
    except FileNotFoundError as e:
        raise ConfigurationError(
            "prompts.yaml not found. This file is required and should be bundled with the package."
        ) from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse prompts.yaml: {e}. Check YAML syntax and formatting."
        ) from e

    if data is None:
        raise ConfigurationError("prompts.yaml is empty. Expected configuration with 'clay' section.")

    try:
        PromptsSchema(**data)
    except ValidationError as e:
        errors = "\n".join([f"  - {err['loc'][0]}: {err['msg']}" for err in e.errors()])
        raise ConfigurationError(
            f"Invalid prompts.yaml structure:\n{errors}\n"
            "Expected 'clay' section with 'template' key."
        ) from e

    _prompts_data = data
    return _prompts_data


def get_prompt(key: str, subkey: str | None = None) -> str | None:
    """
    Get a prompt string from prompts.yaml.

    Args:
        key: Top-level key (e.g. "clay").
        subkey: Optional subkey (e.g. "template") for nested value.

    Returns:
        The prompt string, or None if not found.
    """
    data = _load_prompts()
    value = data.get(key)
    if value is None:
        return None
    if subkey is not None:
        value = value.get(subkey) if isinstance(value, dict) else None
    return value if isinstance(value, str) else None


def get_clay_template() -> str:
    """
    Return the clay generation template.

    Raises:
        ConfigurationError: If the template is missing or lacks a placeholder.
    """
    template = get_prompt("clay", "template")
    if not template:
        raise ConfigurationError("clay.template not found in prompts.yaml. This key is required.")
    for placeholder in REQUIRED_PLACEHOLDERS:
        if placeholder not in template:
            raise ConfigurationError(f"clay.template must contain {placeholder} placeholder.")
    return template


def get_no_shadows_clause() -> str:
    """Return the clause appended after 'white background' when shadows are off."""
    clause = get_prompt("clay", "no_shadows_clause")
    return clause if clause is not None else ClayPrompt.model_fields["no_shadows_clause"].default
