"""
Prompt construction for claysculptor.

Turns a free-text description into the full clay-style generation prompt.
"""

from claysculptor.core.prompts_loader import get_clay_template, get_no_shadows_clause
from claysculptor.utils.exceptions import ValidationError


def validate_description(description: str) -> None:
    """
    Validate a user description.

    Args:
        description: The text to validate

    Raises:
        ValidationError: If the description is empty or only whitespace
    """
    if not description or not description.strip():
        raise ValidationError("Description cannot be empty", field="description")


def build_clay_prompt(description: str, shadows: bool = False) -> str:
    """
    Build the generation prompt for a clay prop.

    The description is inserted verbatim. When shadows is False the
    "no shadows" clause follows the white background qualifier.

    Args:
        description: What to sculpt, e.g. "cute robot with big eyes"
        shadows: Keep shadows in the rendered image

    Returns:
        The full prompt string
    """
    shadow_clause = "" if shadows else get_no_shadows_clause()
    return get_clay_template().format(description=description, shadow_clause=shadow_clause)


__all__ = ["build_clay_prompt", "validate_description"]
