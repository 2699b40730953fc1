"""
Utility constants for the CLI.

Exit codes and the user-facing strings shared by commands and the
interactive session.
"""

from claysculptor.core.config import API_KEY_ENV_VARS

# Every failure exits with this code
EXIT_FAILURE = 1

API_KEY_REMEDIATION = f"Set it with: export {API_KEY_ENV_VARS[0]}='your-api-key-here'"

SESSION_PROMPT = "🎨 Describe your clay creation: "

EXAMPLES = (
    "cute robot with big eyes",
    "variations 3 magical unicorn",
    "friendly dragon with rainbow scales",
    "space rocket with glowing engines",
)


__all__ = [
    "API_KEY_REMEDIATION",
    "EXAMPLES",
    "EXIT_FAILURE",
    "SESSION_PROMPT",
]
