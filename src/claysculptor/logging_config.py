"""
Logging for claysculptor.

Nothing is configured on import; library users see no records unless they
call configure_logging or attach handlers to the "claysculptor" logger. The
CLI configures it once per run from --verbose/--quiet or
CLAYSCULPTOR_VERBOSITY.

Records go to a single stderr handler. Prompt text is logged on its own
child logger, PROMPTS_LOGGER_NAME, so it can be switched on independently.

    verbosity 0   INFO: one line per saved image, prompts off
    verbosity 1   INFO, prompts on
    verbosity 2   DEBUG: backend requests, timings, decoded sizes
    quiet         WARNING: retry warnings and failures only
"""

import logging
import os
import sys

ROOT_LOGGER_NAME = "claysculptor"
PROMPTS_LOGGER_NAME = f"{ROOT_LOGGER_NAME}.prompts"
VERBOSITY_ENV_VAR = "CLAYSCULPTOR_VERBOSITY"
LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
MAX_VERBOSITY = 2

# verbosity -> (package level, prompts logger level)
_LEVELS = {
    0: (logging.INFO, logging.WARNING),
    1: (logging.INFO, logging.INFO),
    2: (logging.DEBUG, logging.DEBUG),
}


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever sys.stderr is at emit time, not at construction."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def _install_handler(root: logging.Logger) -> None:
    if any(isinstance(h, _StderrHandler) for h in root.handlers):
        return
    handler = _StderrHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def configure_logging(verbosity: int = 0, quiet: bool = False) -> None:
    """
    Attach the stderr handler and set levels.

    verbosity is clamped to 0..2. quiet wins over verbosity.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    _install_handler(root)
    if quiet:
        root.setLevel(logging.WARNING)
        logging.getLogger(PROMPTS_LOGGER_NAME).setLevel(logging.WARNING)
        return
    package_level, prompts_level = _LEVELS[max(0, min(verbosity, MAX_VERBOSITY))]
    root.setLevel(package_level)
    logging.getLogger(PROMPTS_LOGGER_NAME).setLevel(prompts_level)


def verbosity_from_env() -> int:
    """CLAYSCULPTOR_VERBOSITY as 0, 1 or 2; anything else is 0."""
    raw = os.environ.get(VERBOSITY_ENV_VAR, "").strip()
    return int(raw) if raw in ("1", "2") else 0


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the claysculptor namespace."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


__all__ = [
    "PROMPTS_LOGGER_NAME",
    "configure_logging",
    "get_logger",
    "verbosity_from_env",
]
