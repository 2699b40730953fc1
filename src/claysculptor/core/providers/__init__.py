"""
Image generation backends: protocol, registry, and built-in implementations.

Built-in backends are registered lazily on first get_registry() call so the
google-genai SDK is only imported when generation actually starts.
"""

from claysculptor.core.providers.base import GeneratedImage as GeneratedImage
from claysculptor.core.providers.base import ImageGenerationBackend as ImageGenerationBackend
from claysculptor.core.providers.registry import (
    BackendRegistry,
)
from claysculptor.core.providers.registry import (
    get_registry as _get_registry_impl,
)

BACKEND_GENAI = "genai"
BACKEND_REST = "rest"

_builtins_registered = False


def _register_builtins(reg: BackendRegistry) -> None:
    """Register built-in backends. Called once when registry is first used."""
    global _builtins_registered
    if _builtins_registered:
        return
    from claysculptor.core.providers.genai import GenaiBackend
    from claysculptor.core.providers.rest import RestBackend

    reg.register(BACKEND_GENAI, GenaiBackend())
    reg.register(BACKEND_REST, RestBackend())
    _builtins_registered = True


def get_registry() -> BackendRegistry:
    """Return the global backend registry and ensure built-ins are registered."""
    reg = _get_registry_impl()
    _register_builtins(reg)
    return reg
