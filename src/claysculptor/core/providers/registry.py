"""
Registry for image generation backends.

Maps backend ids (e.g. "genai", "rest") to backend implementations.
"""

from claysculptor.core.providers.base import ImageGenerationBackend


class BackendRegistry:
    """Registry mapping backend id to ImageGenerationBackend implementation."""

    def __init__(self) -> None:
        self._impls: dict[str, ImageGenerationBackend] = {}

    def register(self, backend_id: str, impl: ImageGenerationBackend) -> None:
        """Register a backend implementation. Idempotent for the same id."""
        self._impls[backend_id] = impl

    def get(self, backend_id: str) -> ImageGenerationBackend | None:
        """Return the registered implementation for backend_id, or None if unknown."""
        return self._impls.get(backend_id)

    def backend_ids(self) -> list[str]:
        """Return the list of registered backend ids."""
        return list(self._impls.keys())


_registry: BackendRegistry | None = None


def get_registry() -> BackendRegistry:
    """Return the global backend registry. Creates it on first call."""
    global _registry
    if _registry is None:
        _registry = BackendRegistry()
    return _registry
