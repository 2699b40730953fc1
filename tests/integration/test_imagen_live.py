"""
Integration tests against the live Gemini API.

These spend real quota. They are skipped unless --run-slow is given and
GEMINI_API_KEY (or GOOGLE_API_KEY) is set.
Run with: pytest --run-slow tests/integration
"""

import asyncio

import pytest

from claysculptor import Config, GenerationClient, GenerationRequest, SculptorAgent

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


@pytest.mark.integration
@pytest.mark.slow
@pytest.mark.parametrize("backend", ["genai", "rest"])
class TestImagenLive:
    @pytest.fixture(autouse=True)
    def _require_key(self) -> None:
        if not Config.from_env().gemini_api_key:
            pytest.skip("GEMINI_API_KEY is not set")

    def test_generate_clay_image(self, tmp_path, backend) -> None:
        config = Config.from_env().with_overrides(output_dir=tmp_path, backend=backend)
        config.validate()
        agent = SculptorAgent(GenerationClient(config.gemini_api_key, config=config), config)

        path = asyncio.run(agent.generate_clay_image(GenerationRequest(description="cute robot")))

        assert path.parent == tmp_path
        assert path.name.startswith("clay_cute_robot_")
        assert path.read_bytes()[:8] == PNG_MAGIC
