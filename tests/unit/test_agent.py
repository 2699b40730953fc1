"""Unit tests for SculptorAgent (single images and concurrent variations)."""

import asyncio
from pathlib import Path

import pytest

from claysculptor.core.agent import GenerationRequest, SculptorAgent
from claysculptor.core.client import GenerationClient
from claysculptor.core.config import Config
from claysculptor.utils.exceptions import (
    APIError,
    FilesystemError,
    NoImageReturnedError,
    ValidationError,
)


def _agent(config: Config, backend) -> SculptorAgent:
    return SculptorAgent(GenerationClient("key", config=config, backend=backend), config)


@pytest.mark.unit
class TestGenerateClayImage:
    def test_end_to_end_cute_robot(
        self, config: Config, stub_backend, tmp_path: Path, monkeypatch, png_magic
    ):
        monkeypatch.chdir(tmp_path)
        agent = _agent(config, stub_backend)
        path = asyncio.run(
            agent.generate_clay_image(
                GenerationRequest(description="cute robot", output_dir=Path("./output"))
            )
        )
        assert path.parent == Path("output")
        assert path.name.startswith("clay_cute_robot_")
        assert path.name.endswith(".png")
        assert (tmp_path / path).read_bytes()[:8] == png_magic

    def test_uses_config_defaults(self, config: Config, stub_backend):
        agent = _agent(config, stub_backend)
        path = asyncio.run(agent.generate_clay_image(GenerationRequest(description="cat")))
        assert path.parent == config.output_dir
        call = stub_backend.calls[0]
        assert call["model"] == config.default_model
        assert "no shadows" in call["prompt"]
        assert "cat" in call["prompt"]

    def test_request_values_win(self, config: Config, stub_backend):
        agent = _agent(config, stub_backend)
        asyncio.run(
            agent.generate_clay_image(
                GenerationRequest(description="cat", model="imagen-other", shadows=True)
            )
        )
        call = stub_backend.calls[0]
        assert call["model"] == "imagen-other"
        assert "no shadows" not in call["prompt"]

    def test_config_shadows_used_when_request_silent(self, config: Config, stub_backend):
        config.shadows = True
        asyncio.run(_agent(config, stub_backend).generate_clay_image(GenerationRequest("cat")))
        assert "no shadows" not in stub_backend.calls[0]["prompt"]

    def test_explicit_output_path_wins(
        self, config: Config, stub_backend, tmp_path: Path
    ):
        target = tmp_path / "custom" / "robot.png"
        agent = _agent(config, stub_backend)
        path = asyncio.run(
            agent.generate_clay_image(GenerationRequest(description="robot", output_path=target))
        )
        assert path == target
        assert target.exists()
        # the output directory is still created
        assert config.output_dir.is_dir()

    def test_empty_description_rejected(self, config: Config, stub_backend):
        with pytest.raises(ValidationError):
            asyncio.run(_agent(config, stub_backend).generate_clay_image(GenerationRequest("  ")))
        assert stub_backend.calls == []

    def test_client_error_propagates_unchanged(self, config: Config, make_backend):
        agent = _agent(config, make_backend([]))
        with pytest.raises(NoImageReturnedError):
            asyncio.run(agent.generate_clay_image(GenerationRequest("cat")))

    def test_api_error_propagates(self, config: Config, stub_backend):
        stub_backend.errors = [APIError("forbidden", status_code=403)]
        with pytest.raises(APIError) as exc_info:
            asyncio.run(_agent(config, stub_backend).generate_clay_image(GenerationRequest("cat")))
        assert exc_info.value.status_code == 403

    def test_overlong_filename_rejected_before_generation(self, config: Config, stub_backend):
        request = GenerationRequest("very long description " * 12)
        with pytest.raises(ValidationError) as exc_info:
            asyncio.run(_agent(config, stub_backend).generate_clay_image(request))
        assert exc_info.value.field == "description"
        assert stub_backend.calls == []

    def test_long_description_within_limit(self, config: Config, stub_backend):
        path = asyncio.run(
            _agent(config, stub_backend).generate_clay_image(GenerationRequest("a" * 200))
        )
        assert path.exists()

    def test_overlong_explicit_output_name_rejected(
        self, config: Config, stub_backend, tmp_path: Path
    ):
        request = GenerationRequest("cat", output_path=tmp_path / ("x" * 300 + ".png"))
        with pytest.raises(ValidationError) as exc_info:
            asyncio.run(_agent(config, stub_backend).generate_clay_image(request))
        assert exc_info.value.field == "output_path"
        assert stub_backend.calls == []

    def test_unwritable_output_dir(self, config: Config, stub_backend, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        request = GenerationRequest("cat", output_dir=blocker / "out")
        with pytest.raises(FilesystemError):
            asyncio.run(_agent(config, stub_backend).generate_clay_image(request))
        assert stub_backend.calls == []


@pytest.mark.unit
class TestGenerateMultipleVariations:
    def test_n_distinct_paths(self, config: Config, stub_backend):
        agent = _agent(config, stub_backend)
        paths = asyncio.run(agent.generate_multiple_variations("magical cat", 4))
        assert len(paths) == 4
        assert len(set(paths)) == 4
        for index, path in enumerate(paths, start=1):
            assert f"_variation_{index}_" in path.name
            assert path.exists()
        assert len(stub_backend.calls) == 4

    def test_default_count_from_config(self, config: Config, stub_backend):
        paths = asyncio.run(_agent(config, stub_backend).generate_multiple_variations("cat"))
        assert len(paths) == config.variation_count

    def test_any_failure_fails_whole_batch(self, config: Config, stub_backend):
        stub_backend.fail_on_call = 2
        agent = _agent(config, stub_backend)
        with pytest.raises(RuntimeError):
            asyncio.run(agent.generate_multiple_variations("cat", 3))

    def test_requests_overlap(self, config: Config, make_backend):
        """All variation requests are in flight before any completes."""

        class GatedBackend(make_backend):
            def __init__(self) -> None:
                super().__init__()
                self.in_flight = 0
                self.max_in_flight = 0

            async def generate_images(self, prompt, model, **kwargs):
                self.in_flight += 1
                self.max_in_flight = max(self.max_in_flight, self.in_flight)
                await asyncio.sleep(0.01)
                self.in_flight -= 1
                return list(self.images)

        backend = GatedBackend()
        asyncio.run(_agent(config, backend).generate_multiple_variations("cat", 3))
        assert backend.max_in_flight == 3

    def test_overrides_passed_through(self, config: Config, stub_backend, tmp_path):
        other = tmp_path / "elsewhere"
        agent = _agent(config, stub_backend)
        paths = asyncio.run(
            agent.generate_multiple_variations("cat", 2, model="imagen-fast", output_dir=other)
        )
        assert all(p.parent == other for p in paths)
        assert {c["model"] for c in stub_backend.calls} == {"imagen-fast"}

    def test_zero_count_rejected(self, config: Config, stub_backend):
        with pytest.raises(ValidationError):
            asyncio.run(_agent(config, stub_backend).generate_multiple_variations("cat", 0))
        assert stub_backend.calls == []
