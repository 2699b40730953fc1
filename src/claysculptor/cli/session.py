"""
Interactive read-eval loop.

Each input line is parsed into a Command and dispatched to the
SculptorAgent. Recognition order: quit/exit, help, clear,
"variations <count> <description>", then the whole line as a description.
Generation errors are reported and the session keeps going; only
quit/exit (or end of input) ends it.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from claysculptor.cli import progress
from claysculptor.cli.handlers import describe_exception
from claysculptor.cli.utils import SESSION_PROMPT
from claysculptor.core.agent import GenerationRequest, SculptorAgent
from claysculptor.core.config import MAX_VARIATIONS, MIN_VARIATIONS, Config
from claysculptor.logging_config import get_logger

logger = get_logger(__name__)

VARIATIONS_PATTERN = re.compile(r"^variations\s+(\d+)\s+(.+)$", re.IGNORECASE)


class SessionState(Enum):
    """State of the interactive loop."""

    IDLE = "idle"
    DISPATCHING = "dispatching"
    TERMINATED = "terminated"


class CommandKind(Enum):
    """Kinds of input line, in the order parse_command checks them."""

    EMPTY = "empty"
    QUIT = "quit"
    HELP = "help"
    CLEAR = "clear"
    VARIATIONS = "variations"
    GENERATE = "generate"


@dataclass(frozen=True)
class Command:
    """A parsed input line. description and count are set for generation commands."""

    kind: CommandKind
    description: str = ""
    count: int = 0


def parse_command(line: str) -> Command:
    """Parse one line of user input."""
    text = line.strip()
    if not text:
        return Command(CommandKind.EMPTY)
    lowered = text.lower()
    if lowered in ("quit", "exit"):
        return Command(CommandKind.QUIT)
    if lowered == "help":
        return Command(CommandKind.HELP)
    if lowered == "clear":
        return Command(CommandKind.CLEAR)
    match = VARIATIONS_PATTERN.match(text)
    if match:
        return Command(
            CommandKind.VARIATIONS,
            description=match.group(2).strip(),
            count=int(match.group(1)),
        )
    return Command(CommandKind.GENERATE, description=text)


def _read_from_console() -> str:
    return progress.console.input(SESSION_PROMPT)


class InteractiveSession:
    """Interactive clay generation session."""

    def __init__(
        self,
        agent: SculptorAgent,
        config: Config,
        read_line: Callable[[], str] | None = None,
    ) -> None:
        self.agent = agent
        self.config = config
        self.read_line = read_line or _read_from_console
        self.state = SessionState.IDLE

    async def run(self) -> None:
        """Show the banner and loop until quit/exit or end of input."""
        progress.print_welcome(
            output_dir=self.config.output_dir,
            variation_count=self.config.variation_count,
            model=self.config.default_model,
            shadows=self.config.shadows,
        )
        while self.state is not SessionState.TERMINATED:
            try:
                line = self.read_line()
            except (EOFError, KeyboardInterrupt):
                self._terminate()
                break
            await self.handle_line(line)

    async def handle_line(self, line: str) -> SessionState:
        """Dispatch one line of input and return the resulting state."""
        command = parse_command(line)
        if command.kind is CommandKind.EMPTY:
            return self.state

        self.state = SessionState.DISPATCHING
        try:
            await self._dispatch(command)
        except Exception as e:
            logger.debug("Command failed: %r", command, exc_info=True)
            progress.print_error(f"Error: {describe_exception(e)}")
        finally:
            if self.state is SessionState.DISPATCHING:
                self.state = SessionState.IDLE
        return self.state

    async def _dispatch(self, command: Command) -> None:
        if command.kind is CommandKind.QUIT:
            self._terminate()
        elif command.kind is CommandKind.HELP:
            progress.print_session_help()
        elif command.kind is CommandKind.CLEAR:
            progress.clear_screen()
        elif command.kind is CommandKind.VARIATIONS:
            await self._generate_variations(command.description, command.count)
        else:
            await self._generate_single(command.description)

    async def _generate_variations(self, description: str, count: int) -> None:
        if not MIN_VARIATIONS <= count <= MAX_VARIATIONS:
            progress.print_warning(f"Please specify {MIN_VARIATIONS}-{MAX_VARIATIONS} variations")
            return
        with progress.variations_progress(description, count, model=self.config.default_model):
            paths = await self.agent.generate_multiple_variations(description, count)
        progress.print_saved(paths)
        progress.print_success(f"Generated {len(paths)} variations successfully")

    async def _generate_single(self, description: str) -> None:
        with progress.generation_progress(description, model=self.config.default_model):
            path = await self.agent.generate_clay_image(GenerationRequest(description=description))
        progress.print_saved([path])

    def _terminate(self) -> None:
        self.state = SessionState.TERMINATED
        progress.console.print("\n👋 Thanks for creating with Clay Sculptor! Happy sculpting! 🎨✨")


__all__ = [
    "Command",
    "CommandKind",
    "InteractiveSession",
    "SessionState",
    "VARIATIONS_PATTERN",
    "parse_command",
]
