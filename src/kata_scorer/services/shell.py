import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from returns.result import Failure, Result, Success

from ..models import CommandOutput

logger = logging.getLogger(__name__)


class CommandExecutor:
    """Runs external analysis tools within the scored project's directory.

    Any process that runs to completion is a `Success`, whatever its exit
    code; callers decide what the exit code means. Missing binaries, OS
    errors and timeouts are a `Failure`.
    """

    def __init__(self, working_directory: Path | str, timeout: float | None = None):
        self.cwd = Path(working_directory).resolve()
        self.timeout = timeout

    def run(self, command: Sequence[str]) -> Result[CommandOutput, str]:
        """Executes a command and captures its output."""
        argv = list(command)
        logger.debug("running %s in %s", " ".join(argv), self.cwd)
        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                cwd=self.cwd,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError:
            return Failure(f"Command not found: {argv[0]}")
        except subprocess.TimeoutExpired:
            return Failure(f"{argv[0]} timed out after {self.timeout} seconds.")
        except OSError as e:
            return Failure(f"Could not run {argv[0]}: {e}")

        logger.debug("%s exited with %d", argv[0], result.returncode)
        return Success(CommandOutput(result.stdout, result.stderr, result.returncode))

    def stream(self, command: Sequence[str]) -> int:
        """Runs a command attached to the terminal and returns its exit code."""
        argv = list(command)
        logger.debug("streaming %s in %s", " ".join(argv), self.cwd)
        try:
            return subprocess.run(argv, cwd=self.cwd, timeout=self.timeout, check=False).returncode
        except FileNotFoundError:
            logger.error("Command not found: %s", argv[0])
            return 127
        except subprocess.TimeoutExpired:
            logger.error("%s timed out after %s seconds", argv[0], self.timeout)
            return 124
