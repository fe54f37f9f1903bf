"""Update executors for working copies."""

import logging
import os
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from ensure_update.errors import UpdateFailedError

logger = logging.getLogger(__name__)

DEFAULT_UPDATE_COMMAND = ["git", "pull"]


class Updater(ABC):
    """Abstract base class for update executors."""

    @abstractmethod
    def run_update(self, working_directory: Path, show_output: bool = False) -> None:
        """Update the working copy at working_directory.

        Args:
            working_directory: Repository to update
            show_output: Whether to pass the command's stdout through

        Raises:
            UpdateFailedError: If the update did not succeed
        """
        pass


class GitUpdater(Updater):
    """Runs ``git pull`` against the repository's default upstream."""

    def __init__(self, command: list[str] | None = None):
        """Initialize with the update command."""
        self.command = list(command or DEFAULT_UPDATE_COMMAND)

    def run_update(self, working_directory: Path, show_output: bool = False) -> None:
        """Run the update command inside working_directory.

        stdout is discarded unless show_output is set. stderr is never
        redirected, so git's own error messages always reach the terminal.
        """
        logger.info(f"Running {' '.join(self.command)} in {working_directory}")

        # Never prompt for credentials.
        env = {**os.environ, "GIT_TERMINAL_PROMPT": "0", "GCM_INTERACTIVE": "never"}

        try:
            result = subprocess.run(
                self.command,
                cwd=working_directory,
                stdout=None if show_output else subprocess.DEVNULL,
                env=env,
                check=False,
            )
        except OSError as e:
            raise UpdateFailedError(f"could not run {self.command[0]}: {e}") from e

        if result.returncode != 0:
            logger.info(f"{self.command[0]} exited with status {result.returncode}")
            raise UpdateFailedError("repository failed to update")
