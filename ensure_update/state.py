"""Persisted table of last-update timestamps."""

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from dateutil.parser import isoparse
from platformdirs import user_state_dir

from ensure_update.errors import StorageError

logger = logging.getLogger(__name__)

STATE_FILENAME = "state.json"


def default_state_path(app_name: str, organization: str) -> Path:
    """Return the per-user state file for an application."""
    return Path(user_state_dir(app_name, organization)) / STATE_FILENAME


def _parse_timestamp(value: str) -> datetime:
    timestamp = isoparse(value)
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp


class StateStore:
    """JSON-backed store mapping repository names to last-update times.

    The whole table is read by load() and replaced by store(). Nothing guards
    against two processes sharing one file; the last writer wins.
    """

    def __init__(self, path: Path):
        """Initialize with the state file location."""
        self.path = path

    def load(self) -> dict[str, datetime]:
        """Load the table, or an empty one if no state has been saved yet."""
        if not self.path.exists():
            logger.info(f"No state at {self.path}, starting fresh")
            return {}

        try:
            data = json.loads(self.path.read_text())
        except OSError as e:
            raise StorageError(f"could not read state file {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise StorageError(f"state file {self.path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"state file {self.path} does not contain a JSON object")

        table = {}
        for name, value in data.items():
            try:
                table[name] = _parse_timestamp(value)
            except (TypeError, ValueError) as e:
                raise StorageError(f"bad timestamp for {name!r} in {self.path}: {value!r}") from e

        return table

    def store(self, table: dict[str, datetime]) -> None:
        """Replace the saved table with table."""
        data = {
            name: timestamp.astimezone(timezone.utc).isoformat()
            for name, timestamp in table.items()
        }

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w") as f:
                    json.dump(data, f, indent=2, sort_keys=True)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"could not write state file {self.path}: {e}") from e

        logger.info(f"Saved {len(data)} entries to {self.path}")
