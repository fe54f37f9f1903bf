"""ensure-update - Main entry point."""

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from ensure_update.config import MAX_AGE_LIMIT, Config, check_max_age, load_config
from ensure_update.errors import EnsureUpdateError
from ensure_update.freshness import is_due
from ensure_update.repository import resolve_name
from ensure_update.state import StateStore
from ensure_update.updater import GitUpdater, Updater

logger = logging.getLogger(__name__)


def run(
    repository: Path,
    max_age_hours: int,
    force: bool = False,
    verbose: bool = False,
    config: Config | None = None,
    updater: Updater | None = None,
    store: StateStore | None = None,
    now: datetime | None = None,
) -> bool:
    """Update a repository unless it was updated recently.

    The state table is only written after the update command succeeds.

    Returns:
        True if the update ran, False if it was skipped
    """
    if config is None:
        config = Config()

    repository_name = resolve_name(repository)

    if store is None:
        store = StateStore(config.resolve_state_path())
    table = store.load()

    if force:
        logger.info(f"Forcing update of {repository_name}")
    elif not is_due(table, repository_name, max_age_hours, now=now):
        logger.info(f"{repository_name} was updated within the last {max_age_hours}h, skipping")
        return False

    if updater is None:
        updater = GitUpdater(config.update_command)
    updater.run_update(Path(repository), show_output=verbose)

    table[repository_name] = now or datetime.now(timezone.utc)
    store.store(table)
    logger.info(f"Updated {repository_name}")
    return True


def max_age_hours(value: str) -> int:
    """Parse the max age argument, rejecting values outside the supported range."""
    try:
        hours = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if not check_max_age(hours):
        raise argparse.ArgumentTypeError(f"must be at most {MAX_AGE_LIMIT} hours: {value}")
    return hours


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="ensure-update",
        description="Run git pull on a repository unless it was updated recently",
    )
    parser.add_argument("repository", help="A git repository to update")
    parser.add_argument(
        "max_age",
        type=max_age_hours,
        nargs="?",
        default=None,
        help="How many hours ago the last update can be before another is triggered (default: 8)",
    )
    parser.add_argument("-f", "--force", action="store_true", help="Ignore the last update time")
    parser.add_argument("--verbose", action="store_true", help="Print command output")
    parser.add_argument("--config", type=str, default=None, help="Path to config file")
    parser.add_argument("--state-file", type=str, default=None, help="Path to state file")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run ensure-update from the command line."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        config = load_config(Path(args.config) if args.config else None)
        if args.state_file:
            config.state_path = Path(args.state_file)

        max_age = args.max_age if args.max_age is not None else config.max_age_hours
        run(
            repository=Path(args.repository),
            max_age_hours=max_age,
            force=args.force,
            verbose=args.verbose,
            config=config,
        )
        return 0
    except (EnsureUpdateError, FileNotFoundError) as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.exception(f"Update failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
