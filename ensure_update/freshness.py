"""Decide whether a repository is due for an update."""

from datetime import datetime, timedelta, timezone


def is_due(
    table: dict[str, datetime],
    repository_name: str,
    max_age_hours: int,
    now: datetime | None = None,
) -> bool:
    """Check whether a repository should be updated.

    A repository with no recorded update is always due. Otherwise it is due
    once the time since its last update reaches max_age_hours. The distance is
    taken as an absolute value, so a timestamp in the future (clock skew)
    counts the same as one in the past.

    Args:
        table: Last-update timestamps keyed by repository name
        repository_name: Name to look up
        max_age_hours: Maximum allowed age of the last update
        now: Current time, defaults to the current UTC time

    Returns:
        True if an update should run
    """
    last_update = table.get(repository_name)
    if last_update is None:
        return True

    if now is None:
        now = datetime.now(timezone.utc)

    elapsed = abs(now - last_update)
    return elapsed >= timedelta(hours=max_age_hours)
