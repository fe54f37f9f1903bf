"""Repository name resolution."""

import os
from pathlib import Path

from ensure_update.errors import RepositoryNotFoundError


def resolve_name(path: str | Path) -> str:
    """Derive the state key for a repository from its path.

    The key is the final path segment, so two repositories with the same
    directory name share one entry. Segments that are not valid UTF-8 are
    decoded lossily with replacement characters.

    Raises:
        RepositoryNotFoundError: If the path is not a directory or has no
            final segment (a filesystem root, "." or "..")
    """
    path = Path(path)

    if not path.is_dir():
        raise RepositoryNotFoundError(f"not a directory: {path}")

    name = path.name
    if name in ("", ".", ".."):
        raise RepositoryNotFoundError(f"did you attempt to update root? {path}")

    # Undecodable bytes survive in os.fsencode as surrogate escapes.
    return os.fsencode(name).decode("utf-8", errors="replace")
