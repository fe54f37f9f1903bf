"""Error types raised by ensure-update."""


class EnsureUpdateError(Exception):
    """Base class for errors that end a run with exit code 1."""


class RepositoryNotFoundError(EnsureUpdateError, FileNotFoundError):
    """Repository path is missing, not a directory, or has no usable name."""


class UpdateFailedError(EnsureUpdateError):
    """The update command could not be run or exited unsuccessfully."""


class StorageError(EnsureUpdateError, OSError):
    """The state file could not be read or written."""


class ConfigError(EnsureUpdateError):
    """The configuration file is malformed."""
