"""Exception types for treepack."""


class TreepackError(Exception):
    """Base exception for treepack errors."""

    pass


class ConfigError(TreepackError):
    """Configuration file could not be loaded or has an invalid format."""

    pass


class InvalidRootError(TreepackError, ValueError):
    """Target directory is missing or is not a directory."""

    pass


class RulesFileError(TreepackError):
    """An explicitly requested rules file cannot be read."""

    pass


class RulesFileNotFoundError(RulesFileError, FileNotFoundError):
    """An explicitly requested rules file does not exist."""

    pass


class FileListError(TreepackError):
    """The source file list for bundle mode cannot be read.

    Carries the path that was actually probed so the CLI can show where it
    looked.
    """

    def __init__(self, message: str, searched_path: str | None = None):
        self.searched_path = searched_path
        super().__init__(message)


class FileListNotFoundError(FileListError, FileNotFoundError):
    """The source file list for bundle mode does not exist."""

    pass
