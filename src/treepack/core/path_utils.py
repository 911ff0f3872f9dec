"""
Path utilities for treepack.

Provides separator normalization, target directory validation, and the
path resolution used by the file-list aggregation mode.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# How many ancestors of the base directory are probed for the root folder
MAX_ANCESTOR_DEPTH = 5


@dataclass
class PathValidationResult:
    """Result of path validation.

    Attributes:
        valid: True if the path can be used as a scan root.
        error_message: Human-readable error message if validation failed.
    """
    valid: bool
    error_message: Optional[str] = None


def normalize_separators(path: str) -> str:
    """Convert Windows separators to forward slashes."""
    return path.replace("\\", "/")


def validate_scan_root(path: str | Path) -> PathValidationResult:
    """
    Validate that a path is usable as the root of a directory walk.

    Args:
        path: Path to validate (string or Path object).

    Returns:
        PathValidationResult with valid=True if the path is an existing
        directory, or valid=False with an appropriate error message.
    """
    try:
        p = Path(path) if isinstance(path, str) else path

        if not p.exists():
            return PathValidationResult(
                valid=False,
                error_message=f"Path '{path}' does not exist"
            )

        if not p.is_dir():
            return PathValidationResult(
                valid=False,
                error_message=f"Path '{path}' is not a directory"
            )

        return PathValidationResult(valid=True)

    except (OSError, ValueError) as e:
        return PathValidationResult(
            valid=False,
            error_message=f"Invalid path '{path}': {e}"
        )


def _ancestors(directory: Path, max_depth: int = MAX_ANCESTOR_DEPTH) -> list[Path]:
    """Return ``directory`` and its parents, closest first, capped at ``max_depth``."""
    chain = [directory, *directory.parents]
    return chain[:max_depth]


def candidate_paths(
    file_path: str, base_dir: Path, root_folder: Optional[str] = None
) -> list[Path]:
    """
    List the locations probed for a file-list entry, in priority order.

    Args:
        file_path: Entry from the file list (absolute or relative).
        base_dir: Directory relative entries are resolved against.
        root_folder: Optional project folder name or path to search under.

    Returns:
        Candidate absolute paths. Absolute entries yield only themselves.
    """
    entry = Path(file_path)
    if entry.is_absolute():
        return [entry]

    candidates: list[Path] = []
    if root_folder:
        root = Path(root_folder)
        if root.is_absolute():
            candidates.append(root / entry)
        candidates.append(base_dir / root / entry)
        for ancestor in _ancestors(base_dir):
            candidates.append(ancestor / root / entry)

    candidates.append(base_dir / entry)
    return candidates


def resolve_file_path(
    file_path: str, base_dir: Path, root_folder: Optional[str] = None
) -> Path:
    """
    Resolve a file-list entry to an absolute path.

    The first existing candidate wins. When nothing exists, the first
    candidate is returned so callers can report where the file was expected.
    """
    candidates = candidate_paths(file_path, base_dir, root_folder)
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return candidates[0]


def to_display_path(file_path: str, root_folder: Optional[str] = None) -> str:
    """
    Trim a path so that only the part after ``root_folder`` is shown.

    Returns the path unchanged when no root folder is set or the folder does
    not occur in the path.
    """
    if not root_folder:
        return file_path

    normalized_path = normalize_separators(file_path)
    normalized_root = normalize_separators(root_folder)

    index = normalized_path.find(normalized_root)
    if index == -1:
        logger.warning(f"Root folder '{root_folder}' not found in path '{file_path}'")
        return file_path

    # Skip the separator that follows the folder name
    return normalized_path[index + len(normalized_root) + 1:]
