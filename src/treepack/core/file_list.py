"""
File-list aggregation - bundles an explicit, ordered list of files.

Unlike the tree walker, this mode does not traverse directories. Every entry
of the list is resolved, filtered with the same exclusion rules, optionally
stripped of comments, and appended under a ``<path>:`` header.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from treepack.core.comment_stripper import CommentStripper, get_file_type_name
from treepack.core.errors import FileListError, FileListNotFoundError
from treepack.core.path_filter import is_excluded
from treepack.core.path_utils import resolve_file_path, to_display_path
from treepack.core.rules import parse_rules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileListOptions:
    """
    Options for one file-list aggregation run.

    Attributes:
        rules: Exclusion rules checked against each list entry
        strip_comments: Remove comments for supported languages
        skip_directories: Skip entries that resolve to directories
        root_folder: Project folder used for resolution and display trimming
        base_dir: Directory relative entries are resolved against
    """

    rules: tuple[str, ...] = ()
    strip_comments: bool = True
    skip_directories: bool = True
    root_folder: Optional[str] = None
    base_dir: Path = field(default_factory=Path.cwd)


@dataclass
class AggregationResult:
    """Result of a file-list aggregation."""

    processed: int = 0
    skipped: int = 0
    not_found: int = 0
    added_files: list[str] = field(default_factory=list)
    content: str = ""


def read_file_list(list_path: Path | str) -> list[str]:
    """
    Read the list of files to bundle.

    Blank lines and lines starting with '#' are ignored.

    Raises:
        FileListNotFoundError: If the list file does not exist.
        FileListError: If the list file cannot be read or decoded.
    """
    list_path = Path(list_path)
    if not list_path.exists():
        raise FileListNotFoundError(
            f"File list '{list_path}' not found", searched_path=str(list_path)
        )
    try:
        content = list_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FileListError(
            f"Invalid UTF-8 encoding in file list '{list_path}': {e}",
            searched_path=str(list_path),
        ) from e
    except OSError as e:
        raise FileListError(
            f"Cannot read file list '{list_path}': {e}", searched_path=str(list_path)
        ) from e
    return parse_rules(content)


def _read_content(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.error(f"Error reading file {path}: {e}")
        return ""


def aggregate_file_list(
    entries: Iterable[str],
    options: FileListOptions,
    stripper: Optional[CommentStripper] = None,
) -> AggregationResult:
    """
    Concatenate the listed files into one text block.

    Args:
        entries: Ordered file paths, absolute or relative to ``options.base_dir``.
        options: Aggregation options.
        stripper: Comment stripper to use; a default one is created if None.

    Returns:
        AggregationResult with counters and the combined, outer-trimmed content.
    """
    stripper = stripper or CommentStripper()
    result = AggregationResult()
    parts: list[str] = []

    for entry in entries:
        resolved = resolve_file_path(entry, options.base_dir, options.root_folder)

        if not resolved.exists():
            logger.warning(f"Skipped file (does not exist): {entry}")
            logger.warning(f"  Tried path: {resolved}")
            result.skipped += 1
            result.not_found += 1
            continue

        if options.skip_directories and resolved.is_dir():
            logger.info(f"Skipped directory: {entry}")
            result.skipped += 1
            continue

        if is_excluded(entry, options.rules):
            logger.info(f"Skipped file (excluded): {entry}")
            result.skipped += 1
            continue

        content = _read_content(resolved)
        if options.strip_comments:
            content = stripper.strip_file(resolved, content)

        display_path = to_display_path(entry, options.root_folder)
        parts.append(f"\n{display_path}:\n{content}\n\n")
        result.added_files.append(display_path)
        result.processed += 1
        logger.info(f"Added file: {display_path} (type: {get_file_type_name(resolved)})")

    result.content = "".join(parts).strip()
    return result


def write_bundle(result: AggregationResult, output_path: Path | str) -> Path:
    """Write the aggregated content to ``output_path``, replacing any previous file."""
    output_path = Path(output_path)
    output_path.write_text(result.content, encoding="utf-8")
    return output_path
