"""
TreeWalker - depth-first directory walk that writes a manifest with contents.

For every entry that survives the exclusion rules, the walker writes the
relative path, then for files either the content or a placeholder marker.
Entries are processed in filesystem enumeration order, one at a time, so the
output is deterministic for a given tree.
"""

import asyncio
import logging
import os
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, Optional, Protocol

from treepack.core.comment_stripper import CommentStripper
from treepack.core.file_classifier import FileCategory, classify_file
from treepack.core.errors import InvalidRootError
from treepack.core.path_filter import PathFilter
from treepack.core.path_utils import validate_scan_root

logger = logging.getLogger(__name__)

SENSITIVE_LABEL = ".env file"
SENSITIVE_SKIPPED_MARKER = "[sensitive config file - content skipped]"
BINARY_MARKER = "[Binary or non-text content not shown]"

DEFAULT_PROGRESS_INTERVAL = 100


class OutputSink(Protocol):
    """Anything with a text ``write`` method (open file, StringIO, ...)."""

    def write(self, text: str) -> Any: ...


class EntryKind(Enum):
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class TraversalEntry:
    """
    A filesystem node met during the walk.

    Attributes:
        relative_path: Path from the walk root, always '/'-separated
        absolute_path: Absolute path on disk
        kind: Directory or file
    """

    relative_path: str
    absolute_path: Path
    kind: EntryKind


@dataclass
class ScanStats:
    """Counters accumulated over one walk."""

    directories: int = 0
    files: int = 0
    skipped: int = 0
    sensitive_files: int = 0
    duration_seconds: float = 0.0


ProgressCallback = Callable[[ScanStats], None]


def _list_directory(path: Path) -> list[os.DirEntry]:
    with os.scandir(path) as it:
        return list(it)


def _read_text(path: Path) -> str:
    # Undecodable bytes are replaced rather than failing the read
    return path.read_text(encoding="utf-8", errors="replace")


def _entry_kind(entry: os.DirEntry) -> EntryKind:
    try:
        is_dir = entry.is_dir(follow_symlinks=False)
    except OSError:
        is_dir = False
    return EntryKind.DIRECTORY if is_dir else EntryKind.FILE


class TreeWalker:
    """
    Walks a directory tree and appends a manifest with file contents to a sink.

    Uses an explicit stack of directory iterators so pre-order is preserved
    without recursion depth limits.
    """

    def __init__(
        self,
        rules: Iterable[str] | PathFilter = (),
        include_sensitive_config: bool = False,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
        progress_callback: Optional[ProgressCallback] = None,
        strip_comments: bool = False,
        stripper: Optional[CommentStripper] = None,
        skip_paths: Iterable[Path | str] = (),
    ):
        """
        Initialize the TreeWalker.

        Args:
            rules: Exclusion rules evaluated against relative paths.
            include_sensitive_config: Write the content of dotenv-style files
                instead of a withheld marker.
            progress_interval: Report progress every N directories (0 disables).
            progress_callback: Optional callable invoked with the running stats
                at each progress interval.
            strip_comments: Strip comments from text files before writing them.
                Off by default; the manifest normally carries raw content.
            stripper: Comment stripper used when strip_comments is set.
            skip_paths: Exact files to leave out, such as the output file
                being written. Matched by resolved absolute path, never
                through the rule heuristics.
        """
        self._filter = rules if isinstance(rules, PathFilter) else PathFilter.from_rules(rules)
        self._include_sensitive_config = include_sensitive_config
        self._progress_interval = progress_interval
        self._progress_callback = progress_callback
        self._strip_comments = strip_comments
        self._stripper = stripper or CommentStripper()
        self._skip_paths = frozenset(Path(p).resolve() for p in skip_paths)

    async def walk(self, root_dir: Path | str, sink: OutputSink) -> ScanStats:
        """
        Walk ``root_dir`` and write the manifest to ``sink``.

        Per-entry failures are written as inline markers or logged; a failing
        sink write propagates.

        Returns:
            ScanStats for this walk

        Raises:
            InvalidRootError: If root_dir is missing or not a directory
        """
        validation = validate_scan_root(root_dir)
        if not validation.valid:
            raise InvalidRootError(validation.error_message)

        root = Path(root_dir).resolve()
        stats = ScanStats()
        start = time.perf_counter()

        root_entries = await self._list(root)
        stack: list[tuple[str, Iterator[os.DirEntry]]] = []
        if root_entries is not None:
            stack.append(("", iter(root_entries)))

        while stack:
            prefix, entries = stack[-1]
            dir_entry = next(entries, None)
            if dir_entry is None:
                stack.pop()
                continue

            entry = TraversalEntry(
                relative_path=f"{prefix}/{dir_entry.name}" if prefix else dir_entry.name,
                absolute_path=Path(dir_entry.path),
                kind=_entry_kind(dir_entry),
            )

            if self._filter.excludes(entry.relative_path):
                stats.skipped += 1
                logger.debug(f"Skipping excluded path: {entry.relative_path}")
                continue

            if entry.absolute_path in self._skip_paths:
                stats.skipped += 1
                logger.debug(f"Skipping output file: {entry.relative_path}")
                continue

            sink.write(f"{entry.relative_path}\n")

            if entry.kind is EntryKind.DIRECTORY:
                stats.directories += 1
                self._report_progress(stats)
                children = await self._list(entry.absolute_path)
                if children is not None:
                    stack.append((entry.relative_path, iter(children)))
            else:
                stats.files += 1
                await self._write_file(entry, sink, stats)

        stats.duration_seconds = time.perf_counter() - start
        return stats

    async def _list(self, path: Path) -> list[os.DirEntry] | None:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, _list_directory, path)
        except PermissionError as e:
            logger.warning(f"Permission denied accessing directory: {path} - {e}")
        except OSError as e:
            logger.warning(f"Error scanning directory: {path} - {e}")
        return None

    async def _read(self, path: Path) -> str:
        """Read a file, returning an inline error marker on failure."""
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, _read_text, path)
        except OSError as e:
            logger.warning(f"Error reading file: {path} - {e}")
            return f"[Error reading file: {e}]"

    async def _write_file(self, entry: TraversalEntry, sink: OutputSink, stats: ScanStats) -> None:
        category = classify_file(entry.relative_path)

        if category is FileCategory.SENSITIVE_CONFIG:
            stats.sensitive_files += 1
            if not self._include_sensitive_config:
                logger.debug(f"Withholding sensitive config file: {entry.relative_path}")
                sink.write(f"{SENSITIVE_SKIPPED_MARKER}\n\n")
                return
            content = await self._read(entry.absolute_path)
            logger.debug(f"Including sensitive config file: {entry.relative_path}")
            sink.write(
                f"### {SENSITIVE_LABEL} content ###\n{content}\n### End of {SENSITIVE_LABEL} ###\n\n"
            )
            return

        if category is FileCategory.BINARY_OR_UNKNOWN:
            sink.write(f"{BINARY_MARKER}\n\n")
            return

        content = await self._read(entry.absolute_path)
        if self._strip_comments:
            content = self._stripper.strip_file(entry.absolute_path, content)
        sink.write(f"{content}\n\n")

    def _report_progress(self, stats: ScanStats) -> None:
        if not self._progress_interval or stats.directories % self._progress_interval:
            return
        logger.info(
            f"Progress: {stats.directories} directories, {stats.files} files, "
            f"{stats.skipped} skipped, {stats.sensitive_files} sensitive config files"
        )
        if self._progress_callback is not None:
            self._progress_callback(stats)


async def walk(
    root_dir: Path | str,
    rules: Iterable[str],
    sink: OutputSink,
    include_sensitive_config: bool = False,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    progress_callback: Optional[ProgressCallback] = None,
    strip_comments: bool = False,
    skip_paths: Iterable[Path | str] = (),
) -> ScanStats:
    """Walk ``root_dir`` with the given rules and write the manifest to ``sink``."""
    walker = TreeWalker(
        rules,
        include_sensitive_config=include_sensitive_config,
        progress_interval=progress_interval,
        progress_callback=progress_callback,
        strip_comments=strip_comments,
        skip_paths=skip_paths,
    )
    return await walker.walk(root_dir, sink)


def walk_sync(
    root_dir: Path | str,
    rules: Iterable[str],
    sink: OutputSink,
    include_sensitive_config: bool = False,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    progress_callback: Optional[ProgressCallback] = None,
    strip_comments: bool = False,
    skip_paths: Iterable[Path | str] = (),
) -> ScanStats:
    """Blocking wrapper around :func:`walk` for synchronous callers."""
    return asyncio.run(
        walk(
            root_dir,
            rules,
            sink,
            include_sensitive_config=include_sensitive_config,
            progress_interval=progress_interval,
            progress_callback=progress_callback,
            strip_comments=strip_comments,
            skip_paths=skip_paths,
        )
    )
