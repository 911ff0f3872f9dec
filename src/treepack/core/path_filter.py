"""
PathFilter - decides whether a relative path is excluded by a rule set.

Rules are plain strings evaluated against relative path strings, never
against the filesystem. A rule is one of:
- an exact relative path ("src/user/user.service.ts")
- a bare filename ("package-lock.json")
- a directory name ("node_modules", "build/")
- a wildcard glob matched against the basename ("*.spec.ts")

Whether a rule names a directory is a heuristic. A bare word without a dot
is treated as a directory even if it is really an extensionless file such as
"LICENSE". For files the segment match still lands on the basename, so the
outcome only differs when the word also names a directory somewhere.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable

from treepack.core.path_utils import normalize_separators

# Rule names that are always treated as directories
KNOWN_DIRECTORIES: frozenset[str] = frozenset([
    "node_modules",
    ".git",
    ".vscode",
    "dist",
    "build",
    "coverage",
    "src",
    "test",
])


def _normalize_rule(rule: str) -> str:
    """Normalize separators and strip leading/trailing slashes."""
    return normalize_separators(rule).strip("/")


def is_directory_rule(rule: str) -> bool:
    """
    Classify a rule as directory-like.

    A rule is directory-like when it ends with a slash, is a known tooling
    directory, looks like a hidden directory (".git", ".idea"), or has no
    dot at all.
    """
    raw = normalize_separators(rule)
    if raw.endswith("/"):
        return True

    item = raw.strip("/")
    if item in KNOWN_DIRECTORIES:
        return True
    if item.startswith(".") and "." not in item[1:]:
        return True
    return "." not in item


@lru_cache(maxsize=256)
def compile_wildcard(rule: str) -> re.Pattern[str]:
    """Compile a ``*`` glob into an anchored regex."""
    parts = (re.escape(part) for part in rule.split("*"))
    return re.compile("^" + ".*".join(parts) + "$", re.DOTALL)


def matches_rule(relative_path: str, rule: str) -> bool:
    """Check a single (already separator-normalized) path against one rule."""
    item = _normalize_rule(rule)
    if not item:
        return False

    if relative_path == item:
        return True

    segments = relative_path.split("/")
    basename = segments[-1]

    if is_directory_rule(rule):
        if relative_path.startswith(item + "/"):
            return True
        if item in segments:
            return True
    elif basename == item:
        return True

    if "*" in item and compile_wildcard(item).match(basename):
        return True

    return False


def is_excluded(relative_path: str, rules: Iterable[str]) -> bool:
    """
    Decide whether a relative path is excluded by any rule.

    Args:
        relative_path: Path relative to the scan root, any separator style.
        rules: Exclusion rules, checked in order.

    Returns:
        True on the first matching rule, False if none match.
    """
    normalized = normalize_separators(relative_path)
    return any(matches_rule(normalized, rule) for rule in rules)


@dataclass(frozen=True)
class PathFilter:
    """Immutable rule set bound to the pure ``is_excluded`` decision."""

    rules: tuple[str, ...] = ()

    @classmethod
    def from_rules(cls, rules: Iterable[str]) -> "PathFilter":
        return cls(tuple(rules))

    def excludes(self, relative_path: str) -> bool:
        return is_excluded(relative_path, self.rules)
