"""
Exclusion rule loading.

Rules files are newline-delimited: surrounding whitespace is stripped,
blank lines and lines starting with '#' are ignored, and backslashes are
normalized to forward slashes.
"""

import logging
from pathlib import Path
from typing import Iterable

from treepack.core.errors import RulesFileError, RulesFileNotFoundError
from treepack.core.path_utils import normalize_separators

logger = logging.getLogger(__name__)

# Opt-in rule set for bundle mode (--exclude-default)
DEFAULT_EXCLUDED_FILES: tuple[str, ...] = (
    "tsconfig.json",
    "README.md",
    "readme.md",
    "Readme.md",
    "prompt.txt",
    "package-lock.json",
    "LICENSE",
    ".prettierrc",
    ".gitignore",
    ".eslintrc.js",
    ".env.test",
    ".env.production",
    "*.spec.ts",
    "*.test.ts",
)


def parse_rules(content: str) -> list[str]:
    """Parse rules file content into a list of normalized rules."""
    rules: list[str] = []
    for line in content.splitlines():
        line = line.strip()

        if not line or line.startswith("#"):
            continue

        rules.append(normalize_separators(line))
    return rules


def load_rules(path: Path | str, required: bool = False) -> list[str]:
    """
    Load exclusion rules from a file.

    Args:
        path: Path to the rules file.
        required: Raise instead of warning when the file is missing or
            cannot be read.

    Returns:
        List of rules in file order. Empty if the file is missing or
        unreadable and not required.

    Raises:
        RulesFileNotFoundError: If ``required`` and the file does not exist.
        RulesFileError: If ``required`` and the file cannot be read or decoded.
    """
    path = Path(path)

    if not path.exists():
        if required:
            raise RulesFileNotFoundError(f"Rules file not found: {path}")
        logger.warning(f"Rules file {path} does not exist, no paths will be excluded by it")
        return []

    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        if required:
            raise RulesFileError(f"Invalid UTF-8 encoding in rules file {path}: {e}") from e
        logger.warning(f"Invalid UTF-8 encoding in rules file {path}: {e}")
        return []
    except OSError as e:
        if required:
            raise RulesFileError(f"Cannot read rules file {path}: {e}") from e
        logger.warning(f"Cannot read rules file {path}: {e}")
        return []

    rules = parse_rules(content)
    logger.info(f"Loaded {len(rules)} rules from {path}")
    return rules


def build_rule_set(*sources: Iterable[str]) -> tuple[str, ...]:
    """
    Merge rule sources in order, dropping duplicates.

    The first occurrence of a rule keeps its position.
    """
    seen: set[str] = set()
    merged: list[str] = []
    for source in sources:
        for rule in source:
            rule = normalize_separators(rule.strip())
            if not rule or rule in seen:
                continue
            seen.add(rule)
            merged.append(rule)
    return tuple(merged)
