"""
Comment Stripper - removes comments from source text by language category.

Uses a strategy per comment syntax family. Stripping is best-effort: any
failure inside a strategy returns the original content unchanged.
"""

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path

from .language_registry import LanguageRegistry, get_default_registry
from .models import LanguageCategory
from .state_machine import ALL_QUOTES, CStyleScanner

logger = logging.getLogger(__name__)

_WHITESPACE_ONLY_LINE = re.compile(r"^[ \t]+$", re.MULTILINE)
_EXCESS_NEWLINES = re.compile(r"(\r?\n){3,}")

_SQL_LINE_COMMENT = re.compile(r"--[^\n]*")
_SQL_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")


def normalize_blank_lines(content: str) -> str:
    """
    Blank whitespace-only lines, then collapse runs of blank lines to one.
    """
    result = _WHITESPACE_ONLY_LINE.sub("", content)
    return _EXCESS_NEWLINES.sub("\n\n", result)


class StripStrategy(ABC):
    """Abstract base class for category-specific comment removal."""

    # Strategies that already normalize blank lines skip the shared pass
    normalizes_blank_lines: bool = False

    @abstractmethod
    def strip(self, content: str) -> str:
        """Return content with comments removed."""
        pass


class CStyleStrategy(StripStrategy):
    """JavaScript, TypeScript, Java, C# and PHP comments."""

    def __init__(self, quotes: str = ALL_QUOTES):
        self._scanner = CStyleScanner(quotes)

    def strip(self, content: str) -> str:
        return self._scanner.strip(content)


class JsonStrategy(CStyleStrategy):
    """JSON-with-comments. Only double quotes delimit strings in JSON."""

    def __init__(self):
        super().__init__(quotes='"')


class SqlStrategy(StripStrategy):
    """SQL '--' and '/* */' comments, without string-literal awareness."""

    normalizes_blank_lines = True

    def strip(self, content: str) -> str:
        result = _SQL_LINE_COMMENT.sub("", content)
        result = _SQL_BLOCK_COMMENT.sub("", result)
        return normalize_blank_lines(result)


class CommentStripper:
    """
    Main comment stripper using strategy pattern.

    Delegates to category-specific strategies and applies blank-line
    normalization afterwards.
    """

    def __init__(self, registry: LanguageRegistry | None = None):
        self._registry = registry or get_default_registry()
        self._strategies: dict[LanguageCategory, StripStrategy] = {
            LanguageCategory.C_STYLE: CStyleStrategy(),
            LanguageCategory.SQL: SqlStrategy(),
            LanguageCategory.JSON: JsonStrategy(),
        }

    def is_supported(self, language: LanguageCategory) -> bool:
        return language in self._strategies

    def strip(self, content: str, language: LanguageCategory) -> str:
        """
        Strip comments for the given category.

        Never raises: unsupported categories and internal failures both
        return the original content.
        """
        strategy = self._strategies.get(language)
        if strategy is None:
            return content

        try:
            result = strategy.strip(content)
            if not strategy.normalizes_blank_lines:
                result = normalize_blank_lines(result)
            return result
        except Exception as e:
            logger.warning(f"Failed to strip comments: {e}")
            return content

    def strip_file(self, file_path: str | Path, content: str) -> str:
        """Strip comments using the category detected from the file extension."""
        language = self._registry.detect_from_path(file_path).category
        return self.strip(content, language)


# Global instance
_stripper = CommentStripper()


def strip_comments(content: str, language: LanguageCategory) -> str:
    """Strip comments from content with the default stripper."""
    return _stripper.strip(content, language)


def is_supported(language: LanguageCategory) -> bool:
    """Check if a category has a stripping strategy."""
    return _stripper.is_supported(language)
