"""
CommentStripper module for treepack.

Provides language detection by extension, a finite-state scanner for
C-style comments, SQL and JSON strategies, and blank-line normalization.
"""

from .language_registry import (
    LanguageRegistry,
    detect_language,
    get_default_registry,
    get_file_type_name,
)
from .models import LanguageCategory, LanguageSpec
from .state_machine import CStyleScanner, ScannerState, Transition
from .stripper import (
    CommentStripper,
    is_supported,
    normalize_blank_lines,
    strip_comments,
)

__all__ = [
    # Main API
    "CommentStripper",
    "strip_comments",
    "is_supported",
    "normalize_blank_lines",
    # Language registry
    "LanguageCategory",
    "LanguageSpec",
    "LanguageRegistry",
    "detect_language",
    "get_default_registry",
    "get_file_type_name",
    # Scanner
    "CStyleScanner",
    "ScannerState",
    "Transition",
]
