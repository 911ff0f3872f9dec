"""
Core Layer - Path filtering, comment stripping, tree walking and configuration.
"""

from treepack.core.comment_stripper import (
    CommentStripper,
    LanguageCategory,
    LanguageRegistry,
    detect_language,
    get_default_registry,
    get_file_type_name,
    normalize_blank_lines,
    strip_comments,
)
from treepack.core.config import (
    BundleConfig,
    LoggingConfig,
    ScanConfig,
    TreepackConfig,
    load_config,
)
from treepack.core.errors import (
    ConfigError,
    FileListError,
    FileListNotFoundError,
    InvalidRootError,
    RulesFileError,
    RulesFileNotFoundError,
    TreepackError,
)
from treepack.core.file_classifier import (
    FileCategory,
    classify_file,
    is_sensitive_config,
    is_text_file,
)
from treepack.core.file_list import (
    AggregationResult,
    FileListOptions,
    aggregate_file_list,
    read_file_list,
    write_bundle,
)
from treepack.core.path_filter import (
    KNOWN_DIRECTORIES,
    PathFilter,
    is_directory_rule,
    is_excluded,
)
from treepack.core.rules import DEFAULT_EXCLUDED_FILES, build_rule_set, load_rules
from treepack.core.tree_walker import (
    EntryKind,
    ScanStats,
    TraversalEntry,
    TreeWalker,
    walk,
    walk_sync,
)

__all__ = [
    # Config
    "TreepackConfig",
    "ScanConfig",
    "BundleConfig",
    "LoggingConfig",
    "load_config",
    # Errors
    "TreepackError",
    "ConfigError",
    "InvalidRootError",
    "RulesFileError",
    "RulesFileNotFoundError",
    "FileListError",
    "FileListNotFoundError",
    # PathFilter
    "PathFilter",
    "KNOWN_DIRECTORIES",
    "is_excluded",
    "is_directory_rule",
    # Rules
    "DEFAULT_EXCLUDED_FILES",
    "load_rules",
    "build_rule_set",
    # File classification
    "FileCategory",
    "classify_file",
    "is_sensitive_config",
    "is_text_file",
    # Comment stripping
    "CommentStripper",
    "LanguageCategory",
    "LanguageRegistry",
    "detect_language",
    "get_default_registry",
    "get_file_type_name",
    "normalize_blank_lines",
    "strip_comments",
    # Tree walking
    "TreeWalker",
    "TraversalEntry",
    "EntryKind",
    "ScanStats",
    "walk",
    "walk_sync",
    # File-list aggregation
    "FileListOptions",
    "AggregationResult",
    "aggregate_file_list",
    "read_file_list",
    "write_bundle",
]
