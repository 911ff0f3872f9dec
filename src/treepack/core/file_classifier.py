"""
File classification for content handling.

Decides whether a file's content is withheld as sensitive configuration,
written as text, or replaced with a binary placeholder. Classification is
by name only; file contents are never sniffed.
"""

import os
from enum import Enum

TEXT_EXTENSIONS: frozenset[str] = frozenset([
    ".txt", ".md", ".js", ".ts", ".jsx", ".tsx", ".css", ".scss", ".html", ".htm",
    ".xml", ".json", ".yaml", ".yml", ".csv", ".ini", ".conf", ".py", ".java",
    ".c", ".cpp", ".h", ".hpp", ".cs", ".go", ".rb", ".php", ".pl", ".sh", ".bat",
    ".ps1", ".sql", ".gitignore", ".env", ".config", ".toml", ".dockerfile",
])

# Extensionless (or dot-prefixed) names that are usually text
TEXT_FILENAMES: frozenset[str] = frozenset([
    "dockerfile", "makefile", "jenkinsfile", "vagrantfile", "readme", "license",
    "gemfile", "rakefile", "procfile", ".gitignore", ".dockerignore", ".npmignore",
])


class FileCategory(Enum):
    """How a file's content is handled in the output."""

    SENSITIVE_CONFIG = "sensitive-config"
    TEXT = "text"
    BINARY_OR_UNKNOWN = "binary-or-unknown"


def _basename(file_path: str) -> str:
    return os.path.basename(file_path.replace("\\", "/").rstrip("/"))


def is_sensitive_config(file_path: str) -> bool:
    """Check for dotenv-style names: ``.env``, ``.env.*`` or ``*.env``."""
    name = _basename(file_path).lower()
    return name == ".env" or name.startswith(".env.") or name.endswith(".env")


def is_text_file(file_path: str) -> bool:
    """Check the extension and bare filename against the text allow-list."""
    name = _basename(file_path).lower()
    ext = os.path.splitext(name)[1]
    return ext in TEXT_EXTENSIONS or name in TEXT_FILENAMES


def classify_file(file_path: str) -> FileCategory:
    """Classify a file. Sensitive configuration takes precedence over text."""
    if is_sensitive_config(file_path):
        return FileCategory.SENSITIVE_CONFIG
    if is_text_file(file_path):
        return FileCategory.TEXT
    return FileCategory.BINARY_OR_UNKNOWN
