"""
Data models for the comment stripper module.
"""

from dataclasses import dataclass
from enum import Enum


class LanguageCategory(Enum):
    """Comment syntax family used to pick a stripping strategy."""

    C_STYLE = "c_style"
    SQL = "sql"
    JSON = "json"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class LanguageSpec:
    """
    A registered language.

    Attributes:
        language: Language identifier ('javascript', 'csharp', ...)
        name: Human-readable name ('JavaScript', 'C#', ...)
        category: Comment syntax family
    """

    language: str
    name: str
    category: LanguageCategory


UNSUPPORTED_LANGUAGE = LanguageSpec(
    language="unknown",
    name="Unsupported",
    category=LanguageCategory.UNSUPPORTED,
)
