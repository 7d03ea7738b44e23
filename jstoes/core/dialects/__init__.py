"""jstoes dialects: legacy script classification and export resolution.

Public API:
    classify(text, patterns) → Classification
    resolve_exports(classification, text, base_name, patterns, edge_case) → List[Export]
"""

from typing import TYPE_CHECKING, List, Optional

from .classifier import classify
from .models import (
    Classification,
    Dialect,
    ExplicitImport,
    Export,
    ExportAction,
    ExportEntry,
    FileRecord,
    Import,
    SourceFile,
    imported_name,
    public_name_of,
)
from .patterns import DialectPatterns
from .utils import get_resolver, make_unique

if TYPE_CHECKING:
    from ..config import EdgeCase

__all__ = [
    "classify",
    "resolve_exports",
    "get_resolver",
    "make_unique",
    "imported_name",
    "public_name_of",
    "Classification",
    "Dialect",
    "DialectPatterns",
    "ExplicitImport",
    "Export",
    "ExportAction",
    "ExportEntry",
    "FileRecord",
    "Import",
    "SourceFile",
]


def resolve_exports(
    classification: Classification,
    text: str,
    base_name: str,
    patterns: DialectPatterns,
    edge_case: Optional["EdgeCase"] = None,
) -> List[Export]:
    """Resolve a classified file's exports with its dialect's resolver.

    Args:
        classification: Result of ``classify`` on ``text``
        text: Comment-stripped script text
        base_name: File name without extension, used as fallback export
        patterns: Pattern table for the configured namespace
        edge_case: Optional per-file overrides

    Returns:
        Ordered, deduplicated exports

    Raises:
        ValueError: If the classification carries an unrecognized dialect
    """
    resolver = get_resolver(classification.dialect)
    return resolver.resolve(classification, text, base_name, patterns, edge_case)
