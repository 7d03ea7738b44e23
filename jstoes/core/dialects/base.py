"""Base interface for dialect-specific export resolvers.

Defines the Strategy pattern base class that all export resolvers
implement. Shared resolution policy (overrides, base-name fallback,
additive exports, deduplication) lives here; dialect-specific
extraction is delegated.
"""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional

from .models import Classification, Dialect, Export
from .patterns import DialectPatterns
from .utils import make_unique

if TYPE_CHECKING:
    from ..config import EdgeCase

logger = logging.getLogger(__name__)


class BaseExportResolver(ABC):
    """Abstract base for dialect export resolvers.

    Subclasses implement:
    - get_dialect(): returns the dialect the resolver handles
    - extract_exports(): pulls exported symbol names out of the text
    """

    @abstractmethod
    def get_dialect(self) -> Dialect:
        """Return the dialect this resolver handles."""
        ...

    @abstractmethod
    def extract_exports(
        self,
        classification: Classification,
        text: str,
        base_name: str,
        patterns: DialectPatterns,
    ) -> List[Export]:
        """Extract exported symbols from a classified script.

        Args:
            classification: Classification of ``text``, with its matches
            text: Comment-stripped script text
            base_name: File name without extension
            patterns: Pattern table for the configured namespace

        Returns:
            Exports in source order, possibly with duplicates
        """
        ...

    def resolve(
        self,
        classification: Classification,
        text: str,
        base_name: str,
        patterns: DialectPatterns,
        edge_case: Optional["EdgeCase"] = None,
    ) -> List[Export]:
        """Resolve the ordered, deduplicated export set of a file.

        ``exports_override`` short-circuits extraction entirely. Otherwise
        an empty extraction falls back to the base name, and the edge
        case's additive ``exports`` are appended before deduplication.
        """
        if edge_case is not None and edge_case.exports_override is not None:
            return list(edge_case.exports_override)

        exports = self.extract_exports(classification, text, base_name, patterns)

        if not exports:
            logger.warning(
                "%s does not contain explicit or implicit exports, "
                "falling back to file name as export",
                base_name,
            )
            exports = [base_name]

        if edge_case is not None and edge_case.exports:
            exports.extend(edge_case.exports)

        return make_unique(exports)
