"""Fallback export resolver for UMD and unrecognized scripts.

No structural extraction; the file is assumed to export a single
symbol named after the file itself.
"""

import logging
from typing import List

from .base import BaseExportResolver
from .models import Classification, Dialect, Export
from .patterns import DialectPatterns

logger = logging.getLogger(__name__)


class FallbackResolver(BaseExportResolver):
    """Base-name resolver shared by the UMD and Unknown dialects."""

    def __init__(self, dialect: Dialect = Dialect.UNKNOWN):
        self._dialect = dialect

    def get_dialect(self) -> Dialect:
        return self._dialect

    def extract_exports(
        self,
        classification: Classification,
        text: str,
        base_name: str,
        patterns: DialectPatterns,
    ) -> List[Export]:
        logger.debug("%s classified as %s, exporting base name", base_name, self._dialect.value)
        return [base_name]
