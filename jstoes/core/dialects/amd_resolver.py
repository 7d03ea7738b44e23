"""AMD export resolver.

AMD modules (``define(...)`` with a ``define.amd`` guard) are not
converted automatically. The resolver reports the file so it can be
handled through an edge case, and extracts nothing.
"""

import logging
from typing import List

from .base import BaseExportResolver
from .models import Classification, Dialect, Export
from .patterns import DialectPatterns

logger = logging.getLogger(__name__)


class AmdResolver(BaseExportResolver):

    def get_dialect(self) -> Dialect:
        return Dialect.AMD

    def extract_exports(
        self,
        classification: Classification,
        text: str,
        base_name: str,
        patterns: DialectPatterns,
    ) -> List[Export]:
        logger.warning(
            "%s is an AMD module and cannot be converted automatically, "
            "declare its exports with an edge case",
            base_name,
        )
        return []
