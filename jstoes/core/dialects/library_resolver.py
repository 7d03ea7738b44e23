"""Object-literal library export resolver.

Exports the name declared by ``Global.Name = { ... }``.
"""

from typing import List

from .base import BaseExportResolver
from .models import Classification, Dialect, Export
from .patterns import DialectPatterns


class LibraryResolver(BaseExportResolver):

    def get_dialect(self) -> Dialect:
        return Dialect.LIBRARY

    def extract_exports(
        self,
        classification: Classification,
        text: str,
        base_name: str,
        patterns: DialectPatterns,
    ) -> List[Export]:
        return list(classification.matches)
