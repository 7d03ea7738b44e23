"""Prototype-chain export resolver.

Exports the constructor name assigned through
``Foo.prototype.constructor = Global.Foo``.
"""

from typing import List

from .base import BaseExportResolver
from .models import Classification, Dialect, Export
from .patterns import DialectPatterns


class PrototypeResolver(BaseExportResolver):

    def get_dialect(self) -> Dialect:
        return Dialect.PROTOTYPE

    def extract_exports(
        self,
        classification: Classification,
        text: str,
        base_name: str,
        patterns: DialectPatterns,
    ) -> List[Export]:
        # The classifier already captured the constructor names
        return list(classification.matches)
