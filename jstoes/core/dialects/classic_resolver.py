"""Classic namespace export resolver.

Files written as ``Global.Foo = function () {...}`` export every
assignment target preceding ``= function``, including each target of a
chained assignment (``Global.A = Global.B = function``).
"""

import re
from typing import List

from .base import BaseExportResolver
from .models import Classification, Dialect, Export
from .patterns import DialectPatterns


class ClassicResolver(BaseExportResolver):

    def get_dialect(self) -> Dialect:
        return Dialect.CLASSIC

    def extract_exports(
        self,
        classification: Classification,
        text: str,
        base_name: str,
        patterns: DialectPatterns,
    ) -> List[Export]:
        target = re.compile(rf"{patterns.prefix}([\w$]+)\s*=")

        exports: List[Export] = []
        for assignment in classification.matches:
            exports.extend(target.findall(assignment))
        return exports
