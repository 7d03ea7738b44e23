"""CommonJS export resolver.

Reads the ``module.exports = ...`` assignments captured by the
classifier. Object literals contribute one export per property;
``key: value`` pairs whose names differ become renamed exports.
"""

import logging
import re
from typing import List

from .base import BaseExportResolver
from .models import Classification, Dialect, Export, ExportAction, ExportEntry
from .patterns import CJS_SIGNATURE, DialectPatterns

logger = logging.getLogger(__name__)

_PROPERTY = re.compile(r"^([\w$]+)(?:\s*:\s*([\w$]+))?$")

# Words that can follow `module.exports =` without naming a symbol
_NON_SYMBOLS = frozenset({
    "function", "class", "new", "require", "this", "null", "undefined",
    "true", "false", "typeof", "void", "await", "async", "yield",
})


class CjsResolver(BaseExportResolver):
    """Resolver for ``module.exports`` assignments."""

    def get_dialect(self) -> Dialect:
        return Dialect.CJS

    def extract_exports(
        self,
        classification: Classification,
        text: str,
        base_name: str,
        patterns: DialectPatterns,
    ) -> List[Export]:
        exports: List[Export] = []

        for assignment in classification.matches:
            match = CJS_SIGNATURE.search(assignment)
            if match is None:
                continue

            single = match.group(2)
            if single:
                if single in _NON_SYMBOLS or single[0].isdigit():
                    logger.debug("module.exports in %s is not a named symbol (%s)", base_name, single)
                else:
                    exports.append(single)
                continue

            for item in match.group(1).split(","):
                item = item.strip()
                if not item:
                    continue
                prop = _PROPERTY.match(item)
                if prop is None:
                    logger.debug("Skipping unparsable module.exports property %r in %s", item, base_name)
                    continue
                key, value = prop.group(1), prop.group(2)
                if value and value != key:
                    exports.append(ExportEntry(value, ExportAction.AS, key))
                else:
                    exports.append(key)

        return exports
