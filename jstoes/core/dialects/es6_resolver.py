"""ES module export resolver.

Scans ``export`` statements of files that already use module syntax
(possibly partially) so their symbols can be registered in the export
map and re-emitted in the normalized export block.

Handles:
- Brace lists: ``export { A, B }``
- Renames: ``export { A as B }`` -> ExportEntry(A, as, B)
- Re-exports: ``export { A } from "./a.js"`` -> ExportEntry(A, from, ./a.js)
- Declarations: ``export var|let|const|function|class Name``
"""

import logging
import re
from typing import List

from .base import BaseExportResolver
from .models import Classification, Dialect, Export, ExportAction, ExportEntry
from .patterns import DialectPatterns

logger = logging.getLogger(__name__)

_EXPORT_STATEMENT = re.compile(
    r"(?<![\w$.])export\s*(?:"
    r"\{(?P<names>[^}]*)\}\s*(?:from\s*(?P<quote>['\"])(?P<source>[^'\"]+)(?P=quote))?"
    r"|(?:var|let|const|function\s*\*?|class)\s+(?P<declared>[\w$]+)"
    r")"
)
_RENAME = re.compile(r"^([\w$]+)\s+as\s+([\w$]+)$")
_IDENTIFIER = re.compile(r"^[\w$]+$")


class Es6Resolver(BaseExportResolver):
    """Regex-based resolver for ES module exports."""

    def get_dialect(self) -> Dialect:
        return Dialect.ES6

    def extract_exports(
        self,
        classification: Classification,
        text: str,
        base_name: str,
        patterns: DialectPatterns,
    ) -> List[Export]:
        exports: List[Export] = []

        for match in _EXPORT_STATEMENT.finditer(text):
            declared = match.group("declared")
            if declared:
                exports.append(declared)
                continue

            source = match.group("source")
            for item in match.group("names").split(","):
                item = " ".join(item.split())
                if not item:
                    continue

                if source:
                    exports.append(ExportEntry(item, ExportAction.FROM, source))
                    continue

                rename = _RENAME.match(item)
                if rename:
                    exports.append(
                        ExportEntry(rename.group(1), ExportAction.AS, rename.group(2))
                    )
                elif _IDENTIFIER.match(item):
                    exports.append(item)
                else:
                    logger.debug("Skipping unparsable export item %r in %s", item, base_name)

        return exports
