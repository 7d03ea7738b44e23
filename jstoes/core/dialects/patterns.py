"""Dialect signature patterns.

The pattern table depends on the legacy global namespace identifier
(``THREE``, ``Global`` ...). It is built once per configuration via
``DialectPatterns.for_global`` and passed explicitly to every
classification and resolution call.
"""

import re
from dataclasses import dataclass
from typing import Pattern


# Dialect signatures that do not depend on the namespace identifier
ES6_SIGNATURE = re.compile(
    r"(?<![\w$.])(?:"
    r"export\s+(?:default|var|let|const|function|class)\b"
    r"|(?:import|export)\s*(?:default)?\s*\{[\w\s,]+\}\s*(?:from)?"
    r"|import\s+[\w$]+\s+from\s"
    r")"
)
AMD_SIGNATURE = re.compile(r"define\.amd")
CJS_SIGNATURE = re.compile(r"module\.exports\s*=\s*(?:\{([^}]*)\}|([\w$]+))")
UMD_SIGNATURE = re.compile(r"\(\s*function\s*\(\s*root\s*,\s*factory\s*\)\s*\{")


@dataclass(frozen=True)
class DialectPatterns:
    """Namespace-dependent signatures, compiled once.

    Attributes:
        global_name: The raw namespace identifier
        prefix: Regex fragment matching ``<global>.`` with the identifier escaped
        classic: ``<global>.A = <global>.B = function`` chains
        prototype: ``prototype.constructor = <global>.Name``
        library: ``<global>.Name = {``
    """

    global_name: str
    prefix: str
    classic: Pattern[str]
    prototype: Pattern[str]
    library: Pattern[str]

    @classmethod
    def for_global(cls, global_name: str) -> "DialectPatterns":
        prefix = rf"(?<![\w$]){re.escape(global_name)}\."
        return cls(
            global_name=global_name,
            prefix=prefix,
            classic=re.compile(rf"(?:{prefix}[\w$]+\s*=\s*)+function\b"),
            prototype=re.compile(
                rf"prototype\.constructor\s*=\s*(?:{prefix})?([\w$]+)"
            ),
            library=re.compile(rf"{prefix}([\w$]+)\s*=\s*\{{"),
        )
