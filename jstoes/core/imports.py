"""Import resolution.

Detects the externally-defined symbols a file references, using five
independent text heuristics:

1. Explicit ``import ... from`` clauses
2. ``Object.assign`` merging two or more ``Name.prototype`` objects
3. ``Object.create( Name.prototype )`` inheritance
4. ``new Global.Name`` instantiation
5. ``instanceof Global.Name`` type checks

Every candidate naming one of the file's own exports is dropped, so a
file never imports itself.
"""

import logging
import re
from typing import TYPE_CHECKING, Collection, List, Optional, Sequence

from .dialects.models import Export, Import, imported_name, public_name_of
from .dialects.patterns import DialectPatterns
from .dialects.utils import make_unique

if TYPE_CHECKING:
    from .config import EdgeCase

logger = logging.getLogger(__name__)

_IMPORT_CLAUSE = re.compile(
    r"import\s+(?P<clause>(?:(?:\{[\w$\s,]+\}|[\w$,*-]+)\s+)+)from\b"
)
_BRACE_LIST = re.compile(r"\{([^}]*)\}")
_NAMESPACE_IMPORT = re.compile(r"\*\s*as\s+[\w$]+")
_IMPORT_ITEM = re.compile(r"[\w$]+(?: as [\w$]+)?")


def explicit_imports(text: str) -> List[str]:
    """Items of ``import`` clauses; namespace imports are skipped.

    A renamed item is kept whole (``"A as B"``) so the rebuilt import
    still binds the local name the body uses.
    """
    names: List[str] = []
    for match in _IMPORT_CLAUSE.finditer(text):
        clause = _NAMESPACE_IMPORT.sub("", match.group("clause"))

        # Default import before the brace list: import Foo, { Bar } from
        default = _BRACE_LIST.sub("", clause).replace(",", " ").split()
        names.extend(default)

        for brace in _BRACE_LIST.finditer(clause):
            for item in brace.group(1).split(","):
                item = " ".join(item.split())
                if item:
                    names.append(item)
    return names


def prototype_merges(text: str, patterns: DialectPatterns) -> List[str]:
    target = rf"(?:{patterns.prefix})?([\w$]+)\.prototype"
    merge = re.compile(rf"Object\.assign\(\s*(?:{target}\s*,?\s*){{2,}}")
    names: List[str] = []
    for match in merge.finditer(text):
        names.extend(re.findall(target, match.group(0)))
    return names


def prototype_inheritance(text: str, patterns: DialectPatterns) -> List[str]:
    inherit = re.compile(
        rf"Object\.create\(\s*(?:{patterns.prefix})?([\w$]+)\.prototype\s*\)"
    )
    return inherit.findall(text)


def instantiations(text: str, patterns: DialectPatterns) -> List[str]:
    return re.findall(rf"\bnew\s+{patterns.prefix}([\w$]+)", text)


def type_checks(text: str, patterns: DialectPatterns) -> List[str]:
    return re.findall(rf"\binstanceof\s+{patterns.prefix}([\w$]+)", text)


def resolve_imports(
    text: str,
    exports: Sequence[Export],
    patterns: DialectPatterns,
    edge_case: Optional["EdgeCase"] = None,
) -> List[Import]:
    """Resolve the symbols a file needs from other files.

    Args:
        text: Comment-stripped script text
        exports: The file's own resolved exports
        patterns: Pattern table for the configured namespace
        edge_case: Optional per-file overrides

    Returns:
        Import requirements in heuristic order, first occurrence kept
    """
    if edge_case is not None and edge_case.imports_override is not None:
        return list(edge_case.imports_override)

    own = {public_name_of(export) for export in exports}

    candidates: List[str] = []
    candidates.extend(explicit_imports(text))
    candidates.extend(prototype_merges(text, patterns))
    candidates.extend(prototype_inheritance(text, patterns))
    candidates.extend(instantiations(text, patterns))
    candidates.extend(type_checks(text, patterns))

    imports: List[Import] = list(_external(candidates, own))

    if edge_case is not None and edge_case.imports:
        imports.extend(edge_case.imports)

    return make_unique(imports)


def _external(candidates: Sequence[str], own: Collection[str]) -> List[str]:
    external = []
    for name in candidates:
        if not name or not _IMPORT_ITEM.fullmatch(name):
            continue
        if imported_name(name) in own:
            logger.debug("Ignoring self reference to %s", name)
            continue
        external.append(name)
    return external
