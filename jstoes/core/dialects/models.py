"""Dialect data models.

Defines the core data structures shared by classification, export
resolution and the conversion pipeline. These are pure data
containers with no detection logic.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union


class Dialect(str, Enum):
    """Structural category a legacy script is classified into."""
    ES6 = "Es6"
    AMD = "AMD"
    CJS = "CJS"
    CLASSIC = "Classic"
    PROTOTYPE = "Prototype"
    LIBRARY = "Library"
    UMD = "UMD"
    UNKNOWN = "Unknown"


class ExportAction(str, Enum):
    """How a structured export entry relates its name to its complement."""
    FROM = "from"  # export { name } from "complement"
    AS = "as"      # export { name as complement }


@dataclass(frozen=True)
class ExportEntry:
    """A structured re-export (``from``) or renamed export (``as``).

    Plain exports are represented by their bare ``str`` symbol name.
    A ``from`` entry's name may carry its own rename (``"A as B"``).
    """

    name: str
    action: ExportAction
    complement: str

    @property
    def public_name(self) -> str:
        """The name a consuming file imports this entry under."""
        if self.action is ExportAction.AS:
            return self.complement
        return self.name.rsplit(" as ", 1)[-1].strip()


Export = Union[str, ExportEntry]


def public_name_of(export: Export) -> str:
    if isinstance(export, ExportEntry):
        return export.public_name
    return export


@dataclass(frozen=True)
class ExplicitImport:
    """An edge-case import that bypasses the export map.

    Rendered as ``import { name } from 'specifier'`` with the
    specifier used verbatim.
    """

    name: str
    specifier: str


Import = Union[str, ExplicitImport]


def imported_name(symbol: str) -> str:
    """The exported name behind an import item (``"A as B"`` gives ``"A"``)."""
    return symbol.split(" as ", 1)[0]


@dataclass(frozen=True)
class Classification:
    """Result of classifying one file's text.

    ``matches`` holds the signature matches the dialect's export
    resolver consumes; it is empty for dialects whose resolver
    needs nothing beyond the text (ES6, AMD, UMD, Unknown).
    """

    dialect: Dialect
    matches: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SourceFile:
    """One discovered input file, loaded once.

    ``text`` is the comment-stripped JavaScript source. Any other file
    keeps its undecoded content in ``raw`` and an empty ``text``.
    """

    path: str  # Absolute path
    root: str  # Input root the file was discovered under
    text: str
    base_name: str  # File name without extension
    extension: str  # ".js"
    raw: bytes = b""

    @property
    def is_javascript(self) -> bool:
        return self.extension == ".js"


@dataclass
class FileRecord:
    """Phase 1 result for one file, reused by Phase 2."""

    source: SourceFile
    output_path: str
    classification: Classification = field(
        default_factory=lambda: Classification(Dialect.UNKNOWN)
    )
    exports: Tuple[Export, ...] = ()

    @property
    def is_javascript(self) -> bool:
        return self.source.is_javascript
