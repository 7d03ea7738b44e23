"""Output formatting.

Renders the import and export blocks of a converted file and assembles
the final text: banner + imports + transformed body + exports.
"""

import logging
import os
from typing import Dict, List, Mapping, Sequence

from .dialects.models import (
    ExplicitImport,
    Export,
    ExportAction,
    ExportEntry,
    Import,
    imported_name,
)

logger = logging.getLogger(__name__)


def relative_specifier(importer_path: str, exporter_path: str) -> str:
    """Module specifier leading from one output file to another.

    ``root/a/c/Y.js`` importing ``root/a/b/X.js`` gives ``../b/X.js``.
    """
    importer_dir = os.path.dirname(importer_path)
    exporter_dir = os.path.dirname(exporter_path)
    relative_dir = os.path.relpath(exporter_dir, importer_dir)

    specifier = os.path.join(relative_dir, os.path.basename(exporter_path))
    specifier = specifier.replace(os.sep, "/").replace("\\", "/")
    if not specifier.startswith(("./", "../")):
        specifier = "./" + specifier
    return specifier


def _brace_list(keyword: str, names: Sequence[str]) -> str:
    if len(names) == 1:
        return f"{keyword} {{ {names[0]} }}"
    lines = [f"\t{name}," for name in names[:-1]] + [f"\t{names[-1]}"]
    return f"{keyword} {{\n" + "\n".join(lines) + "\n}"


def format_imports(
    importer_path: str,
    export_map: Mapping[str, str],
    imports: Sequence[Import],
) -> str:
    """Render the import block of a file.

    Symbols are grouped by producer, in first-seen order. A renamed
    item (``"A as B"``) is looked up by ``A`` and rendered whole. A
    symbol missing from the export map is reported and dropped.

    Args:
        importer_path: Output path of the consuming file
        export_map: Symbol to output path registry
        imports: The file's import requirements

    Returns:
        Import statements followed by a blank line, or "" when none
    """
    grouped: Dict[str, List[str]] = {}

    for required in imports:
        if isinstance(required, ExplicitImport):
            grouped.setdefault(required.specifier, []).append(required.name)
            continue

        exporter_path = export_map.get(imported_name(required))
        if exporter_path is None:
            logger.warning(
                "Missing export statement for %s imported by %s, "
                "this edge case will probably need to be managed manually",
                required,
                importer_path,
            )
            continue

        specifier = relative_specifier(importer_path, exporter_path)
        grouped.setdefault(specifier, []).append(required)

    if not grouped:
        return ""

    statements = [
        f"{_brace_list('import', names)} from '{specifier}'"
        for specifier, names in grouped.items()
    ]
    return "\n".join(statements) + "\n\n"


def format_exports(file_path: str, exports: Sequence[Export]) -> str:
    """Render the export block of a file.

    Structured entries get one statement each; plain symbols share a
    single brace block.
    """
    structured = [export for export in exports if isinstance(export, ExportEntry)]
    regular = [export for export in exports if not isinstance(export, ExportEntry)]

    if not structured and not regular:
        logger.warning(
            "%s does not contain explicit or implicit exports, no export block emitted",
            os.path.basename(file_path),
        )
        return ""

    formatted = ""
    for entry in structured:
        if entry.action is ExportAction.FROM:
            formatted += f'export {{ {entry.name} }} from "{entry.complement}"\n'
        elif entry.action is ExportAction.AS:
            formatted += f"export {{ {entry.name} as {entry.complement} }}\n"
        else:
            raise ValueError(f"Invalid export action: {entry.action!r}")

    if regular:
        formatted += "\n" + _brace_list("export", regular) + "\n"

    return formatted


def assemble(banner: str, imports_block: str, body: str, exports_block: str) -> str:
    return banner + imports_block + body + exports_block
