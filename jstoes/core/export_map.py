"""Export map builder.

The export map is the global registry ``symbol -> output path`` built in
the first pass over every source file. It is the only source used to
resolve import targets in the second pass.
"""

import logging
import os
from types import MappingProxyType
from typing import Dict, Iterable, Mapping

from .dialects.models import FileRecord, public_name_of

logger = logging.getLogger(__name__)


def build_export_map(records: Iterable[FileRecord]) -> Mapping[str, str]:
    """Register every exported symbol against its owning output path.

    The first file to claim a symbol owns it. Later claims are logged and
    discarded, never merged.

    Args:
        records: Phase 1 records, in discovery order

    Returns:
        Read-only mapping from symbol name to output path
    """
    export_map: Dict[str, str] = {}

    for record in records:
        if not record.is_javascript:
            continue

        for export in record.exports:
            name = public_name_of(export)
            owner = export_map.get(name)
            if owner is not None:
                if owner != record.output_path:
                    logger.warning(
                        'Element "%s" in %s is already exported by %s, '
                        "keeping the first exporter",
                        name,
                        os.path.basename(record.source.path),
                        os.path.basename(owner),
                    )
                continue

            export_map[name] = record.output_path

    logger.info("Export map built: %d symbols", len(export_map))
    return MappingProxyType(export_map)
