"""Conversion pipeline.

Orchestrates: discover → Phase 1 (read, classify, resolve exports,
build export map) → Phase 2 (resolve imports, rewrite, format, write).

The export map is complete and read-only before any file's imports are
resolved. Phase 1 results are cached per file and reused by Phase 2, so
each file is read and classified exactly once.
"""

import logging
import time
from concurrent.futures import Future
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

from .config import ConverterConfig
from .dialects import classify, resolve_exports
from .dialects.models import FileRecord
from .export_map import build_export_map
from .files import (
    DEFAULT_FILE_ENCODING,
    discover_files,
    is_excluded,
    output_path_for,
    read_source,
    write_output,
)
from .imports import resolve_imports
from .output import assemble, format_exports, format_imports
from .rewrite import apply_replacements, build_replacements

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Summary of a conversion run."""

    files_converted: int = 0
    files_copied: int = 0
    files_excluded: int = 0
    files_skipped: int = 0
    exports_registered: int = 0
    outputs: List[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0


class Converter:
    """Converts a tree of legacy scripts into ES modules.

    Usage:
        converter = Converter(ConverterConfig(inputs="src", output="build", global_name="THREE"))
        converter.convert().result()
    """

    def __init__(self, config: ConverterConfig):
        self._config = config
        self._patterns = config.patterns
        self._file_map: Dict[str, FileRecord] = {}
        self._export_map: Mapping[str, str] = MappingProxyType({})
        self._result: Optional[ConversionResult] = None

    @property
    def config(self) -> ConverterConfig:
        return self._config

    @property
    def file_map(self) -> Mapping[str, FileRecord]:
        """Phase 1 records of the last run, keyed by base name."""
        return MappingProxyType(self._file_map)

    @property
    def export_map(self) -> Mapping[str, str]:
        return self._export_map

    @property
    def result(self) -> Optional[ConversionResult]:
        return self._result

    # ── Public entry point ───────────────────────────────────────────

    def convert(self, callback: Optional[Callable[..., None]] = None) -> Optional["Future[None]"]:
        """Run the conversion.

        With a callback, calls ``callback(error)`` on failure or
        ``callback()`` on success and returns None. Without one, returns
        a completed Future holding None or the raised exception.
        The pipeline itself is synchronous in both cases.
        """
        if callback is not None:
            try:
                self.run()
            except Exception as e:
                callback(e)
            else:
                callback()
            return None

        future: "Future[None]" = Future()
        try:
            self.run()
        except Exception as e:
            future.set_exception(e)
        else:
            future.set_result(None)
        return future

    def run(self) -> ConversionResult:
        """Run both phases, raising on the first fatal error."""
        start = time.time()
        result = ConversionResult()

        self._file_map = self._scan(result)
        self._export_map = build_export_map(self._file_map.values())
        result.exports_registered = len(self._export_map)

        self._process(result)

        result.elapsed_seconds = time.time() - start
        self._result = result
        self._log_result(result)
        return result

    # ── Phase 1 ──────────────────────────────────────────────────────

    def _scan(self, result: ConversionResult) -> Dict[str, FileRecord]:
        config = self._config
        file_map: Dict[str, FileRecord] = {}

        for path, root in discover_files(config.inputs):
            if is_excluded(path, config.excludes):
                logger.debug("Excluded %s", path)
                result.files_excluded += 1
                continue

            source = read_source(path, root)
            if source.base_name in file_map:
                logger.warning(
                    "The file %s already exists in the file map, skipping duplicate %s",
                    source.base_name,
                    path,
                )
                result.files_skipped += 1
                continue

            edge_case = config.edge_case_for(source.base_name)
            record = FileRecord(
                source=source,
                output_path=output_path_for(source, config.output, edge_case),
            )

            if record.is_javascript:
                record.classification = classify(source.text, self._patterns)
                record.exports = tuple(
                    resolve_exports(
                        record.classification,
                        source.text,
                        source.base_name,
                        self._patterns,
                        edge_case,
                    )
                )
                logger.debug(
                    "%s: %s, exports %s",
                    source.base_name,
                    record.classification.dialect.value,
                    list(record.exports),
                )

            file_map[source.base_name] = record

        return file_map

    # ── Phase 2 ──────────────────────────────────────────────────────

    def _process(self, result: ConversionResult) -> None:
        banner = self._config.banner

        for record in self._file_map.values():
            if record.is_javascript:
                content = self.convert_record(record)
                result.files_converted += 1
            else:
                content = banner.encode(DEFAULT_FILE_ENCODING) + record.source.raw
                result.files_copied += 1

            write_output(record.output_path, content)
            result.outputs.append(record.output_path)

    def convert_record(self, record: FileRecord) -> str:
        """Produce the converted text of one Phase 1 record."""
        source = record.source
        edge_case = self._config.edge_case_for(source.base_name)

        imports = resolve_imports(source.text, record.exports, self._patterns, edge_case)
        rules = build_replacements(source.text, record.exports, self._patterns, edge_case)

        return assemble(
            self._config.banner,
            format_imports(record.output_path, self._export_map, imports),
            apply_replacements(source.text, rules),
            format_exports(record.output_path, record.exports),
        )

    def _log_result(self, result: ConversionResult) -> None:
        logger.info(
            "Conversion complete: %d converted, %d copied, %d excluded, "
            "%d duplicates skipped, %d exports in %.2fs",
            result.files_converted,
            result.files_copied,
            result.files_excluded,
            result.files_skipped,
            result.exports_registered,
            result.elapsed_seconds,
        )


def convert(config: ConverterConfig, callback: Optional[Callable[..., None]] = None) -> Optional["Future[None]"]:
    """Convenience wrapper: ``Converter(config).convert(callback)``."""
    return Converter(config).convert(callback)
