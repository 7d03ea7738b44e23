"""Converter configuration.

``ConverterConfig`` validates the user options once and is immutable
afterwards. Keys accept the camelCase names used in YAML config files
(``edgeCases``, ``global``, ``exportsOverride`` ...).
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from .dialects.models import ExplicitImport, Export, ExportAction, ExportEntry, Import
from .dialects.patterns import DialectPatterns
from .rewrite import ReplacementRule

logger = logging.getLogger(__name__)


def _as_tuple_of_str(value: Any, field_name: str) -> Tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return tuple(value)
    raise ValueError(
        f"Invalid {field_name} argument, expected a string or a list of strings"
    )


def _sequence(value: Any, field_name: str) -> Iterable[Any]:
    if isinstance(value, (list, tuple)):
        return value
    raise ValueError(f"Invalid {field_name}, expected a list")


def _parse_export(value: Any) -> Export:
    if isinstance(value, (str, ExportEntry)):
        return value
    if isinstance(value, (list, tuple)) and len(value) == 3:
        name, action, complement = value
        return ExportEntry(str(name), ExportAction(action), str(complement))
    raise ValueError(f"Invalid export {value!r}, expected a name or [name, from|as, complement]")


def _parse_import(value: Any) -> Import:
    if isinstance(value, (str, ExplicitImport)):
        return value
    if isinstance(value, (list, tuple)) and len(value) == 3 and value[1] == "from":
        return ExplicitImport(str(value[0]), str(value[2]))
    raise ValueError(f"Invalid import {value!r}, expected a name or [name, from, specifier]")


def _parse_replacement(value: Any) -> ReplacementRule:
    if isinstance(value, ReplacementRule):
        return value
    if isinstance(value, (list, tuple)) and len(value) == 2:
        try:
            return ReplacementRule.compile(str(value[0]), str(value[1]))
        except re.error as e:
            raise ValueError(f"Invalid replacement pattern {value[0]!r}: {e}") from e
    raise ValueError(f"Invalid replacement {value!r}, expected [pattern, replacement]")


class EdgeCase(BaseModel):
    """Manual per-file override of heuristic-derived values.

    ``*_override`` fields replace the derived value unconditionally; the
    additive fields are appended before deduplication.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    exports_override: Optional[Tuple[Any, ...]] = Field(None, alias="exportsOverride")
    imports_override: Optional[Tuple[Any, ...]] = Field(None, alias="importsOverride")
    replacements_override: Optional[Tuple[Any, ...]] = Field(None, alias="replacementsOverride")
    output_override: Optional[StrictStr] = Field(None, alias="outputOverride")
    exports: Tuple[Any, ...] = ()
    imports: Tuple[Any, ...] = ()
    replacements: Tuple[Any, ...] = ()

    @field_validator("exports_override", "exports", mode="before")
    @classmethod
    def _validate_exports(cls, value):
        if value is None:
            return None
        return tuple(_parse_export(item) for item in _sequence(value, "exports"))

    @field_validator("imports_override", "imports", mode="before")
    @classmethod
    def _validate_imports(cls, value):
        if value is None:
            return None
        return tuple(_parse_import(item) for item in _sequence(value, "imports"))

    @field_validator("replacements_override", "replacements", mode="before")
    @classmethod
    def _validate_replacements(cls, value):
        if value is None:
            return None
        return tuple(_parse_replacement(item) for item in _sequence(value, "replacements"))


class ConverterConfig(BaseModel):
    """Validated options of one conversion run."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    inputs: Tuple[str, ...] = Field(..., description="Files or directories to convert")
    excludes: Tuple[str, ...] = Field((), description="File names or path fragments to skip")
    output: StrictStr = Field(..., description="Root of the converted tree")
    edge_cases: Dict[str, EdgeCase] = Field(default_factory=dict, alias="edgeCases")
    banner: StrictStr = Field("", description="Header prefixed to every emitted file")
    global_name: StrictStr = Field(..., alias="global", min_length=1)

    @field_validator("inputs", mode="before")
    @classmethod
    def _validate_inputs(cls, value):
        return _as_tuple_of_str(value, "inputs")

    @field_validator("excludes", mode="before")
    @classmethod
    def _validate_excludes(cls, value):
        if value is None:
            return ()
        return _as_tuple_of_str(value, "excludes")

    @property
    def patterns(self) -> DialectPatterns:
        """Pattern table for ``global_name``."""
        return DialectPatterns.for_global(self.global_name)

    def edge_case_for(self, base_name: str) -> Optional[EdgeCase]:
        return self.edge_cases.get(base_name)


def load_config(path: Union[str, Path], **overrides: Any) -> ConverterConfig:
    """Load a YAML config file, applying keyword overrides on top.

    Relative ``inputs`` and ``output`` paths in the file are resolved
    against the config file's directory; overrides are used as given.
    """
    config_path = Path(path)
    with open(config_path, "r", encoding="utf-8") as f:
        data: Dict[str, Any] = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"{config_path} must contain a mapping of options")

    base_dir = config_path.resolve().parent
    if isinstance(data.get("inputs"), str):
        data["inputs"] = [data["inputs"]]
    if isinstance(data.get("inputs"), list):
        data["inputs"] = [_resolve_against(base_dir, item) for item in data["inputs"]]
    if isinstance(data.get("output"), str):
        data["output"] = _resolve_against(base_dir, data["output"])

    data.update({key: value for key, value in overrides.items() if value is not None})

    logger.debug("Loaded config from %s", config_path)
    return ConverterConfig.model_validate(data)


def _resolve_against(base_dir: Path, value: Any) -> Any:
    if not isinstance(value, str):
        return value
    return str((base_dir / value).resolve())
