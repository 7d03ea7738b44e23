"""Replacement engine.

Builds the ordered list of text substitutions that strip legacy wrapper
syntax from one file, and applies it as a left-to-right fold.

Rule groups, in order:
1. ES module stripping (raw imports, ``export`` qualifiers)
2. Export-assignment rewriting (``Global.Foo =`` -> ``var Foo =``)
3. Wrapper unwrapping (leading self-invoking function and its closer)
4. Namespace-prefix stripping (``Global.Math.`` -> ``_Math.``, then ``Global.``)
5. Self-assignment elision (``var Foo = Foo;``)

Later rules see the output of earlier ones: group 2 relies on group 4
not having removed the namespace yet, and group 5 cleans up what
groups 2 and 4 produce together.
"""

import logging
import re
from dataclasses import dataclass
from functools import reduce
from typing import TYPE_CHECKING, List, Optional, Pattern, Sequence

from .dialects.models import Export, ExportEntry
from .dialects.patterns import DialectPatterns

if TYPE_CHECKING:
    from .config import EdgeCase

logger = logging.getLogger(__name__)

# Alias for ``Global.Math`` so it does not shadow the native ``Math``
MATH_ALIAS = "_Math."

_WRAPPER_OPENER = re.compile(r"\(\s*function\s*\(\s*([\w$]+)?\s*\)\s*\{")
_WRAPPER_OPENER_AT_START = re.compile(r"^\(function\(([\w$]+)?\)\{")
_PARAMETRIZED_CLOSER = re.compile(r"\}\s*\)\s*\(\s*[\w$.=\s]*(?:\|\|\s*\{\})?\s*\)\s*;?\s*$")
_EMPTY_CLOSER = re.compile(r"\}\s*\(\s*[\w$]*\s*\)\s*\)\s*;?\s*$")


class WrapperMismatchError(RuntimeError):
    """A self-invoking wrapper was opened but its closer could not be found."""


@dataclass(frozen=True)
class ReplacementRule:
    """One substitution step.

    ``count`` follows ``re.sub``: 0 replaces every occurrence, 1 only
    the first.
    """

    pattern: Pattern[str]
    replacement: str
    count: int = 0

    @classmethod
    def compile(cls, pattern: str, replacement: str, count: int = 0) -> "ReplacementRule":
        return cls(re.compile(pattern), replacement, count)

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text, count=self.count)


def es6_rules() -> List[ReplacementRule]:
    return [
        ReplacementRule.compile(r"import\s+(?:(?:\{[\w$\s,]+\}|[\w$,*-]+)\s+)+from.+", ""),
        ReplacementRule.compile(r"\bexport var\b", "var"),
        ReplacementRule.compile(r"\bexport function\b", "function"),
        ReplacementRule.compile(r"\bexport (let|const|class)\b", r"\1"),
        ReplacementRule.compile(
            r"\bexport\s*\{[\w$\s,]+\}\s*(?:from\s*['\"][\w$./-]+['\"])?;?", ""
        ),
    ]


def export_assignment_rules(exports: Sequence[Export], patterns: DialectPatterns) -> List[ReplacementRule]:
    rules: List[ReplacementRule] = []
    for export in exports:
        # Structured entries are declared in the body already
        if isinstance(export, ExportEntry):
            continue
        rules.append(
            ReplacementRule(
                re.compile(rf"{patterns.prefix}{re.escape(export)}\s*=(?!=)"),
                f"var {export} =",
            )
        )
        rules.append(ReplacementRule.compile(" = var ", " = "))
    return rules


def wrapper_rules(text: str) -> List[ReplacementRule]:
    """Rules removing a leading self-invoking wrapper, if any.

    Raises:
        WrapperMismatchError: If an opener is found without a closer
    """
    unspaced = re.sub(r"\s+", "", text)
    if not _WRAPPER_OPENER_AT_START.match(unspaced):
        return []

    if _PARAMETRIZED_CLOSER.search(unspaced):
        closer = _PARAMETRIZED_CLOSER
    elif _EMPTY_CLOSER.search(unspaced):
        closer = _EMPTY_CLOSER
    else:
        raise WrapperMismatchError(
            "Unable to match the end of the self-invoking wrapper, "
            "this file needs a replacements edge case"
        )

    logger.debug("Unwrapping self-invoking wrapper (closer: %s)", closer.pattern)
    return [
        ReplacementRule(_WRAPPER_OPENER, "", count=1),
        ReplacementRule(closer, "\n", count=1),
    ]


def namespace_rules(patterns: DialectPatterns) -> List[ReplacementRule]:
    return [
        ReplacementRule(re.compile(rf"{patterns.prefix}Math\."), MATH_ALIAS),
        ReplacementRule(re.compile(patterns.prefix), ""),
    ]


def self_assignment_rules() -> List[ReplacementRule]:
    return [ReplacementRule.compile(r"\bvar\s?([\w$]+)\s?=\s?\1;", "")]


def build_replacements(
    text: str,
    exports: Sequence[Export],
    patterns: DialectPatterns,
    edge_case: Optional["EdgeCase"] = None,
) -> List[ReplacementRule]:
    """Build the ordered rule list for one file.

    Args:
        text: Comment-stripped script text, used for wrapper detection
        exports: The file's resolved exports
        patterns: Pattern table for the configured namespace
        edge_case: Optional per-file overrides

    Returns:
        Rules in application order
    """
    if edge_case is not None and edge_case.replacements_override is not None:
        return list(edge_case.replacements_override)

    rules: List[ReplacementRule] = []
    rules.extend(es6_rules())
    rules.extend(export_assignment_rules(exports, patterns))
    rules.extend(wrapper_rules(text))
    rules.extend(namespace_rules(patterns))
    rules.extend(self_assignment_rules())

    if edge_case is not None and edge_case.replacements:
        rules.extend(edge_case.replacements)

    return rules


def apply_replacements(text: str, rules: Sequence[ReplacementRule]) -> str:
    """Apply rules in order, each to the previous rule's output."""
    return reduce(lambda current, rule: rule.apply(current), rules, text)
