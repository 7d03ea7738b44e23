"""Dialect classification.

Tests dialect signatures in a fixed priority order and returns the
first that matches. Classification is a pure function of the text and
the pattern table.
"""

from .models import Classification, Dialect
from .patterns import (
    AMD_SIGNATURE,
    CJS_SIGNATURE,
    ES6_SIGNATURE,
    UMD_SIGNATURE,
    DialectPatterns,
)


def classify(text: str, patterns: DialectPatterns) -> Classification:
    """Classify a (comment-stripped) script into exactly one dialect.

    Priority: ES6 > AMD > CJS > Classic > Prototype > Library > UMD >
    Unknown. A file mixing ``export`` statements with ``module.exports``
    therefore classifies as ES6.

    Args:
        text: Script text
        patterns: Pattern table for the configured namespace

    Returns:
        Classification carrying the matches the dialect's resolver needs
    """
    if ES6_SIGNATURE.search(text):
        return Classification(Dialect.ES6)

    if AMD_SIGNATURE.search(text):
        return Classification(Dialect.AMD)

    cjs = [m.group(0) for m in CJS_SIGNATURE.finditer(text)]
    if cjs:
        return Classification(Dialect.CJS, tuple(cjs))

    classic = [m.group(0) for m in patterns.classic.finditer(text)]
    if classic:
        return Classification(Dialect.CLASSIC, tuple(classic))

    prototype = [m.group(1) for m in patterns.prototype.finditer(text)]
    if prototype:
        return Classification(Dialect.PROTOTYPE, tuple(prototype))

    library = [m.group(1) for m in patterns.library.finditer(text)]
    if library:
        return Classification(Dialect.LIBRARY, tuple(library))

    if UMD_SIGNATURE.search(text):
        return Classification(Dialect.UMD)

    return Classification(Dialect.UNKNOWN)
