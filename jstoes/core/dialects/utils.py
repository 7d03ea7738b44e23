"""Dialect utilities.

Resolver registry and small helpers shared across the pipeline.
"""

from typing import TYPE_CHECKING, Dict, Hashable, Iterable, List, TypeVar

from .models import Dialect

if TYPE_CHECKING:
    from .base import BaseExportResolver

T = TypeVar("T", bound=Hashable)

# Resolver registry, lazy-loaded on first use
_resolver_registry: Dict[Dialect, "BaseExportResolver"] = {}


def make_unique(items: Iterable[T]) -> List[T]:
    """Deduplicate preserving first-occurrence order."""
    seen = set()
    unique: List[T] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        unique.append(item)
    return unique


def get_resolver(dialect: Dialect) -> "BaseExportResolver":
    """Get the export resolver for a dialect.

    Args:
        dialect: Dialect returned by the classifier

    Returns:
        Resolver instance

    Raises:
        ValueError: If the dialect is not recognized
    """
    if not isinstance(dialect, Dialect):
        raise ValueError(f"Unrecognized dialect: {dialect!r}")

    if dialect not in _resolver_registry:
        if dialect is Dialect.ES6:
            from .es6_resolver import Es6Resolver
            _resolver_registry[dialect] = Es6Resolver()
        elif dialect is Dialect.AMD:
            from .amd_resolver import AmdResolver
            _resolver_registry[dialect] = AmdResolver()
        elif dialect is Dialect.CJS:
            from .cjs_resolver import CjsResolver
            _resolver_registry[dialect] = CjsResolver()
        elif dialect is Dialect.CLASSIC:
            from .classic_resolver import ClassicResolver
            _resolver_registry[dialect] = ClassicResolver()
        elif dialect is Dialect.PROTOTYPE:
            from .prototype_resolver import PrototypeResolver
            _resolver_registry[dialect] = PrototypeResolver()
        elif dialect is Dialect.LIBRARY:
            from .library_resolver import LibraryResolver
            _resolver_registry[dialect] = LibraryResolver()
        elif dialect in (Dialect.UMD, Dialect.UNKNOWN):
            from .fallback_resolver import FallbackResolver
            _resolver_registry[dialect] = FallbackResolver(dialect)
        else:
            raise ValueError(
                f"No export resolver for dialect: {dialect.value}. "
                f"Supported: {[d.value for d in Dialect]}"
            )

    return _resolver_registry[dialect]
