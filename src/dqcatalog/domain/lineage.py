"""Lineage resolution: type name -> root-first ancestor chain.

Results are memoized per name. The registry is immutable, so cached
lineages never go stale. Reads are lock-free; the write path takes a lock
so concurrent callers can share one resolver. :meth:`LineageResolver.prime`
resolves every known name up front so steady-state lookups never write.
"""

from __future__ import annotations

import logging
import threading

from dqcatalog.domain.errors import CatalogIntegrityError
from dqcatalog.domain.registry import Registry
from dqcatalog.domain.types import TypeKind

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_TYPE = "string"
DEFAULT_MAX_DEPTH = 64


class LineageResolver:
    """Walks ``extends`` chains up to their core type."""

    def __init__(
        self,
        registry: Registry,
        *,
        fallback_type: str = DEFAULT_FALLBACK_TYPE,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._registry = registry
        self._fallback_type = fallback_type
        self._max_depth = max_depth
        self._cache: dict[str, tuple[str, ...]] = {}
        self._lock = threading.Lock()

    @property
    def fallback_type(self) -> str:
        return self._fallback_type

    def lineage(self, name: str) -> tuple[str, ...]:
        """Return the ancestor chain of *name*, root first and *name* last.

        Unknown names are not an error: a warning is logged once and the
        lineage of the fallback type is returned (and cached) instead.
        """
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        if self._registry.knows(name):
            resolved = self._walk(name)
        else:
            logger.warning(
                "Unknown type %r, falling back to %r", name, self._fallback_type
            )
            resolved = self._walk(self._fallback_type)

        with self._lock:
            return self._cache.setdefault(name, resolved)

    def kind_of(self, name: str) -> TypeKind | None:
        return self._registry.kind_of(name)

    def prime(self) -> int:
        """Resolve every registered type eagerly. Returns the cache size."""
        for name in self._registry.type_names():
            self.lineage(name)
        return len(self._cache)

    def cached_names(self) -> frozenset[str]:
        return frozenset(self._cache)

    def _walk(self, name: str) -> tuple[str, ...]:
        chain: list[str] = []
        seen: set[str] = set()
        current = name
        while True:
            if current in seen:
                raise CatalogIntegrityError([f"Inheritance cycle through '{current}'"])
            if len(chain) >= self._max_depth:
                raise CatalogIntegrityError(
                    [f"Lineage of '{name}' exceeds {self._max_depth} levels"]
                )
            seen.add(current)
            chain.append(current)

            if self._registry.is_core(current):
                break
            alias = self._registry.get_alias(current)
            if alias is None:
                raise CatalogIntegrityError([f"Type '{current}' is not registered"])
            current = alias.extends

        chain.reverse()
        return tuple(chain)
