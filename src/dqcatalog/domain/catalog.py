"""Catalog facade: a validated registry bundled with its resolver and deriver.

Construction validates the registry and aborts on any inconsistency, so a
:class:`Catalog` instance is always safe to query. The packaged catalog is
built lazily, once per process, by :func:`default_catalog`.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from dqcatalog.domain import validation
from dqcatalog.domain.derive import RuleDeriver
from dqcatalog.domain.lineage import DEFAULT_FALLBACK_TYPE, DEFAULT_MAX_DEPTH, LineageResolver
from dqcatalog.domain.models import CoreType, DerivedRuleSet, Rule, TypeAlias
from dqcatalog.domain.registry import Registry, load_registry
from dqcatalog.domain.types import KeyType, Severity

logger = logging.getLogger(__name__)


class Catalog:
    """Query surface over one immutable registry."""

    def __init__(
        self,
        registry: Registry,
        *,
        fallback_type: str = DEFAULT_FALLBACK_TYPE,
        max_depth: int = DEFAULT_MAX_DEPTH,
        eager: bool = True,
    ) -> None:
        validation.validate_catalog(registry, fallback_type=fallback_type)
        self._registry = registry
        self._resolver = LineageResolver(
            registry, fallback_type=fallback_type, max_depth=max_depth
        )
        self._deriver = RuleDeriver(registry, self._resolver)
        if eager:
            primed = self._resolver.prime()
            logger.debug("Primed %d lineages from %s", primed, registry.source)

    @classmethod
    def load(
        cls,
        path: str | Path | None = None,
        *,
        fallback_type: str = DEFAULT_FALLBACK_TYPE,
        max_depth: int = DEFAULT_MAX_DEPTH,
        eager: bool = True,
    ) -> Catalog:
        """Load a registry artifact and build a validated catalog from it."""
        registry = load_registry(path)
        return cls(registry, fallback_type=fallback_type, max_depth=max_depth, eager=eager)

    # --- Registry access ---

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def resolver(self) -> LineageResolver:
        return self._resolver

    @property
    def core_types(self) -> Mapping[str, CoreType]:
        return self._registry.core_types

    @property
    def type_aliases(self) -> Mapping[str, TypeAlias]:
        return self._registry.type_aliases

    @property
    def rules(self) -> Mapping[str, Rule]:
        return self._registry.rules

    # --- Queries ---

    def lineage(self, name: str) -> tuple[str, ...]:
        return self._resolver.lineage(name)

    def derive_rules(
        self,
        type_name: str,
        key_type: KeyType | str = KeyType.NONE,
        nullable: bool = True,
        exclude: Iterable[str] = (),
    ) -> DerivedRuleSet:
        return self._deriver.derive_rules(type_name, key_type, nullable, exclude)

    def validate(self) -> bool:
        return validation.validate_catalog(
            self._registry, fallback_type=self._resolver.fallback_type
        )

    def describe_rule(self, rule_id: str | None) -> Rule:
        """Look up a rule case-insensitively, with a placeholder for unknown ids."""
        normalized = (rule_id or "").strip().upper()
        rule = self._registry.get_rule(normalized)
        if rule is not None:
            return rule
        return Rule(
            id=normalized,
            name=normalized or "Unknown rule",
            severity=Severity.LOW,
            description="No description available.",
        )


@functools.cache
def default_catalog() -> Catalog:
    """The packaged catalog, loaded and validated on first use."""
    return Catalog.load()


def lineage(type_name: str) -> tuple[str, ...]:
    """Lineage of *type_name* in the packaged catalog."""
    return default_catalog().lineage(type_name)


def derive_rules(
    type_name: str,
    key_type: KeyType | str = KeyType.NONE,
    nullable: bool = True,
    exclude: Iterable[str] = (),
) -> DerivedRuleSet:
    """Derive rules for one field declaration against the packaged catalog."""
    return default_catalog().derive_rules(type_name, key_type, nullable, exclude)


def validate_catalog(
    registry: Registry | None = None,
    *,
    fallback_type: str = DEFAULT_FALLBACK_TYPE,
) -> bool:
    """Validate *registry*, or the packaged catalog when none is given.

    Raises:
        CatalogIntegrityError: If the registry is inconsistent.
    """
    if registry is None:
        return default_catalog().validate()
    return validation.validate_catalog(registry, fallback_type=fallback_type)
