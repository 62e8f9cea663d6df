"""Rule derivation for a single field declaration.

Combines, in order: universal rules, rules inherited along the type's
lineage (root first), and constraint rules from key type and
nullability. Membership is a set; provenance is first-writer-wins, so an
ancestor's claim on a rule survives redeclaration further down the chain.
Excluded rule ids are gated out at every step.
"""

from __future__ import annotations

from collections.abc import Iterable

from dqcatalog.domain.lineage import LineageResolver
from dqcatalog.domain.models import DerivedRuleSet
from dqcatalog.domain.registry import Registry
from dqcatalog.domain.types import (
    DUPLICATE_KEY_RULE,
    MISSING_VALUE_RULE,
    SOURCE_NOT_NULLABLE,
    SOURCE_PRIMARY_KEY,
    SOURCE_UNIVERSAL,
    KeyType,
)


class _Accumulator:
    """Ordered rule list plus first-writer source map, behind an exclusion gate."""

    def __init__(self, exclude: frozenset[str]) -> None:
        self._exclude = exclude
        self.rules: list[str] = []
        self.sources: dict[str, str] = {}

    def add(self, rule_id: str, source: str) -> None:
        if rule_id in self._exclude or rule_id in self.sources:
            return
        self.rules.append(rule_id)
        self.sources[rule_id] = source

    def add_all(self, rule_ids: Iterable[str], source: str) -> None:
        for rule_id in rule_ids:
            self.add(rule_id, source)


class RuleDeriver:
    """Computes :class:`DerivedRuleSet` values from a validated registry."""

    def __init__(self, registry: Registry, resolver: LineageResolver) -> None:
        self._registry = registry
        self._resolver = resolver
        # Registry is immutable; the universal set never changes.
        self._universal = tuple(registry.universal_rule_ids())

    def derive_rules(
        self,
        type_name: str,
        key_type: KeyType | str = KeyType.NONE,
        nullable: bool = True,
        exclude: Iterable[str] = (),
    ) -> DerivedRuleSet:
        key = KeyType(key_type)
        if isinstance(exclude, str):
            exclude = (exclude,)
        acc = _Accumulator(frozenset(exclude))

        acc.add_all(self._universal, SOURCE_UNIVERSAL)

        for name in self._resolver.lineage(type_name):
            core = self._registry.get_core_type(name)
            if core is not None:
                acc.add_all(core.rules, f"core:{name}")
                continue
            alias = self._registry.get_alias(name)
            if alias is not None:
                acc.add_all(alias.rules, f"alias:{name}")

        if key is KeyType.PRIMARY_KEY:
            acc.add(MISSING_VALUE_RULE, SOURCE_PRIMARY_KEY)
            acc.add(DUPLICATE_KEY_RULE, SOURCE_PRIMARY_KEY)
        # KeyType.UNIQUE is recorded on the result only; no rule is injected.

        if not nullable:
            acc.add(MISSING_VALUE_RULE, SOURCE_NOT_NULLABLE)

        return DerivedRuleSet(
            rules=tuple(acc.rules),
            rule_sources=acc.sources,
            type_used=type_name,
            key_used=key,
            nullable=nullable,
        )
