"""Load-time integrity checks for the registry.

INVARIANT: a catalog that fails validation is never served. Every
``extends`` resolves to a known type, every referenced rule id exists,
and the inheritance graph is a forest rooted at core types.
"""

from __future__ import annotations

import logging

import networkx as nx

from dqcatalog.domain.errors import CatalogIntegrityError
from dqcatalog.domain.registry import Registry
from dqcatalog.domain.types import DUPLICATE_KEY_RULE, MISSING_VALUE_RULE

logger = logging.getLogger(__name__)

# Rules the deriver injects from key/nullability constraints.
CONSTRAINT_RULES = (MISSING_VALUE_RULE, DUPLICATE_KEY_RULE)


def inheritance_graph(registry: Registry) -> nx.DiGraph:
    """Directed graph with an edge ``alias -> parent`` for every alias."""
    g = nx.DiGraph()
    for name in registry.type_names():
        g.add_node(name)
    for alias in registry.type_aliases.values():
        g.add_edge(alias.name, alias.extends)
    return g


def _dangling_parents(registry: Registry) -> list[str]:
    return [
        f"Alias '{alias.name}' extends unknown type '{alias.extends}'"
        for alias in registry.type_aliases.values()
        if not registry.knows(alias.extends)
    ]


def _unknown_rule_refs(registry: Registry) -> list[str]:
    issues: list[str] = []
    for core in registry.core_types.values():
        for rid in core.rules:
            if registry.get_rule(rid) is None:
                issues.append(f"Core type '{core.name}' references unknown rule '{rid}'")
    for alias in registry.type_aliases.values():
        for rid in alias.rules:
            if registry.get_rule(rid) is None:
                issues.append(f"Alias '{alias.name}' references unknown rule '{rid}'")
    return issues


def _name_collisions(registry: Registry) -> list[str]:
    return [
        f"Alias '{name}' collides with core type of the same name"
        for name in registry.type_aliases
        if registry.is_core(name)
    ]


def _cycles(registry: Registry) -> list[str]:
    g = inheritance_graph(registry)
    # An alias shadowing a core type of the same name loops on itself;
    # that is reported as a collision, not a cycle.
    g.remove_edges_from([(u, v) for u, v in nx.selfloop_edges(g) if registry.is_core(u)])
    issues: list[str] = []
    for cycle in nx.simple_cycles(g):
        members = " -> ".join([*cycle, cycle[0]])
        issues.append(f"Inheritance cycle: {members}")
    return issues


def _missing_constraint_rules(registry: Registry) -> list[str]:
    return [
        f"Constraint rule '{rid}' is not defined"
        for rid in CONSTRAINT_RULES
        if registry.get_rule(rid) is None
    ]


def find_issues(registry: Registry, *, fallback_type: str = "string") -> list[str]:
    """Return every integrity problem in *registry* (empty when consistent)."""
    issues: list[str] = []
    issues.extend(_dangling_parents(registry))
    issues.extend(_unknown_rule_refs(registry))
    issues.extend(_name_collisions(registry))
    issues.extend(_cycles(registry))
    issues.extend(_missing_constraint_rules(registry))
    if not registry.is_core(fallback_type):
        issues.append(f"Fallback type '{fallback_type}' is not a core type")
    return issues


def validate_catalog(registry: Registry, *, fallback_type: str = "string") -> bool:
    """Check referential integrity; raise on the first inconsistent build.

    Raises:
        CatalogIntegrityError: With every issue found attached as ``issues``.
    """
    issues = find_issues(registry, fallback_type=fallback_type)
    if issues:
        logger.error(
            "Catalog %s failed validation with %d issue(s); first: %s",
            registry.source,
            len(issues),
            issues[0],
        )
        raise CatalogIntegrityError(issues)
    logger.debug(
        "Catalog %s valid: %d core types, %d aliases, %d rules",
        registry.source,
        len(registry.core_types),
        len(registry.type_aliases),
        len(registry.rules),
    )
    return True
