"""Domain layer: the type & rule catalog.

Depends only on stdlib, pydantic, and networkx.
It must never import from services, commands, config, or output.
"""

from dqcatalog.domain.catalog import (
    Catalog,
    default_catalog,
    derive_rules,
    lineage,
    validate_catalog,
)
from dqcatalog.domain.errors import CatalogError, CatalogIntegrityError, RegistryLoadError
from dqcatalog.domain.models import CoreType, DerivedRuleSet, Rule, TypeAlias
from dqcatalog.domain.registry import Registry, load_registry
from dqcatalog.domain.types import KeyType, Severity, TypeKind

__all__ = [
    "Catalog",
    "CatalogError",
    "CatalogIntegrityError",
    "CoreType",
    "DerivedRuleSet",
    "KeyType",
    "Registry",
    "RegistryLoadError",
    "Rule",
    "Severity",
    "TypeAlias",
    "TypeKind",
    "default_catalog",
    "derive_rules",
    "lineage",
    "load_registry",
    "validate_catalog",
]
