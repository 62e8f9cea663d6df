"""CatalogService: lineage, derivation, validation, and introspection.

Thin adapter from the domain catalog to ServiceResult payloads consumed by
the CLI (and any other front end). Registry validation is exposed as a
static method because it must work on registries that could never become
a :class:`~dqcatalog.domain.catalog.Catalog`.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from dqcatalog.domain.models import CoreType, Rule, TypeAlias
from dqcatalog.domain.registry import Registry
from dqcatalog.domain.types import UNIVERSAL_TAG, KeyType, Severity, TypeKind
from dqcatalog.domain.validation import find_issues
from dqcatalog.services.base import BaseService
from dqcatalog.services.result import CATALOG_INVALID, NOT_FOUND, ServiceResult
from dqcatalog.services.telemetry import trace_span, traced


def rule_summary(rule: Rule, source: str | None = None) -> dict[str, Any]:
    """Flat, JSON-friendly view of a rule."""
    summary: dict[str, Any] = {
        "id": rule.id,
        "name": rule.name,
        "severity": str(rule.severity),
        "fixable": rule.fixable,
    }
    if source is not None:
        summary["source"] = source
    return summary


class CatalogService(BaseService):
    """Read-only queries over the loaded catalog."""

    # ------------------------------------------------------------------
    # Lineage & derivation
    # ------------------------------------------------------------------

    @traced
    def lineage(self, type_name: str) -> ServiceResult:
        """Ancestor chain of *type_name*, root first."""
        warnings: list[str] = []
        fallback = self._fallback_warning(type_name)
        if fallback:
            warnings.append(fallback)

        chain = self._catalog.lineage(type_name)
        kind = self._catalog.registry.kind_of(type_name)
        return ServiceResult(
            ok=True,
            op="lineage",
            data={
                "type": type_name,
                "kind": str(kind) if kind else None,
                "lineage": list(chain),
                "depth": len(chain),
            },
            warnings=warnings,
        )

    @traced
    def derive(
        self,
        type_name: str,
        *,
        key_type: KeyType | str | None = None,
        nullable: bool | None = None,
        exclude: Iterable[str] = (),
    ) -> ServiceResult:
        """Derive the rule set for one field declaration.

        *key_type* and *nullable* default to the ``[derive]`` config.
        """
        key = KeyType(key_type) if key_type is not None else self._derive_config.default_key_type
        is_nullable = self._derive_config.default_nullable if nullable is None else nullable
        excluded = self._exclusions(exclude)

        warnings: list[str] = []
        fallback = self._fallback_warning(type_name)
        if fallback:
            warnings.append(fallback)

        with trace_span("derive_rules") as span:
            derived = self._catalog.derive_rules(type_name, key, is_nullable, excluded)
            if span is not None:
                span.annotate("rules", len(derived.rules))

        with trace_span("describe"):
            details = [
                rule_summary(self._catalog.describe_rule(rid), derived.rule_sources[rid])
                for rid in derived.rules
            ]

        data = derived.model_dump(mode="json", by_alias=True)
        data["lineage"] = list(self._catalog.lineage(type_name))
        data["excluded"] = sorted(excluded)
        data["details"] = details
        return ServiceResult(
            ok=True, op="derive", data=data, warnings=warnings, meta=self._catalog_meta()
        )

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def validate_registry(registry: Registry, *, fallback_type: str = "string") -> ServiceResult:
        """Report registry integrity as a result instead of raising."""
        issues = find_issues(registry, fallback_type=fallback_type)
        if issues:
            return ServiceResult.failure(
                "validate",
                CATALOG_INVALID,
                issues[0],
                issues=issues,
                source=registry.source,
            )
        return ServiceResult(
            ok=True,
            op="validate",
            data={
                "valid": True,
                "source": registry.source,
                "digest": registry.digest,
                "core_types": len(registry.core_types),
                "type_aliases": len(registry.type_aliases),
                "rules": len(registry.rules),
                "universal_rules": registry.universal_rule_ids(),
            },
        )

    @traced
    def validate(self) -> ServiceResult:
        """Re-check the loaded catalog's registry."""
        return self.validate_registry(
            self._catalog.registry,
            fallback_type=self._catalog.resolver.fallback_type,
        )

    # ------------------------------------------------------------------
    # Type introspection
    # ------------------------------------------------------------------

    def _type_row(self, entry: CoreType | TypeAlias) -> dict[str, Any]:
        row: dict[str, Any] = {
            "name": entry.name,
            "kind": str(entry.kind),
            "extends": None,
            "category": None,
            "rules": list(entry.rules),
            "depth": len(self._catalog.lineage(entry.name)),
        }
        if isinstance(entry, TypeAlias):
            row["extends"] = entry.extends
            row["category"] = entry.category
        return row

    @traced
    def list_types(
        self,
        *,
        category: str | None = None,
        kind: TypeKind | str | None = None,
    ) -> ServiceResult:
        """List registered types, optionally filtered by category or kind."""
        registry = self._catalog.registry
        wanted = TypeKind(kind) if kind is not None else None

        entries: list[CoreType | TypeAlias] = []
        if wanted in (None, TypeKind.CORE) and category is None:
            entries.extend(registry.core_types.values())
        if wanted in (None, TypeKind.ALIAS):
            if category is None:
                entries.extend(registry.type_aliases.values())
            else:
                entries.extend(registry.types_in_category(category))

        items = [self._type_row(e) for e in entries]
        return ServiceResult(
            ok=True,
            op="list_types",
            data={"items": items, "count": len(items), "category": category},
        )

    @traced
    def list_categories(self) -> ServiceResult:
        """Alias categories with their member counts."""
        registry = self._catalog.registry
        items = [
            {"name": cat, "count": len(registry.types_in_category(cat))}
            for cat in registry.categories()
        ]
        return ServiceResult(
            ok=True,
            op="list_categories",
            data={"items": items, "count": len(items)},
        )

    @traced
    def show_type(self, name: str) -> ServiceResult:
        """Full detail for one type, including its default derived rules."""
        registry = self._catalog.registry
        entry: CoreType | TypeAlias | None = registry.get_core_type(name) or registry.get_alias(
            name
        )
        if entry is None:
            return ServiceResult.failure("show_type", NOT_FOUND, f"Unknown type: {name}", name=name)

        row = self._type_row(entry)
        row["description"] = entry.description
        row["lineage"] = list(self._catalog.lineage(name))
        row["children"] = [a.name for a in registry.children_of(name)]
        derived = self._catalog.derive_rules(name, exclude=self._exclusions())
        row["effective_rules"] = [
            rule_summary(self._catalog.describe_rule(rid), derived.rule_sources[rid])
            for rid in derived.rules
        ]
        return ServiceResult(ok=True, op="show_type", data=row)

    # ------------------------------------------------------------------
    # Rule introspection
    # ------------------------------------------------------------------

    @traced
    def list_rules(
        self,
        *,
        tag: str | None = None,
        severity: Severity | str | None = None,
    ) -> ServiceResult:
        """List rules, optionally filtered by tag and/or severity."""
        rules: Iterable[Rule] = self._catalog.rules.values()
        if tag is not None:
            rules = [r for r in rules if tag in r.tags]
        if severity is not None:
            wanted = Severity(severity)
            rules = [r for r in rules if r.severity == wanted]

        items = []
        for rule in rules:
            item = rule_summary(rule)
            item["tags"] = sorted(rule.tags)
            items.append(item)
        return ServiceResult(
            ok=True,
            op="list_rules",
            data={"items": items, "count": len(items)},
        )

    @traced
    def show_rule(self, rule_id: str) -> ServiceResult:
        """Detail for one rule and the types that declare it directly."""
        normalized = rule_id.strip().upper()
        rule = self._catalog.registry.get_rule(normalized)
        if rule is None:
            return ServiceResult.failure(
                "show_rule", NOT_FOUND, f"Unknown rule: {rule_id}", rule_id=normalized
            )

        registry = self._catalog.registry
        declared_by = [c.name for c in registry.core_types.values() if normalized in c.rules]
        declared_by += [a.name for a in registry.type_aliases.values() if normalized in a.rules]

        data = rule_summary(rule)
        data["description"] = rule.description
        data["tags"] = sorted(rule.tags)
        data["universal"] = UNIVERSAL_TAG in rule.tags
        data["declared_by"] = declared_by
        return ServiceResult(ok=True, op="show_rule", data=data)
