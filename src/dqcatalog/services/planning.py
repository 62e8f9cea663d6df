"""PlanService: seed a per-column rule selection from column declarations.

Each declaration names a core type and optionally a more specific alias;
the alias wins when present. Types the catalog does not know are planned
as ``string`` and reported as warnings. Every derived rule is emitted as
a selected, auto-sourced entry that downstream tooling can toggle.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from dqcatalog.domain.types import KeyType
from dqcatalog.services.base import BaseService
from dqcatalog.services.result import INVALID_DECLARATIONS, ServiceResult
from dqcatalog.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class ColumnDeclaration(BaseModel):
    """One column as declared by field-declaration tooling."""

    model_config = {"frozen": True, "extra": "forbid"}

    column: str = Field(min_length=1)
    core_type: str = "string"
    type_alias: str | None = None
    key_type: KeyType = KeyType.NONE
    nullable: bool = True
    exclude: list[str] = Field(default_factory=list)

    @field_validator("type_alias")
    @classmethod
    def _blank_alias_is_none(cls, value: str | None) -> str | None:
        return value or None

    @property
    def requested_type(self) -> str:
        return self.type_alias or self.core_type


class PlannedRule(BaseModel):
    """A rule seeded for one column, selected by default."""

    model_config = {"frozen": True}

    rule_id: str
    rule_name: str
    severity: str
    fixable: bool
    source: str
    column: str
    category: Literal["auto"] = "auto"
    selected: bool = True


def _source_kind(source: str) -> str:
    """``core:string`` -> ``core``; ``primary_key`` -> ``primary_key``."""
    return source.split(":", 1)[0]


class PlanService(BaseService):
    """Builds column rule plans against the loaded catalog."""

    @traced
    def plan(self, declarations: list[ColumnDeclaration]) -> ServiceResult:
        """Derive and expand rules for every declared column."""
        seen = Counter(d.column for d in declarations)
        duplicates = sorted(name for name, n in seen.items() if n > 1)
        if duplicates:
            return ServiceResult.failure(
                "plan",
                INVALID_DECLARATIONS,
                f"Duplicate column declarations: {', '.join(duplicates)}",
                columns=duplicates,
            )

        registry = self._catalog.registry
        fallback = self._catalog.resolver.fallback_type
        warnings: list[str] = []
        columns: list[dict[str, Any]] = []
        by_source: Counter[str] = Counter()

        for decl in declarations:
            type_name = decl.requested_type
            if not registry.knows(type_name):
                warnings.append(
                    f"Column '{decl.column}': unknown type '{type_name}', planned as '{fallback}'"
                )
                type_name = fallback

            with trace_span(f"column:{decl.column}"):
                derived = self._catalog.derive_rules(
                    type_name,
                    decl.key_type,
                    decl.nullable,
                    self._exclusions(decl.exclude),
                )

            planned: list[dict[str, Any]] = []
            for rid in derived.rules:
                rule = self._catalog.describe_rule(rid)
                source = derived.rule_sources[rid]
                by_source[_source_kind(source)] += 1
                planned.append(
                    PlannedRule(
                        rule_id=rid,
                        rule_name=rule.name,
                        severity=str(rule.severity),
                        fixable=rule.fixable,
                        source=source,
                        column=decl.column,
                    ).model_dump(mode="json")
                )

            columns.append(
                {
                    "column": decl.column,
                    "type_used": derived.type_used,
                    "key_used": str(derived.key_used),
                    "nullable": derived.nullable,
                    "rules": planned,
                }
            )

        total = sum(len(c["rules"]) for c in columns)
        logger.debug("Planned %d rules across %d columns", total, len(columns))
        return ServiceResult(
            ok=True,
            op="plan",
            data={
                "columns": columns,
                "count": len(columns),
                "total_rules": total,
                "rule_counts_by_source_kind": dict(sorted(by_source.items())),
            },
            warnings=warnings,
            meta=self._catalog_meta(),
        )

    def plan_file(self, path: Path) -> ServiceResult:
        """Read declarations from a JSON file and plan them.

        Accepts a list of declarations or an object with a ``columns`` list.
        """
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            return ServiceResult.failure(
                "plan", INVALID_DECLARATIONS, f"Cannot read {path}: {exc}", path=str(path)
            )

        entries = raw.get("columns") if isinstance(raw, dict) else raw
        if not isinstance(entries, list):
            return ServiceResult.failure(
                "plan",
                INVALID_DECLARATIONS,
                "Expected a list of column declarations",
                path=str(path),
            )

        try:
            declarations = [ColumnDeclaration.model_validate(e) for e in entries]
        except ValidationError as exc:
            return ServiceResult.failure(
                "plan",
                INVALID_DECLARATIONS,
                f"Invalid column declaration: {exc.errors()[0]['msg']}",
                path=str(path),
                errors=exc.errors(include_url=False, include_context=False),
            )
        return self.plan(declarations)
