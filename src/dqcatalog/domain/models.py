"""Frozen catalog entries and the derived rule set value object.

Registry entries are parsed straight from the generated catalog artifact,
so the models accept the artifact's field names (``extends``) and ignore
nothing: an unexpected key is a sign of an incompatible build.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, Field, field_serializer, field_validator

from dqcatalog.domain.types import UNIVERSAL_TAG, KeyType, Severity, TypeKind


class Rule(BaseModel):
    """A named, immutable data-quality check definition."""

    model_config = {"frozen": True, "extra": "forbid"}

    id: str
    name: str
    severity: Severity
    fixable: bool = False
    description: str | None = None
    tags: frozenset[str] = Field(default_factory=frozenset)

    @property
    def universal(self) -> bool:
        return UNIVERSAL_TAG in self.tags


class CoreType(BaseModel):
    """A primitive semantic type with no parent."""

    model_config = {"frozen": True, "extra": "forbid"}

    name: str
    rules: tuple[str, ...] = ()
    description: str | None = None

    @property
    def kind(self) -> TypeKind:
        return TypeKind.CORE


class TypeAlias(BaseModel):
    """A semantic refinement of exactly one parent type."""

    model_config = {"frozen": True, "extra": "forbid"}

    name: str
    extends: str
    rules: tuple[str, ...] = ()
    category: str | None = None
    description: str | None = None

    @property
    def kind(self) -> TypeKind:
        return TypeKind.ALIAS


class DerivedRuleSet(BaseModel):
    """Rules applicable to one field declaration, with provenance.

    ``rule_sources`` records the source that *first* introduced each rule.
    Dumps with camelCase keys (``ruleSources``, ``typeUsed``, ``keyUsed``)
    when ``by_alias=True``.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    rules: tuple[str, ...]
    rule_sources: Mapping[str, str] = Field(alias="ruleSources")
    type_used: str = Field(alias="typeUsed")
    key_used: KeyType = Field(alias="keyUsed")
    nullable: bool

    @field_validator("rule_sources", mode="after")
    @classmethod
    def _read_only_sources(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_serializer("rule_sources")
    def _dump_sources(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)

    def source_of(self, rule_id: str) -> str | None:
        return self.rule_sources.get(rule_id)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self.rule_sources
