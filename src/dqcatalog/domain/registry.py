"""Immutable registry of core types, type aliases, and rules.

The registry is read from a generated JSON artifact with three keyed
sections (``core_types``, ``type_aliases``, ``rules``). The packaged
artifact ships in ``dqcatalog/data``; a different build can be loaded
from an explicit path. Once built, a :class:`Registry` is never mutated.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterator, Mapping
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ValidationError

from dqcatalog.domain.errors import RegistryLoadError
from dqcatalog.domain.models import CoreType, Rule, TypeAlias
from dqcatalog.domain.types import UNIVERSAL_TAG, TypeKind

PACKAGED_CATALOG = "data/type_catalog.json"

_SECTIONS: dict[str, tuple[type[BaseModel], str]] = {
    "core_types": (CoreType, "name"),
    "type_aliases": (TypeAlias, "name"),
    "rules": (Rule, "id"),
}


class Registry:
    """Read-only tables backing the catalog.

    Tests build small registries directly from model instances; production
    code goes through :func:`load_registry`.
    """

    def __init__(
        self,
        *,
        core_types: Mapping[str, CoreType],
        type_aliases: Mapping[str, TypeAlias],
        rules: Mapping[str, Rule],
        source: str = "<memory>",
        digest: str | None = None,
    ) -> None:
        self._core_types = MappingProxyType(dict(core_types))
        self._type_aliases = MappingProxyType(dict(type_aliases))
        self._rules = MappingProxyType(dict(rules))
        self.source = source
        self.digest = digest

    @classmethod
    def from_entries(
        cls,
        core_types: list[CoreType],
        type_aliases: list[TypeAlias],
        rules: list[Rule],
    ) -> Registry:
        """Build a registry keyed by each entry's own name/id."""
        return cls(
            core_types={c.name: c for c in core_types},
            type_aliases={a.name: a for a in type_aliases},
            rules={r.id: r for r in rules},
        )

    # --- Tables ---

    @property
    def core_types(self) -> Mapping[str, CoreType]:
        return self._core_types

    @property
    def type_aliases(self) -> Mapping[str, TypeAlias]:
        return self._type_aliases

    @property
    def rules(self) -> Mapping[str, Rule]:
        return self._rules

    # --- Lookups ---

    def get_core_type(self, name: str) -> CoreType | None:
        return self._core_types.get(name)

    def get_alias(self, name: str) -> TypeAlias | None:
        return self._type_aliases.get(name)

    def get_rule(self, rule_id: str) -> Rule | None:
        return self._rules.get(rule_id)

    def is_core(self, name: str) -> bool:
        return name in self._core_types

    def is_alias(self, name: str) -> bool:
        return name in self._type_aliases

    def knows(self, name: str) -> bool:
        return self.is_core(name) or self.is_alias(name)

    def kind_of(self, name: str) -> TypeKind | None:
        if self.is_core(name):
            return TypeKind.CORE
        if self.is_alias(name):
            return TypeKind.ALIAS
        return None

    def type_names(self) -> Iterator[str]:
        """Core type names first, then aliases, in registry order."""
        yield from self._core_types
        yield from self._type_aliases

    def categories(self) -> list[str]:
        return sorted({a.category for a in self._type_aliases.values() if a.category})

    def types_in_category(self, category: str) -> list[TypeAlias]:
        return [a for a in self._type_aliases.values() if a.category == category]

    def children_of(self, name: str) -> list[TypeAlias]:
        """Aliases whose ``extends`` points directly at *name*."""
        return [a for a in self._type_aliases.values() if a.extends == name]

    def rules_with_tag(self, tag: str) -> list[Rule]:
        return [r for r in self._rules.values() if tag in r.tags]

    def universal_rule_ids(self) -> list[str]:
        """Ids of ``universal``-tagged rules in plain string order.

        String ordering puts ``R17`` before ``R4``; consumers of the
        generated catalog depend on that order.
        """
        return sorted(r.id for r in self.rules_with_tag(UNIVERSAL_TAG))

    def __repr__(self) -> str:
        return (
            f"Registry(source={self.source!r}, core_types={len(self._core_types)}, "
            f"type_aliases={len(self._type_aliases)}, rules={len(self._rules)})"
        )


def _parse_section(data: dict[str, Any], section: str) -> dict[str, Any]:
    model, key_field = _SECTIONS[section]
    raw = data.get(section)
    if not isinstance(raw, dict):
        raise RegistryLoadError(f"Registry missing '{section}' section")

    entries: dict[str, Any] = {}
    for key, entry in raw.items():
        try:
            parsed = model.model_validate(entry)
        except ValidationError as exc:
            raise RegistryLoadError(f"Invalid entry '{key}' in '{section}': {exc}") from exc
        declared = getattr(parsed, key_field)
        if declared != key:
            raise RegistryLoadError(
                f"Entry '{key}' in '{section}' declares {key_field} '{declared}'"
            )
        entries[key] = parsed
    return entries


def registry_from_dict(
    data: dict[str, Any],
    *,
    source: str = "<memory>",
    digest: str | None = None,
) -> Registry:
    """Build a :class:`Registry` from the artifact's decoded JSON."""
    return Registry(
        core_types=_parse_section(data, "core_types"),
        type_aliases=_parse_section(data, "type_aliases"),
        rules=_parse_section(data, "rules"),
        source=source,
        digest=digest,
    )


def _read_artifact(path: str | Path | None) -> tuple[bytes, str]:
    if path is None:
        resource = resources.files("dqcatalog").joinpath(PACKAGED_CATALOG)
        return resource.read_bytes(), f"dqcatalog/{PACKAGED_CATALOG}"

    p = Path(path)
    if not p.is_file():
        raise RegistryLoadError(f"Catalog artifact not found: {p}")
    try:
        return p.read_bytes(), str(p)
    except OSError as exc:
        raise RegistryLoadError(f"Cannot read catalog artifact {p}: {exc}") from exc


def load_registry(path: str | Path | None = None) -> Registry:
    """Load the registry artifact (the packaged build when *path* is None).

    Raises:
        RegistryLoadError: Missing file, malformed JSON, or invalid entries.
    """
    raw, source = _read_artifact(path)
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise RegistryLoadError(f"Malformed catalog JSON in {source}: {exc}") from exc
    if not isinstance(data, dict):
        raise RegistryLoadError(f"Catalog artifact {source} is not a JSON object")

    digest = hashlib.md5(raw, usedforsecurity=False).hexdigest()
    return registry_from_dict(data, source=source, digest=digest)
