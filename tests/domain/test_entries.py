"""Tests for the frozen catalog entry models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from dqcatalog.domain.errors import CatalogIntegrityError
from dqcatalog.domain.models import CoreType, Rule, TypeAlias
from dqcatalog.domain.types import Severity, TypeKind


class TestRule:
    def test_defaults(self) -> None:
        rule = Rule(id="R3", name="Duplicate Row", severity="warning")
        assert rule.severity is Severity.WARNING
        assert rule.fixable is False
        assert rule.description is None
        assert rule.tags == frozenset()
        assert not rule.universal

    def test_universal_tag(self) -> None:
        rule = Rule(id="R4", name="Whitespace", severity="low", tags=["universal"])
        assert rule.universal

    def test_frozen(self) -> None:
        rule = Rule(id="R4", name="Whitespace", severity="low")
        with pytest.raises(ValidationError):
            rule.name = "Changed"  # type: ignore[misc]

    def test_unknown_severity(self) -> None:
        with pytest.raises(ValidationError):
            Rule(id="R4", name="Whitespace", severity="urgent")


class TestTypes:
    def test_kinds(self) -> None:
        assert CoreType(name="string").kind is TypeKind.CORE
        assert TypeAlias(name="email", extends="string").kind is TypeKind.ALIAS

    def test_alias_requires_parent(self) -> None:
        with pytest.raises(ValidationError):
            TypeAlias(name="email")  # type: ignore[call-arg]

    def test_rules_become_tuple(self) -> None:
        assert CoreType(name="string", rules=["R4", "R6"]).rules == ("R4", "R6")


class TestCatalogIntegrityError:
    def test_single_issue_message(self) -> None:
        err = CatalogIntegrityError(["only problem"])
        assert str(err) == "only problem"
        assert err.issues == ["only problem"]

    def test_multiple_issue_message(self) -> None:
        err = CatalogIntegrityError(["first", "second", "third"])
        assert str(err) == "first (+2 more)"
