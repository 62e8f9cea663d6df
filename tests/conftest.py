"""Shared pytest fixtures for dqcatalog tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from dqcatalog.domain.catalog import Catalog, default_catalog
from dqcatalog.domain.models import CoreType, Rule, TypeAlias
from dqcatalog.domain.registry import Registry
from dqcatalog.domain.types import Severity

RegistryFactory = Callable[..., Registry]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_runtime_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Undo what a CLI invocation configures process-wide.

    ``AppContext`` replaces root logging handlers and may switch telemetry
    on; neither may leak into the next test. ``DQCAT_*`` variables from the
    developer's shell must not reach the settings under test.
    """
    monkeypatch.delenv("DQCAT_CONFIG", raising=False)
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("dqcatalog")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)

    from dqcatalog.services.telemetry import disable_telemetry

    disable_telemetry()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp dir so no stray dqcat.toml is discovered.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)


@pytest.fixture(scope="session")
def catalog() -> Catalog:
    """The packaged catalog, shared across the session (it is immutable)."""
    return default_catalog()


def _rule(rule_id: str, *tags: str, severity: Severity = Severity.MEDIUM) -> Rule:
    return Rule(id=rule_id, name=f"Rule {rule_id}", severity=severity, tags=frozenset(tags))


@pytest.fixture
def make_registry() -> RegistryFactory:
    """Factory for small in-memory registries.

    The default layout is a miniature of the packaged catalog::

        core:  string [R4, R6]   integer [R9]
        alias: email -> string [R31]
               work_email -> email [R73, R6]
               customer_id -> string [R38]

    with ``R4`` and ``R17`` tagged universal. Keyword arguments replace
    whole tables: ``core=``, ``aliases=`` (both ``{name: (parent, rules)}``
    style) and ``extra_rules=`` (ids to define on top of the defaults).
    """

    def factory(
        *,
        core: dict[str, list[str]] | None = None,
        aliases: dict[str, tuple[str, list[str]]] | None = None,
        extra_rules: list[str] | None = None,
        drop_rules: list[str] | None = None,
    ) -> Registry:
        core = core if core is not None else {"string": ["R4", "R6"], "integer": ["R9"]}
        aliases = (
            aliases
            if aliases is not None
            else {
                "email": ("string", ["R31"]),
                "work_email": ("email", ["R73", "R6"]),
                "customer_id": ("string", ["R38"]),
            }
        )
        rules = [
            _rule("R1", "nullable_false", "primary_key", severity=Severity.CRITICAL),
            _rule("R2", "primary_key", "unique", severity=Severity.CRITICAL),
            _rule("R4", "universal", severity=Severity.LOW),
            _rule("R17", "universal"),
            _rule("R6"),
            _rule("R9"),
            _rule("R31", severity=Severity.HIGH),
            _rule("R38"),
            _rule("R73"),
        ]
        rules += [_rule(rid) for rid in extra_rules or []]
        dropped = set(drop_rules or [])
        return Registry.from_entries(
            core_types=[CoreType(name=n, rules=tuple(r)) for n, r in core.items()],
            type_aliases=[
                TypeAlias(name=n, extends=parent, rules=tuple(r), category="test")
                for n, (parent, r) in aliases.items()
            ],
            rules=[r for r in rules if r.id not in dropped],
        )

    return factory


@pytest.fixture
def write_catalog(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Write a registry artifact dict to a temp JSON file and return its path."""

    def writer(data: dict[str, Any], name: str = "catalog.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return writer


@pytest.fixture
def minimal_artifact() -> dict[str, Any]:
    """Smallest consistent registry artifact."""
    return {
        "format": 1,
        "core_types": {"string": {"name": "string", "rules": ["R4"]}},
        "type_aliases": {
            "email": {"name": "email", "extends": "string", "rules": ["R31"], "category": "contact"}
        },
        "rules": {
            "R1": {"id": "R1", "name": "Missing Required Value", "severity": "critical"},
            "R2": {"id": "R2", "name": "Duplicate Primary Key", "severity": "critical"},
            "R4": {"id": "R4", "name": "Whitespace", "severity": "low", "tags": ["universal"]},
            "R31": {"id": "R31", "name": "Invalid Email", "severity": "high"},
        },
    }
