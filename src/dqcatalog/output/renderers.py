"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dqcatalog.output.console import (
    create_console,
    get_output,
    style_for_severity,
    style_for_source,
)

if TYPE_CHECKING:
    from rich.console import Console

    from dqcatalog.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Rule-bearing results print one rule id per line, list results one
    name or id per line, so the output pipes cleanly into other tools.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    d = result.data
    if result.op == "derive":
        return "\n".join(d.get("rules", []))
    if result.op == "lineage":
        return "\n".join(d.get("lineage", []))
    if result.op == "plan":
        return "\n".join(
            f"{col['column']}\t{rule['rule_id']}"
            for col in d.get("columns", [])
            for rule in col.get("rules", [])
        )

    items = d.get("items")
    if items and isinstance(items, list):
        return "\n".join(_extract_id(item) for item in items if _extract_id(item))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_id(item: Any) -> str:
    """Extract an id or name from a list item."""
    if isinstance(item, dict):
        for key in ("id", "name"):
            val = item.get(key)
            if val is not None:
                return str(val)
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="dq.ok")
    op = Text(f"  {result.op}", style="dq.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="dq.key")
    if key in ("id", "rule_id"):
        v = Text(str(value), style="dq.rule")
    elif key in ("type", "type_used", "extends"):
        v = Text(str(value), style="dq.type")
    elif key == "severity":
        v = Text(str(value), style=style_for_severity(str(value)))
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 100:
        style = "bold red"
    elif duration > 10:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _rule_table(
    rules: list[dict[str, Any]],
    *,
    with_source: bool = True,
    with_tags: bool = False,
) -> Table:
    """Build a Rich Table for a list of rule summaries."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="dq.rule", no_wrap=True)
    table.add_column("Name")
    table.add_column("Severity")
    table.add_column("Fixable", justify="center")
    if with_source:
        table.add_column("Source", no_wrap=True)
    if with_tags:
        table.add_column("Tags", style="dim")

    for rule in rules:
        severity = str(rule.get("severity", ""))
        row: list[Any] = [
            str(rule.get("id", "")),
            str(rule.get("name", "")),
            Text(severity, style=style_for_severity(severity)),
            "yes" if rule.get("fixable") else "",
        ]
        if with_source:
            source = str(rule.get("source", ""))
            row.append(Text(source, style=style_for_source(source)))
        if with_tags:
            row.append(", ".join(rule.get("tags", [])))
        table.add_row(*row)

    return table


def _chain(lineage: list[str]) -> str:
    return " → ".join(f"[dq.type]{name}[/dq.type]" for name in lineage)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="dq.error")
    op = Text(f"  {result.op}", style="dq.op")
    console.print(label, op, Text(": "), Text(msg), sep="")

    if err and err.detail.get("issues"):
        for issue in err.detail["issues"]:
            console.print(Text("  ✗ ", style="dq.error"), Text(issue), sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            if k != "issues":
                console.print(f"    {k}: {v}")


# ── Lineage & derivation renderers ────────────────────────────────────


def _render_lineage(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the ancestor chain root first."""
    d = result.data
    console.print(_chain(d.get("lineage", [])))
    kind = d.get("kind") or "unknown"
    console.print(f"\n[dq.key]kind:[/dq.key] {kind}  [dq.key]depth:[/dq.key] {d.get('depth', 0)}")
    if verbose:
        _render_meta(console, result)


def _render_derive(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a derived rule set with per-rule provenance."""
    d = result.data
    _status_line(console, result)
    _field(console, "type_used", d.get("typeUsed", ""))
    _field(console, "key", d.get("keyUsed", "none"))
    _field(console, "nullable", d.get("nullable", True))
    if d.get("lineage"):
        console.print(Text("  lineage: ", style="dq.key"), end="")
        console.print(_chain(d["lineage"]))
    if d.get("excluded"):
        _field(console, "excluded", ", ".join(d["excluded"]))

    details = d.get("details", [])
    if details:
        console.print()
        console.print(_rule_table(details))
    console.print(f"\n{len(d.get('rules', []))} rules")
    if verbose:
        _render_meta(console, result)


# ── Validation renderer ───────────────────────────────────────────────


def _render_validate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "source", d.get("source", ""))
    _field(console, "core_types", d.get("core_types", 0))
    _field(console, "type_aliases", d.get("type_aliases", 0))
    _field(console, "rules", d.get("rules", 0))
    _field(console, "universal_rules", ", ".join(d.get("universal_rules", [])))
    if verbose:
        _field(console, "digest", d.get("digest", ""))
        _render_meta(console, result)


# ── Introspection renderers ───────────────────────────────────────────


def _render_type_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_types results as a table."""
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="dq.type", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Extends")
    table.add_column("Category")
    table.add_column("Rules", style="dq.rule")
    if verbose:
        table.add_column("Depth", justify="right", style="dim")

    for item in items:
        row = [
            str(item.get("name", "")),
            str(item.get("kind", "")),
            item.get("extends") or "",
            item.get("category") or "",
            ", ".join(item.get("rules", [])),
        ]
        if verbose:
            row.append(str(item.get("depth", "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} types")


def _render_categories(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    for item in items:
        console.print(f"  [bold]{item['name']}[/bold] ({item['count']})")
    console.print(f"\n{result.data.get('count', len(items))} categories")


def _render_show_type(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single type as a panel, then its effective rules."""
    d = result.data
    lines: list[str] = [f"kind: {d.get('kind')}"]
    for key in ("extends", "category"):
        if d.get(key):
            lines.append(f"{key}: {d[key]}")
    lines.append(f"lineage: {' → '.join(d.get('lineage', []))}")
    if d.get("rules"):
        lines.append(f"declared rules: {', '.join(d['rules'])}")
    if d.get("children"):
        lines.append(f"children: {', '.join(d['children'])}")

    content = "\n".join(lines)
    if d.get("description"):
        content += f"\n\n{d['description'].strip()}"

    console.print(Panel(content, title=str(d.get("name", "?")), border_style="dim", expand=False))

    effective = d.get("effective_rules", [])
    if effective:
        console.print(f"\n[bold]Effective rules[/bold] ({len(effective)})")
        console.print(_rule_table(effective))


def _render_rule_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_rules results as a table."""
    items = result.data.get("items", [])
    console.print(_rule_table(items, with_source=False, with_tags=verbose))
    console.print(f"\n{result.data.get('count', len(items))} rules")


def _render_show_rule(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    lines = [f"severity: {d.get('severity')}", f"fixable: {'yes' if d.get('fixable') else 'no'}"]
    if d.get("tags"):
        lines.append(f"tags: {', '.join(d['tags'])}")
    if d.get("universal"):
        lines.append("applies to: every type")
    elif d.get("declared_by"):
        lines.append(f"declared by: {', '.join(d['declared_by'])}")

    content = "\n".join(lines)
    if d.get("description"):
        content += f"\n\n{d['description'].strip()}"

    title = f"{d.get('id', '?')}: {d.get('name', 'Unknown rule')}"
    style = style_for_severity(str(d.get("severity", "")))
    console.print(Panel(content, title=title, border_style=style or "dim", expand=False))


# ── Planning renderer ─────────────────────────────────────────────────


def _render_plan(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a column plan: one table per column."""
    d = result.data
    _status_line(console, result)
    _field(console, "columns", d.get("count", 0))
    _field(console, "total_rules", d.get("total_rules", 0))
    by_kind = d.get("rule_counts_by_source_kind", {})
    if by_kind:
        _field(console, "by_source", ", ".join(f"{k}={v}" for k, v in by_kind.items()))

    for col in d.get("columns", []):
        console.print(
            f"\n[bold]{col['column']}[/bold]  [dq.type]{col['type_used']}[/dq.type]"
            f"  [dq.key]key={col['key_used']} nullable={col['nullable']}[/dq.key]"
        )
        rules = [
            {
                "id": r["rule_id"],
                "name": r["rule_name"],
                "severity": r["severity"],
                "fixable": r["fixable"],
                "source": r["source"],
            }
            for r in col.get("rules", [])
        ]
        console.print(_rule_table(rules))
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "lineage": _render_lineage,
    "derive": _render_derive,
    "validate": _render_validate,
    "list_types": _render_type_table,
    "list_categories": _render_categories,
    "show_type": _render_show_type,
    "list_rules": _render_rule_table,
    "show_rule": _render_show_rule,
    "plan": _render_plan,
}
