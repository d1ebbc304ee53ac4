"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from autoprops.output.console import create_console, get_output, style_for_action

if TYPE_CHECKING:
    from rich.console import Console

    from autoprops.services.result import ServiceResult


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
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "normalize":
        return display_value(result.data.get("value"))

    # Batch runs list the notes that were touched, one per line
    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(
            str(item["path"]) for item in items if item.get("properties_added", 0) > 0
        )

    return f"OK: {result.op}"


def display_value(value: Any) -> str:
    """Show a frontmatter value the way the note application displays it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ", ".join(display_value(v) for v in value)
    return str(value)


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="autoprops.ok")
    op = Text(f"  {result.op}", style="autoprops.op")
    console.print(label, op, sep="", end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="autoprops.key")
    if key == "path":
        v = Text(str(value), style="autoprops.path")
    elif key == "name":
        v = Text(str(value), style="autoprops.name")
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"))


def _change_table(changes: list[dict[str, Any]], *, show_unchanged: bool) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Property", style="autoprops.name", no_wrap=True)
    table.add_column("Type")
    table.add_column("Action")
    table.add_column("Value")

    for change in changes:
        if not show_unchanged and not change.get("changed"):
            continue
        action = str(change.get("action", ""))
        table.add_row(
            Text(str(change.get("name", ""))),
            str(change.get("type", "")),
            Text(action, style=style_for_action(action)),
            Text(display_value(change.get("value"))),
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="autoprops.error")
    op = Text(f"  {result.op}", style="autoprops.op")
    dash = Text(" — ")
    console.print(label, op, dash, Text(msg), sep="")
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Apply renderers ───────────────────────────────────────────────────


def _render_apply(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single-note apply: counts, then the properties written."""
    _status_line(console, result)
    d = result.data
    for key in ("path", "excluded", "properties_added"):
        if key in d:
            _field(console, key, d[key])

    changes = d.get("changes", [])
    if d.get("properties_added") or (verbose and changes):
        console.print()
        console.print(_change_table(changes, show_unchanged=verbose))
    if verbose:
        _render_meta(console, result)


def _render_plan(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a dry run: every definition and what it would do."""
    _status_line(console, result)
    d = result.data
    _field(console, "path", d.get("path", ""))
    if d.get("excluded"):
        console.print(Text("  excluded by rule; nothing would change", style="autoprops.warning"))
        return

    changes = d.get("changes", [])
    if changes:
        console.print()
        console.print(_change_table(changes, show_unchanged=True))
    console.print(f"\n{d.get('properties_added', 0)} of {len(changes)} properties would change")


def _render_apply_batch(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a batch run: totals, per-note table when verbose, then errors."""
    _status_line(console, result)
    d = result.data
    for key in ("files", "updated", "excluded", "properties_added"):
        _field(console, key, d.get(key, 0))

    errors = d.get("errors", [])
    if errors:
        _field(console, "errors", len(errors))

    items = d.get("items", [])
    if verbose and items:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Note", style="autoprops.path")
        table.add_column("Added", justify="right")
        table.add_column("Excluded")
        for item in items:
            table.add_row(
                Text(str(item.get("path", ""))),
                str(item.get("properties_added", 0)),
                "yes" if item.get("excluded") else "",
            )
        console.print()
        console.print(table)

    for err in errors:
        label = Text("  error ", style="autoprops.error")
        console.print(label, Text(f"{err.get('path')}: {err.get('error')}"), sep="")


# ── Rules renderers ───────────────────────────────────────────────────


def _render_list_rules(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "enabled", d.get("enabled"))

    properties = d.get("properties", [])
    if properties:
        table = Table(title="Properties", show_header=True, pad_edge=False, expand=False)
        table.add_column("Name", style="autoprops.name", no_wrap=True)
        table.add_column("Type")
        table.add_column("Value")
        table.add_column("Enabled")
        table.add_column("Overwrite")
        for prop in properties:
            table.add_row(
                Text(str(prop.get("name", ""))),
                str(prop.get("type", "")),
                Text(display_value(prop.get("value"))),
                "yes" if prop.get("enabled") else "no",
                "yes" if prop.get("overwrite") else "no",
            )
        console.print()
        console.print(table)
    else:
        _field(console, "properties", "none")

    rules = d.get("exclusion_rules", [])
    if rules:
        table = Table(title="Exclusion rules", show_header=True, pad_edge=False, expand=False)
        table.add_column("Kind")
        table.add_column("Pattern")
        for rule in rules:
            table.add_row(str(rule.get("kind", "")), Text(str(rule.get("pattern", ""))))
        console.print()
        console.print(table)

    folders = d.get("excluded_folders", [])
    if folders:
        mode = "regex" if d.get("folders_use_regex") else "exact"
        console.print()
        console.print(Text(f"  excluded folders ({mode}):", style="autoprops.key"))
        for folder in folders:
            console.print(Text(f"    {folder}"))
    if verbose:
        _render_meta(console, result)


def _render_validate_rules(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "checked", d.get("checked", 0))
    _field(console, "valid", d.get("valid"))

    issues = d.get("issues", [])
    if not issues:
        return
    severity_styles = {"ignored": "autoprops.error", "warning": "autoprops.warning"}
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Section")
    table.add_column("#", justify="right")
    table.add_column("Severity")
    table.add_column("Message")
    for issue in issues:
        severity = str(issue.get("severity", ""))
        table.add_row(
            str(issue.get("section", "")),
            str(issue.get("index", "")),
            Text(severity, style=severity_styles.get(severity, "")),
            Text(str(issue.get("message", ""))),
        )
    console.print()
    console.print(table)


def _render_normalize(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "type", d.get("type", ""))
    _field(console, "raw", repr(d.get("raw", "")))
    _field(console, "value", _json.dumps(d.get("value")))


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "apply": _render_apply,
    "apply_batch": _render_apply_batch,
    "plan": _render_plan,
    "list_rules": _render_list_rules,
    "validate_rules": _render_validate_rules,
    "normalize": _render_normalize,
}
