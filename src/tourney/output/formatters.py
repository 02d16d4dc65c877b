"""Rich/JSON output for ServiceResult.

``--json`` dumps the result model as-is. ``--quiet`` prints one line.
The default renders a status line followed by the DTO's fields, or the
error with its status code and any violations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from rich.text import Text

from tourney.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from tourney.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output mode flags derived from the CLI settings."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult[Any], *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return _render_quiet(result)

    console = create_console()
    if result.ok:
        _render_ok(result, console)
    else:
        _render_error(result, console, verbose=settings.verbose)
    return get_output(console).rstrip("\n")


def _data_fields(data: Any) -> dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump()
    if isinstance(data, dict):
        return data
    return {}


def _render_quiet(result: ServiceResult[Any]) -> str:
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {msg}"
    fields = _data_fields(result.data)
    if fields.get("id") is not None:
        return str(fields["id"])
    return f"OK: {result.op}"


def _field(console: Console, key: str, value: Any, *, style: str = "") -> None:
    """Print a single indented key-value line."""
    console.print(Text.assemble((f"  {key}: ", "tourney.key"), (str(value), style)))


def _render_ok(result: ServiceResult[Any], console: Console) -> None:
    console.print(Text.assemble(("OK", "tourney.ok"), (f"  {result.op}", "tourney.op")))
    for key, value in _data_fields(result.data).items():
        if value is None:
            continue
        _field(console, key, value, style="tourney.id" if key == "id" else "")


def _render_error(result: ServiceResult[Any], console: Console, *, verbose: bool) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text.assemble(("ERROR", "tourney.error"), (f"  {result.op}", "tourney.op"), f" - {msg}")
    )
    if err is None:
        return
    _field(console, "status", err.status, style="tourney.status")
    for violation in err.violations:
        console.print(Text(f"  - {violation}"))
    if verbose:
        for key, value in err.detail.items():
            _field(console, key, value)
