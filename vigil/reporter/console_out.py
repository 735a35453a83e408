# Vigil — Suspicious Source Idiom Scanner
# Copyright (C) 2026 Vigil Project Contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""Rich terminal output for check results."""

from __future__ import annotations

from typing import Mapping, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vigil.models.findings import Severity
from vigil.models.results import CheckMeta, CheckResult, Status


def _make_console() -> Console:
    """Console with soft wrap; width follows the live terminal."""
    return Console(soft_wrap=True)


console = _make_console()

ICON_PASS = "[bold green][OK][/bold green]"
ICON_WARN = "[bold yellow][WARN][/bold yellow]"
ICON_FAIL = "[bold red][FAIL][/bold red]"

_STATUS_ICONS = {
    Status.PASS: ICON_PASS,
    Status.WARN: ICON_WARN,
    Status.FAIL: ICON_FAIL,
}

_SEVERITY_STYLES = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "dim",
}


def print_results(
    results: Sequence[CheckResult],
    metas: Mapping[str, CheckMeta] | None = None,
    verbose: bool = False,
    out: Console | None = None,
) -> None:
    """Print one table row per check, then findings when verbose.

    ``metas`` maps check ids to their registration metadata; when given,
    the suggestion of every non-passing check is printed after the table.
    """
    out = out or console
    metas = metas or {}

    table = Table(title="Vigil security scan", show_lines=False)
    table.add_column("Status", no_wrap=True)
    table.add_column("Check")
    table.add_column("Message", overflow="fold")
    for result in results:
        table.add_row(_STATUS_ICONS[result.status], escape(result.name), escape(result.message))
    out.print(table)

    for result in results:
        if result.passed:
            continue
        meta = metas.get(result.id)
        if meta is not None and meta.suggestion:
            out.print(f"  [bold]{escape(result.name)}:[/bold] {escape(meta.suggestion)}")

    if verbose:
        for result in results:
            if not result.findings:
                continue
            out.print(f"\n[bold]{escape(result.name)}[/bold] ({len(result.findings)} finding(s))")
            for finding in result.findings:
                style = _SEVERITY_STYLES[finding.severity]
                out.print(
                    f"  [{style}]{finding.severity.value.upper():<8}[/{style}] "
                    f"{escape(finding.file)}:{finding.line}  {escape(finding.description)}",
                    highlight=False,
                )

    failed = sum(1 for r in results if r.status is Status.FAIL)
    warned = sum(1 for r in results if r.status is Status.WARN)
    out.print(f"\n[dim]{len(results)} checks | {failed} failed | {warned} warnings[/dim]")


def print_checks(metas: Sequence[CheckMeta], out: Console | None = None) -> None:
    """List registered checks."""
    out = out or console
    table = Table(title="Registered checks")
    table.add_column("ID", no_wrap=True)
    table.add_column("Name")
    table.add_column("Order", justify="right")
    table.add_column("Critical")
    for meta in sorted(metas, key=lambda m: m.order):
        table.add_row(meta.id, meta.name, str(meta.order), "yes" if meta.critical else "no")
    out.print(table)
