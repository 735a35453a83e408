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

"""Vigil CLI, Typer entry point.

Commands:
- vigil scan <path>  : Run the security checks and print a verdict table
- vigil checks       : List registered checks
- vigil version      : Show the version
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from vigil import __version__
from vigil.checks.register import register, run_checks, select_registrations
from vigil.exceptions import VigilError
from vigil.models.results import Status
from vigil.policy.config_loader import load_config
from vigil.reporter.console_out import console, print_checks, print_results
from vigil.reporter.json_out import build_payload, to_canonical_json, write_report

app = typer.Typer(
    name="vigil",
    help=(
        "Vigil: static scanner for dangerous and suspicious source-code idioms. "
        "Run 'vigil <command> --help' for flags (e.g. vigil scan --help for -v, --json)."
    ),
    add_completion=False,
)

logger = logging.getLogger("vigil")

EXIT_FAILED = 1
EXIT_ERROR = 2


def _configure_logging(*, verbose: bool, quiet: bool) -> None:
    if quiet:
        logging.basicConfig(level=logging.ERROR)
    elif verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


@app.command()
def scan(
    path: str = typer.Argument(".", help="Path to scan (default: current directory)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="List every finding and enable debug logging"),
    output_json: bool = typer.Option(False, "--json", help="Output raw JSON to stdout (for CI)"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress all output except errors"),
    config_file: Optional[str] = typer.Option(
        None, "--config", help="Path to a config file (default: <path>/.vigil.yaml)"
    ),
    only: Optional[List[str]] = typer.Option(
        None, "--check", help="Run only this check id (repeatable)"
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", min=1, help="Run checks concurrently on N threads"
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Also write the JSON report to this file"
    ),
) -> None:
    """Scan a directory for dangerous shell, filesystem, network and obfuscation idioms.

    Exits 1 when a critical check fails. Warnings never change the exit code.
    """
    _configure_logging(verbose=verbose, quiet=quiet)
    target_dir = Path(path).resolve()

    try:
        config = load_config(target_dir, config_file)
        all_registrations = register(config)
        if only:
            known = {reg.meta.id for reg in all_registrations}
            unknown = sorted(set(only) - known)
            if unknown:
                raise VigilError(f"Unknown check id(s): {', '.join(unknown)}")
        registrations = select_registrations(all_registrations, config, only or ())
        results = run_checks(
            target_dir,
            registrations,
            workers=workers if workers is not None else config.execution.workers,
        )
    except VigilError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=EXIT_ERROR)

    metas = {reg.meta.id: reg.meta for reg in registrations}
    critical_failures = [
        r for r in results if r.status is Status.FAIL and metas[r.id].critical
    ]
    logger.info(
        "Scan of %s finished: %d checks, %d critical failures",
        target_dir,
        len(results),
        len(critical_failures),
    )

    if output:
        try:
            write_report(results, target_dir, Path(output))
        except OSError as e:
            console.print(f"[red]Error: cannot write report to {escape(output)}: {escape(str(e))}[/red]")
            raise typer.Exit(code=EXIT_ERROR)

    if output_json:
        print(to_canonical_json(build_payload(results, target_dir)), end="")
    elif not quiet:
        print_results(results, metas=metas, verbose=verbose)

    if critical_failures:
        raise typer.Exit(code=EXIT_FAILED)


@app.command()
def checks() -> None:
    """List the registered checks."""
    print_checks([reg.meta for reg in register()])


@app.command()
def version() -> None:
    """Show the Vigil version."""
    console.print(f"Vigil v{__version__}")


if __name__ == "__main__":
    app()
