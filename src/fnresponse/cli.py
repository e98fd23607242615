"""
Click-based CLI for inspecting and preparing RunFunction responses.
"""

import json
import sys
from datetime import timedelta
from pathlib import Path
from typing import NoReturn, Optional, Tuple

import click
from pydantic import ValidationError as SchemaValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .domain.errors import FunctionResponseError
from .models import Severity
from .resource import GroupVersionKind
from .response import (
    DEFAULT_TTL,
    request_extra_resource_by_labels,
    request_extra_resource_by_name,
    to,
)
from .storage import read_request, read_response, write_response

console = Console()
err_console = Console(stderr=True)

_SEVERITY_STYLES = {
    Severity.SEVERITY_FATAL: "red",
    Severity.SEVERITY_WARNING: "yellow",
    Severity.SEVERITY_NORMAL: "green",
}


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]✗ Error:[/red] {escape(message)}")
    sys.exit(1)


def _parse_labels(labels: Tuple[str, ...]) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for label in labels:
        key, sep, value = label.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {label!r}", param_hint="--label")
        parsed[key] = value
    return parsed


@click.group()
@click.version_option(version=__version__, prog_name="fnresponse")
def cli() -> None:
    """Build and inspect RunFunction responses"""
    pass


@cli.command()
@click.argument("request_file", type=click.Path(path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output file path (default: stdout)",
)
@click.option(
    "--ttl",
    type=float,
    default=DEFAULT_TTL.total_seconds(),
    show_default=True,
    envvar="FNRESPONSE_TTL",
    help="Seconds the response may be cached",
)
def init(request_file: Path, output: Optional[Path], ttl: float) -> None:
    """Bootstrap a response from a request file"""

    try:
        req = read_request(request_file)
        rsp = to(req, timedelta(seconds=ttl))

        if output:
            write_response(output, rsp)
            console.print(f"[green]✓[/green] Response written to {escape(str(output))}")
        else:
            console.print_json(json.dumps(rsp.to_json_dict()))

    except FileNotFoundError as e:
        _fail(str(e))
    except SchemaValidationError as e:
        _fail(f"invalid request: {e}")
    except (OSError, ValueError, OverflowError) as e:
        _fail(str(e))


@cli.command()
@click.argument("response_file", type=click.Path(path_type=Path))
def results(response_file: Path) -> None:
    """Show the results recorded in a response, in order"""

    try:
        rsp = read_response(response_file)
    except FileNotFoundError as e:
        _fail(str(e))
    except SchemaValidationError as e:
        _fail(f"invalid response: {e}")
    except (OSError, ValueError) as e:
        _fail(str(e))

    if not rsp.results:
        console.print("[yellow]No results[/yellow]")
        return

    table = Table(title=f"Results ({len(rsp.results)})")
    table.add_column("#", justify="right")
    table.add_column("Severity")
    table.add_column("Message")
    for i, result in enumerate(rsp.results, start=1):
        style = _SEVERITY_STYLES.get(result.severity, "")
        label = result.severity.value.removeprefix("SEVERITY_")
        if style:
            label = f"[{style}]{label}[/{style}]"
        table.add_row(str(i), label, escape(result.message))
    console.print(table)

    if any(r.severity == Severity.SEVERITY_FATAL for r in rsp.results):
        sys.exit(1)


@cli.command()
@click.argument("response_file", type=click.Path(path_type=Path))
@click.option("--id", "request_id", required=True, help="Requirement ID")
@click.option("--api-version", required=True, help="API version, e.g. example.org/v1")
@click.option("--kind", required=True, help="Resource kind")
@click.option("--name", help="Match a single resource by name")
@click.option("--label", "labels", multiple=True, help="Match by label (KEY=VALUE, repeatable)")
def require(
    response_file: Path,
    request_id: str,
    api_version: str,
    kind: str,
    name: Optional[str],
    labels: Tuple[str, ...],
) -> None:
    """Register an extra resource requirement in a response file"""

    if name is not None and labels:
        _fail("use either --name or --label, not both")

    gvk = GroupVersionKind.from_api_version(api_version, kind)
    label_set = _parse_labels(labels)

    try:
        rsp = read_response(response_file)
        if name is not None:
            request_extra_resource_by_name(rsp, request_id, name, gvk)
        else:
            request_extra_resource_by_labels(rsp, request_id, label_set, gvk)
        write_response(response_file, rsp)
    except FileNotFoundError as e:
        _fail(str(e))
    except FunctionResponseError as e:
        _fail(str(e))
    except SchemaValidationError as e:
        _fail(f"invalid response: {e}")
    except (OSError, ValueError) as e:
        _fail(str(e))

    console.print(f"[green]✓[/green] Requirement [cyan]{escape(request_id)}[/cyan] recorded")


def main() -> None:
    """Main entry point"""
    cli()


if __name__ == "__main__":
    main()
