# Copyright 2026 Pennyworth Technologies, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""ACMOJ pre-submit CLI - run and inspect pre-submit hooks."""

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from acmoj_presubmit import __version__
from acmoj_presubmit.config import (
    ConfigLoadError,
    ConfigValidationError,
    display_name,
    generate_config_template_string,
    get_pre_submit_path,
    load_hook_list,
)
from acmoj_presubmit.constants import (
    ENV_LOG_LEVEL,
    ENV_OUTPUT_FORMAT,
    ENV_PROJECT_ROOT,
    PRE_SUBMIT_RELATIVE_PATH,
)
from acmoj_presubmit.document import FileDocument
from acmoj_presubmit.home import find_project_root
from acmoj_presubmit.hooks.actions import BUILTIN_ACTIONS
from acmoj_presubmit.hooks.pipeline import HookFailedError, run_pre_submit_hooks
from acmoj_presubmit.hooks.substitution import validate_variables
from acmoj_presubmit.notify import ConsoleNotifier

# stdout carries the content to submit; everything else goes to stderr.
console = Console(stderr=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _hook_fields(step) -> str:
    return getattr(step, "content", None) or getattr(step, "path", None) or getattr(step, "name", "")


def _resolve_root(ctx: click.Context, start: Path) -> Path | None:
    return find_project_root(start, override=ctx.obj.get("project_root"))


def _echo_failure(error: str, failed_hook: str | None = None, step_index: int | None = None) -> None:
    """Print a failed run as JSON; there is no content to submit."""
    click.echo(json.dumps({
        "content": None,
        "output_used": False,
        "error": error,
        "failed_hook": failed_hook,
        "step_index": step_index,
        "steps": [],
    }))


@click.group()
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option(
    "--project-root",
    envvar=ENV_PROJECT_ROOT,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory containing .acmoj/ (auto-detected if not set)",
)
@click.option(
    "--format", "-f", "output_format",
    type=click.Choice(["json", "text"]),
    default="text",
    envvar=ENV_OUTPUT_FORMAT,
    help="Output format: text (default) or json",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar=ENV_LOG_LEVEL,
    help="Logging level (default: WARNING)",
)
@click.pass_context
def main(
    ctx: click.Context,
    quiet: bool,
    project_root: Path | None,
    output_format: str,
    log_level: str,
) -> None:
    """ACMOJ pre-submit hooks.

    Run the hooks in .acmoj/pre-submit.json before submitting a solution.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["project_root"] = project_root
    ctx.obj["output_format"] = output_format


@main.command()
def version() -> None:
    """Show version."""
    click.echo(f"acmoj-presubmit {__version__}")


@main.command("run")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the content to submit to this file instead of stdout",
)
@click.option("--verbose", "-v", is_flag=True, help="Print the hook run log while running")
@click.pass_context
def run_hooks(ctx: click.Context, file: Path, output: Path | None, verbose: bool) -> None:
    """Run pre-submit hooks for FILE and print the content to submit."""
    quiet = ctx.obj["quiet"]
    output_format = ctx.obj["output_format"]

    document = FileDocument(file)
    project_root = _resolve_root(ctx, document.get_path())
    notifier = ConsoleNotifier(console=console, verbose=verbose, quiet=quiet)

    try:
        result = run_pre_submit_hooks(document, project_root=project_root, notifier=notifier)
    except HookFailedError as e:
        if output_format == "json":
            _echo_failure(str(e), failed_hook=e.display_name, step_index=e.step_index)
        else:
            console.print(
                f"[red]Error:[/red] A critical pre-submit hook failed: {escape(str(e))}. "
                "Submission aborted."
            )
        raise SystemExit(1)
    except (OSError, UnicodeDecodeError) as e:
        message = f"Cannot read {file} as {document.encoding}: {e}"
        if output_format == "json":
            _echo_failure(message)
        else:
            console.print(f"[red]Error:[/red] {escape(message)}. Submission aborted.")
        raise SystemExit(1)

    if output_format == "json":
        click.echo(result.to_json())
        if result.error:
            raise SystemExit(1)
        return

    if result.error:
        console.print(
            f"[red]Error:[/red] Pre-submit hooks problem: {escape(result.error)}. "
            "Submission aborted."
        )
        raise SystemExit(1)

    if output:
        output.write_text(result.content, encoding="utf-8")
    else:
        click.echo(result.content, nl=False)

    if not quiet:
        source = "output of 'submit' hooks" if result.output_used else "file content"
        console.print(
            f"[green]OK:[/green] {len(result.steps)} hook(s) ran; submitting {source}"
        )


@main.command()
@click.option("--strict", is_flag=True, help="Fail on unknown fields in hook objects")
@click.pass_context
def check(ctx: click.Context, strict: bool) -> None:
    """Validate .acmoj/pre-submit.json and list its hooks."""
    output_format = ctx.obj["output_format"]
    project_root = _resolve_root(ctx, Path.cwd())
    if project_root is None:
        console.print("[red]Error:[/red] Cannot determine project root.")
        raise SystemExit(1)

    try:
        hooks = load_hook_list(project_root, strict=strict)
    except (ConfigLoadError, ConfigValidationError) as e:
        if output_format == "json":
            click.echo(json.dumps({"valid": False, "error": str(e), "hooks": []}))
        else:
            console.print(f"[red]Error:[/red] Error in {PRE_SUBMIT_RELATIVE_PATH}: {escape(str(e))}")
        raise SystemExit(1)

    rows = []
    for i, step in enumerate(hooks):
        rows.append({
            "index": i + 1,
            "type": step.type,
            "name": display_name(step, i),
            "output": getattr(step, "output", None) and step.output.value,
            "unknown_variables": validate_variables(_hook_fields(step)),
        })

    if output_format == "json":
        click.echo(json.dumps({"valid": True, "error": None, "hooks": rows}))
        return

    if not hooks:
        console.print(f"[dim]No hooks configured in {get_pre_submit_path(project_root)}[/dim]")
        return

    table = Table(title="Pre-submit Hooks")
    table.add_column("#", style="dim")
    table.add_column("Type", style="cyan")
    table.add_column("Name")
    table.add_column("Output")
    table.add_column("Unknown Variables", style="yellow")
    for row in rows:
        table.add_row(
            str(row["index"]),
            row["type"],
            escape(row["name"]),
            row["output"] or "-",
            ", ".join(row["unknown_variables"]),
        )
    console.print(table)
    console.print(f"[green]OK:[/green] {len(hooks)} hook(s) valid")


@main.command()
@click.option("--force", is_flag=True, help="Overwrite an existing hook file")
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Create an example .acmoj/pre-submit.json in the project root."""
    project_root = ctx.obj.get("project_root") or find_project_root(Path.cwd()) or Path.cwd()
    path = get_pre_submit_path(Path(project_root))

    if path.exists() and not force:
        console.print(f"[red]Error:[/red] {path} already exists (use --force to overwrite)")
        raise SystemExit(1)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_config_template_string(), encoding="utf-8")
    console.print(f"[green]Created[/green] {path}")


@main.command()
def actions() -> None:
    """List built-in editor actions."""
    for name in sorted(BUILTIN_ACTIONS):
        click.echo(name)


if __name__ == "__main__":
    main()
