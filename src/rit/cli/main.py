import contextlib
import os
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from rit.cli.options import output_flags, stdin_flag
from rit.core.services.error_codes import ErrorCode, RitError
from rit.core.services.exit_codes import EX_CANTCREAT, exit_code_for_error
from rit.core.services.observability import get_current_run_id
from rit.core.services.output_formatter import format_envelope, format_error_envelope
from rit.core.services.prompt import ClickPrompter
from rit.core.services.rit_paths import RitPaths, RitSettings, get_rit_paths, load_settings
from rit.core.services.stdin_input import read_delete_request
from rit.core.services.tree_generator import TreeGenerator
from rit.core.services.workspace import WorkspaceRegistry
from rit.core.use_cases.delete_formula import DeleteFormulaUseCase
from rit.core.use_cases.list_formulas import ListFormulasUseCase
from rit.core.use_cases.regenerate_tree import RegenerateTreeUseCase
from rit.core.use_cases.resolve_formula import ResolveFormulaUseCase
from rit.core.use_cases.select_workspace import SelectWorkspaceUseCase

MSG_FORMULA_NOT_FOUND = "Could not find formula"
MSG_DELETE_SUCCESS = "✔ Formula successfully deleted!"

console = Console()


def get_console() -> Console:
    """Helper to get the rich console from context if available."""
    ctx = click.get_current_context(silent=True)
    if ctx is not None and isinstance(ctx.obj, dict) and "console" in ctx.obj:
        return ctx.obj["console"]
    return console


def _error_console() -> Console:
    ctx = click.get_current_context(silent=True)
    no_color = bool(ctx is not None and isinstance(ctx.obj, dict) and ctx.obj.get("no_color"))
    return Console(stderr=True, no_color=no_color)


@contextlib.contextmanager
def command_output_handler(
    command_name: str,
    format: str,
    output: Optional[str],
    run_id: str,
    root_path: Optional[Path] = None,
):
    """Centralized error handling and output formatting for CLI commands."""
    root = str(root_path) if root_path else "."
    try:
        yield
    except RitError as e:
        _report_error(command_name, format, output, run_id, root, e.code, e.message, e.details)
        raise SystemExit(exit_code_for_error(e.code))
    except OSError as e:
        details = {"path": str(e.filename)} if e.filename is not None else None
        _report_error(command_name, format, output, run_id, root, ErrorCode.IO_ERROR, str(e), details)
        raise SystemExit(exit_code_for_error(ErrorCode.IO_ERROR))
    except Exception as e:
        safe_msg = "An unexpected internal error occurred."
        _report_error(
            command_name,
            format,
            output,
            run_id,
            root,
            ErrorCode.UNKNOWN_ERROR,
            safe_msg,
            {"internal_error": str(e)} if format == "json" else None,
        )
        # Always log the real error to stderr for operators
        click.echo(f"INTERNAL ERROR: {e}", err=True)
        raise SystemExit(exit_code_for_error(ErrorCode.UNKNOWN_ERROR))


def _report_error(command_name, format, output, run_id, root, code, message, details) -> None:
    if format == "json":
        _write_output(
            format_error_envelope(
                command=command_name,
                root=root,
                run_id=run_id,
                code=code,
                message=message,
                details=details,
            ),
            output,
        )
        return
    _error_console().print(
        f"[bold red][ERROR {code.value}] {message}[/bold red]", highlight=False, soft_wrap=True
    )


def _write_output(output_str: str, output: Optional[str] = None) -> None:
    """Write output to stdout or to a file if requested."""
    if output:
        try:
            with Path(output).open("w", encoding="utf-8") as handle:
                handle.write(output_str + "\n")
            return
        except OSError as exc:
            click.echo(f"Error writing output file '{output}': {exc}", err=True)
            raise SystemExit(EX_CANTCREAT)
    click.echo(output_str)


@contextlib.contextmanager
def maybe_capture(output: Optional[str], format: str):
    """Capture console output if output file is specified and format is text."""
    if format == "text" and output:
        with get_console().capture() as capture:
            yield
        captured_text = capture.get()
        if captured_text.strip():
            _write_output(captured_text.rstrip("\n"), output=output)
    else:
        yield


def _build_prompter() -> ClickPrompter:
    return ClickPrompter(console=_error_console())


def _delete_use_case(paths: RitPaths, settings: RitSettings) -> DeleteFormulaUseCase:
    tree_generator = TreeGenerator(reserved_entries=settings.reserved_entries)
    return DeleteFormulaUseCase(paths, RegenerateTreeUseCase(paths, tree_generator))


@click.group()
@click.version_option(package_name="rit-formulas", prog_name="rit")
@click.option("--no-color", is_flag=True, default=False, help="Disable ANSI colors in text output.")
@click.option("--verbose", is_flag=True, default=False, help="Enable verbose debug logging.")
@click.pass_context
def cli(ctx: click.Context, no_color: bool, verbose: bool):
    """rit formula management CLI"""
    if no_color:
        os.environ["NO_COLOR"] = "1"
    if verbose:
        previous_debug = os.environ.get("RIT_DEBUG")
        os.environ["RIT_DEBUG"] = "1"

        def _restore_debug() -> None:
            if previous_debug is None:
                os.environ.pop("RIT_DEBUG", None)
            else:
                os.environ["RIT_DEBUG"] = previous_debug

        ctx.call_on_close(_restore_debug)

    ctx.ensure_object(dict)
    ctx.obj["console"] = Console(no_color=no_color)
    ctx.obj["no_color"] = no_color


@cli.group()
def delete():
    """Delete formulas."""


@cli.group(name="list")
def list_group():
    """List installed formulas."""


@delete.command(name="formula")
@stdin_flag
@output_flags
def delete_formula(use_stdin, format, output):
    """Delete a formula and the groups it leaves empty.

    The formula is removed from the selected workspace and from the local
    repository, then the local command tree (tree.json) is rebuilt. The two
    removals are not atomic: if the second one fails the first is kept.

    With --stdin, reads {"workspace": "<dir>", "groups": ["docker", "build"]}
    and deletes without asking for confirmation.
    """
    run_id = get_current_run_id()

    with command_output_handler("delete formula", format, output, run_id):
        paths = get_rit_paths()
        settings = load_settings(paths)
        use_case = _delete_use_case(paths, settings)

        if use_stdin:
            request = read_delete_request(click.get_text_stream("stdin"))
            report = use_case.execute(Path(request.workspace).expanduser(), request.groups)
            if format == "json":
                _write_output(_delete_envelope(report, run_id), output)
            return

        prompter = _build_prompter()
        registry = WorkspaceRegistry(paths.workspaces_file)
        workspace = SelectWorkspaceUseCase(paths, registry, prompter).execute()
        workspace_dir = Path(workspace.dir).expanduser()

        resolver = ResolveFormulaUseCase(prompter, reserved_entries=settings.reserved_entries)
        groups = resolver.execute(workspace_dir)
        if not groups:
            raise RitError(
                code=ErrorCode.FORMULA_NOT_FOUND,
                message=MSG_FORMULA_NOT_FOUND,
                details={"workspace": str(workspace_dir)},
            )

        question = f"Are you sure you want to delete the formula: rit {' '.join(groups)}"
        if not prompter.confirm(question, ["no", "yes"]):
            if format == "json":
                _write_output(
                    format_envelope(
                        command="delete formula",
                        root=workspace_dir,
                        data={"deleted": False, "groups": groups},
                        run_id=run_id,
                    ),
                    output,
                )
            return

        report = use_case.execute(workspace_dir, groups)

        if format == "json":
            _write_output(_delete_envelope(report, run_id), output)
            return

        with maybe_capture(output, format):
            get_console().print(f"[bold green]{MSG_DELETE_SUCCESS}[/bold green]", soft_wrap=True)


def _delete_envelope(report, run_id: str) -> str:
    return format_envelope(
        command="delete formula",
        root=report.workspace_dir,
        data={
            "deleted": True,
            "groups": report.groups,
            "command": report.command_line,
            "local_repo": str(report.local_repo_dir),
            "tree_file": str(report.tree_file),
            "command_count": report.command_count,
        },
        run_id=run_id,
    )


@list_group.command(name="formula")
@output_flags
def list_formula(format, output):
    """List the formulas recorded in the local command tree."""
    run_id = get_current_run_id()

    with command_output_handler("list formula", format, output, run_id):
        paths = get_rit_paths()
        entries = ListFormulasUseCase(paths).execute()

        if format == "json":
            _write_output(
                format_envelope(
                    command="list formula",
                    root=paths.local_repo_dir,
                    data={
                        "formulas": [
                            {"command": entry.command_line, "groups": entry.groups, "help": entry.help}
                            for entry in entries
                        ],
                        "count": len(entries),
                    },
                    run_id=run_id,
                ),
                output,
            )
            return

        with maybe_capture(output, format):
            if not entries:
                get_console().print("[yellow]No formulas installed.[/yellow]")
                return
            table = Table(title="Formulas")
            table.add_column("Command", style="cyan", no_wrap=True)
            table.add_column("Description")
            for entry in entries:
                table.add_row(entry.command_line, entry.help)
            get_console().print(table)
            get_console().print(f"There are {len(entries)} formulas")


if __name__ == "__main__":
    cli()
