# runtpl/cli/interface.py
import functools
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Tuple

import click
from click_option_group import optgroup
import structlog

from runtpl import __version__ as app_version
from runtpl.config.loader import load_run_config
from runtpl.config.settings import LogLevel, RunConfig
from runtpl.core.context import Context
from runtpl.core.functions import FunctionRegistry
from runtpl.core.interactive import run_interactive
from runtpl.core.output import copy_to_clipboard, write_to_file, write_to_stdout
from runtpl.core.template_store import TemplateStore
from runtpl.core.templating import TemplateEngine, build_scaffold_document, extract_variables
from runtpl.exceptions import InteractiveAbort, RuntplError
from runtpl.logging_setup import configure_logging, level_for_verbosity

from .console_output import print_variable_tree

log = structlog.get_logger(__name__)


@dataclass
class CliState:
    # objects built once per invocation and shared by the subcommands.
    config: RunConfig
    store: TemplateStore
    engine: TemplateEngine


def handle_app_errors(command: Callable[..., Any]) -> Callable[..., Any]:
    """Turns application errors into a red message on stderr and exit code 1."""
    @functools.wraps(command)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return command(*args, **kwargs)
        except InteractiveAbort as e:
            log.info("interactive_mode_aborted", message=str(e))
            click.echo(str(e), err=True)
            sys.exit(0)
        except RuntplError as e:
            log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
            click.secho(f"Error: {e}", fg="red", err=True)
            sys.exit(1)
        except (click.exceptions.Exit, click.ClickException, click.Abort):
            raise
        except Exception as e:
            log.critical("unexpected_critical_error_in_cli", message=str(e), exc_info=True)
            click.secho(f"Unexpected critical error: {e}. Please report this.", fg="red", err=True)
            sys.exit(1)
    return wrapper


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@click.version_option(version=app_version, package_name="runtpl", prog_name="runtpl", help="Show version and exit.")
@click.pass_context
@handle_app_errors
def main_cli_group(ctx: click.Context, verbosity_level: int):
    """runtpl: render text templates with loops and placeholders from
    command-line data, files, stdin or an interactive editor session."""
    configure_logging(level_for_verbosity(verbosity_level))

    config = load_run_config()
    if verbosity_level == 0 and config.log_level is not LogLevel.WARNING:
        configure_logging(config.log_level)
    log.debug("cli_command_invoked", subcommand=ctx.invoked_subcommand, config=str(config))

    ctx.obj = CliState(
        config=config,
        store=TemplateStore(config.template_dir, config.template_extension),
        engine=TemplateEngine(FunctionRegistry.default()),
    )


@main_cli_group.command("run")
@click.argument("template_name")
@click.argument("data_args", nargs=-1)
@optgroup.group("Data Input Options", help="Where the template's data comes from.")
@optgroup.option("-i", "--interactive", "interactive", is_flag=True, default=False, help="Fill the template's variables in an editor.")
@optgroup.group("Output Options", help="Where the rendered text goes besides stdout.")
@optgroup.option("-n", "--no-copy", "no_copy", is_flag=True, default=False, help="Do not copy the output to the clipboard.")
@optgroup.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, writable=True, path_type=Path), default=None, help="Also write the output to this file.")
@click.pass_obj
@handle_app_errors
def run_command(state: CliState, template_name: str, data_args: Tuple[str, ...], interactive: bool,
                no_copy: bool, output_file: Optional[Path]):
    """Render TEMPLATE_NAME with DATA_ARGS in `key=value`, `key@=filepath`
    or `key@-` format."""
    template_text = state.store.read(template_name)
    log.info("template_loaded", name=template_name, length=len(template_text))

    if interactive:
        if data_args:
            raise click.UsageError("Cannot use data arguments with --interactive mode.")
        context = run_interactive(template_text, editor=state.config.editor)
    else:
        context = Context.from_args(data_args)

    rendered = state.engine.render(template_text, context)
    write_to_stdout(rendered)

    if output_file:
        write_to_file(output_file, rendered)
        click.echo(f"Info: Output written to: {output_file}", err=True)
    if not no_copy and state.config.copy_to_clipboard:
        copy_to_clipboard(rendered)


@main_cli_group.command("vars")
@click.argument("template_name")
@click.option("--scaffold", "scaffold", is_flag=True, default=False, help="Print the JSON scaffold used by --interactive.")
@click.pass_obj
@handle_app_errors
def vars_command(state: CliState, template_name: str, scaffold: bool):
    """Show the variables TEMPLATE_NAME expects."""
    template_text = state.store.read(template_name)
    variables = extract_variables(template_text)
    if scaffold:
        write_to_stdout(json.dumps(build_scaffold_document(variables), indent=2, ensure_ascii=False) + "\n")
        return
    if not variables:
        click.echo("No variables found in the template.")
        return
    print_variable_tree(template_name, variables)


@main_cli_group.group("template")
def template_group():
    """Manage stored templates."""


@template_group.command("list")
@click.pass_obj
@handle_app_errors
def list_templates(state: CliState):
    """List available templates."""
    click.echo(f"Available templates in {state.store.template_dir}:")
    names = state.store.list_names()
    if not names:
        click.echo("  (No templates found. Use 'runtpl template new <name>' to create one.)")
        return
    for name in names:
        click.echo(f"- {name}")


@template_group.command("new")
@click.argument("name")
@click.pass_obj
@handle_app_errors
def new_template(state: CliState, name: str):
    """Create a new template file and open it in the editor."""
    click.echo(f"Opening editor for new template: {state.store.path_for(name)}")
    if state.store.create(name, editor=state.config.editor):
        click.echo(f"Template '{name}' created successfully.")
    else:
        click.echo("Empty template discarded. Creation cancelled.")


@template_group.command("edit")
@click.argument("name")
@click.pass_obj
@handle_app_errors
def edit_template(state: CliState, name: str):
    """Edit an existing template."""
    path = state.store.edit(name, editor=state.config.editor)
    click.echo(f"Template '{name}' saved ({path}).")


@template_group.command("remove")
@click.argument("name")
@click.option("-y", "--yes", "assume_yes", is_flag=True, default=False, help="Do not ask for confirmation.")
@click.pass_obj
@handle_app_errors
def remove_template(state: CliState, name: str, assume_yes: bool):
    """Remove a stored template."""
    path = state.store.path_for(name)
    if path.is_file() and not assume_yes:
        if not click.confirm(f"Are you sure you want to delete the template '{name}' from {path}?", default=False):
            click.echo("Removal cancelled.")
            return
    state.store.remove(name)
    click.echo(f"Template '{name}' removed successfully.")
