# runtpl/core/interactive.py
"""
Interactive data entry: the variables a template uses are written as a JSON
scaffold to a temporary file, the user fills it in with an editor, and the
result becomes the render context.
"""
import json
import os
import tempfile
from pathlib import Path
from typing import Optional
import click
import structlog

from runtpl.core.context import Context
from runtpl.core.editor import edit_file
from runtpl.core.templating import build_scaffold_document, extract_variables
from runtpl.exceptions import InteractiveAbort

log = structlog.get_logger(__name__)


def run_interactive(template_text: str, editor: Optional[str] = None) -> Context:
    click.echo("Interactive mode activated. Analyzing template...", err=True)
    variables = extract_variables(template_text)

    if not variables:
        click.echo("No variables found in the template. Nothing to fill.", err=True)
        return Context()

    click.echo("Please fill in the following variables in the editor:", err=True)
    for name in variables:
        click.echo(f"- {name}", err=True)

    initial_json = json.dumps(build_scaffold_document(variables), indent=2, ensure_ascii=False)

    fd, tmp_name = tempfile.mkstemp(prefix="template-vars-", suffix=".json")
    scaffold_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as scaffold_file:
            scaffold_file.write(initial_json)

        click.echo(f"\nOpening editor: {scaffold_path}", err=True)
        edit_file(scaffold_path, editor)
        user_data = scaffold_path.read_text(encoding="utf-8")
    finally:
        scaffold_path.unlink(missing_ok=True)

    if initial_json.replace("\r\n", "\n") == user_data.replace("\r\n", "\n"):
        log.info("interactive_scaffold_unchanged")
        raise InteractiveAbort("No changes detected. Aborting.")

    click.echo("Editor closed. Reading data...", err=True)
    return Context.from_json_document(user_data)
