# runtpl/core/editor.py
from pathlib import Path
from typing import Optional
import click
import structlog

from runtpl.exceptions import EditorError

log = structlog.get_logger(__name__)

def edit_file(path: Path, editor: Optional[str] = None) -> None:
    # opens `path` in the configured editor ($VISUAL / $EDITOR when None) and waits for it to exit.
    log.info("opening_editor", path=str(path), editor=editor)
    try:
        click.edit(filename=str(path), editor=editor)
    except click.ClickException as e:
        raise EditorError(e.format_message()) from e
