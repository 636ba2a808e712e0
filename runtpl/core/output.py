# runtpl/core/output.py
import sys
from pathlib import Path
import click
import pyperclip  # type: ignore
import structlog
from runtpl.exceptions import OutputError

log = structlog.get_logger(__name__)

def write_to_stdout(text_content: str):
    # writes the rendered text verbatim to standard output.
    try:
        sys.stdout.write(text_content)
        sys.stdout.flush()
    except UnicodeEncodeError as e:
        log.warning("stdout_write_failed_trying_binary_fallback", error=str(e))
        try:
            sys.stdout.buffer.write(text_content.encode("utf-8", errors="replace"))
            sys.stdout.buffer.flush()
        except OSError as inner_e:
            raise OutputError(f"failed to write to stdout: {inner_e}") from inner_e
    except OSError as e:
        raise OutputError(f"failed to write to stdout: {e}") from e

def write_to_file(output_file_path: Path, text_content: str):
    # writes text content to the specified file path.
    log.info("writing_output_to_file", path=str(output_file_path))
    try:
        output_file_path.write_text(text_content, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"failed to write to file '{output_file_path}': {e}") from e

def copy_to_clipboard(text_content: str) -> bool:
    """
    copies text to the system clipboard with pyperclip.
    reports the outcome on stderr and never raises; returns true on success.
    """
    log.info("attempting_to_copy_output_to_clipboard")
    try:
        pyperclip.copy(text_content)
    except pyperclip.PyperclipException as e:
        log.warning("clipboard_copy_failed", error=str(e))
        click.echo(f"\n\nWarning: Could not copy to clipboard: {e}", err=True)
        return False
    log.info("copied_to_clipboard")
    click.echo("\n\n(Result copied to clipboard)", err=True)
    return True
