# runtpl/core/template_store.py
"""
Named templates kept in a central directory, next to plain template files
referenced by path.
"""
from pathlib import Path
from typing import List, Optional
import structlog

from runtpl.exceptions import TemplateError, TemplateExistsError, TemplateNotFoundError
from .editor import edit_file

log = structlog.get_logger(__name__)

DEFAULT_TEMPLATE_EXTENSION = "tpl"


class TemplateStore:
    def __init__(self, template_dir: Path, extension: str = DEFAULT_TEMPLATE_EXTENSION):
        self._template_dir = template_dir
        self.extension = extension.lstrip(".")

    @property
    def template_dir(self) -> Path:
        # created on first use.
        if not self._template_dir.is_dir():
            log.info("creating_template_dir", path=str(self._template_dir))
            self._template_dir.mkdir(parents=True, exist_ok=True)
        return self._template_dir

    def path_for(self, name: str) -> Path:
        return self.template_dir / f"{name}.{self.extension}"

    def resolve(self, name: str) -> Path:
        """A local file called `name` wins over a stored template of that name."""
        local_path = Path(name)
        if local_path.is_file():
            log.debug("template_resolved_locally", path=str(local_path))
            return local_path

        stored_path = self.path_for(name)
        if stored_path.is_file():
            log.debug("template_resolved_from_store", path=str(stored_path))
            return stored_path

        raise TemplateNotFoundError(
            f"Template '{name}' not found locally or in the global template directory ({self.template_dir})."
        )

    def read(self, name: str) -> str:
        path = self.resolve(name)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateError(f"Could not read template '{path}': {e}") from e

    def list_names(self) -> List[str]:
        return sorted(path.stem for path in self.template_dir.iterdir() if path.is_file())

    def create(self, name: str, editor: Optional[str] = None) -> bool:
        """Creates and edits a new template; returns False if it was left empty and discarded."""
        path = self.path_for(name)
        if path.exists():
            raise TemplateExistsError(f"Template '{name}' already exists. Use 'runtpl template edit {name}' to edit it.")

        path.touch()
        edit_file(path, editor)

        if path.stat().st_size == 0:
            path.unlink()
            log.info("empty_template_discarded", name=name)
            return False
        log.info("template_created", name=name, path=str(path))
        return True

    def edit(self, name: str, editor: Optional[str] = None) -> Path:
        path = self._existing_path(name, f"Use 'runtpl template new {name}' to create it.")
        edit_file(path, editor)
        log.info("template_edited", name=name)
        return path

    def remove(self, name: str) -> Path:
        path = self._existing_path(name, "Use 'runtpl template list' to see available templates.")
        path.unlink()
        log.info("template_removed", name=name, path=str(path))
        return path

    def _existing_path(self, name: str, hint: str) -> Path:
        path = self.path_for(name)
        if not path.is_file():
            raise TemplateNotFoundError(f"Template '{name}' not found. {hint}")
        return path
