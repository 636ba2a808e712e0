from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional
import structlog

log = structlog.get_logger(__name__)

APP_CONFIG_DIR = Path.home() / ".config" / "runtpl"
DEFAULT_TEMPLATE_DIR = APP_CONFIG_DIR / "templates"
DEFAULT_TEMPLATE_EXTENSION = "tpl"

class LogLevel(Enum):
    # log levels accepted in configuration files.
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def from_string(cls, s: Optional[str]) -> "LogLevel":
        if not s:
            return cls.WARNING
        try:
            return cls(s.lower())
        except ValueError:
            log.warning("invalid_log_level_string", input_string=s)
            return cls.WARNING

@dataclass
class RunConfig:
    # settings shared by every command, merged from user and project toml files.
    template_dir: Path = field(default_factory=lambda: DEFAULT_TEMPLATE_DIR)
    template_extension: str = DEFAULT_TEMPLATE_EXTENSION
    copy_to_clipboard: bool = True
    editor: Optional[str] = None
    log_level: LogLevel = LogLevel.WARNING
