# runtpl/config/loader.py
"""
Handles loading and merging of configuration from TOML files.

The user file (~/.config/runtpl/config.toml) is read first; the first
project file found in the working directory is layered on top of it.
"""
import toml
from pathlib import Path
from typing import Any, Dict, Optional
import structlog

from runtpl.exceptions import ConfigError

from .settings import APP_CONFIG_DIR, LogLevel, RunConfig

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".runtpl.toml", "runtpl.toml", "pyproject.toml"]
USER_CONFIG_FILE = APP_CONFIG_DIR / "config.toml"

CONFIG_KEY_TO_RUNCONFIG_ATTR_MAP: Dict[str, str] = {
    "template_dir": "template_dir",
    "template_extension": "template_extension",
    "copy_to_clipboard": "copy_to_clipboard",
    "clipboard": "copy_to_clipboard",
    "editor": "editor",
    "log_level": "log_level",
}

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file():
        return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except (toml.TomlDecodeError, OSError) as e:
        log.error("config_file_load_error", path=str(file_path), error=str(e))
        return {}
    if file_path.name == "pyproject.toml":
        return data.get("tool", {}).get("runtpl", {})
    return data

def load_and_merge_configs(cwd: Optional[Path] = None) -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    if USER_CONFIG_FILE.is_file():
        log.info("loading_user_global_config", path=str(USER_CONFIG_FILE))
        merged.update(_load_toml_file_data(USER_CONFIG_FILE))

    project_dir = cwd or Path.cwd()
    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = project_dir / filename
        if candidate.is_file():
            project_settings = _load_toml_file_data(candidate)
            if project_settings:
                log.info("loading_project_local_config", path=str(candidate))
                merged.update(project_settings)
                break

    if not merged:
        log.debug("no_configuration_files_loaded")
    return merged

def _expect(key: str, value: Any, expected_type: type, type_name: str) -> Any:
    if not isinstance(value, expected_type):
        raise ConfigError(f"config key '{key}' must be {type_name}, got {type(value).__name__}")
    return value

def build_run_config(raw_config: Dict[str, Any]) -> RunConfig:
    options: Dict[str, Any] = {}
    for key, value in raw_config.items():
        attr = CONFIG_KEY_TO_RUNCONFIG_ATTR_MAP.get(key)
        if attr is None:
            log.warning("unknown_config_key_ignored", key=key)
            continue
        if attr == "template_dir":
            options[attr] = Path(_expect(key, value, str, "a string")).expanduser()
        elif attr == "copy_to_clipboard":
            options[attr] = _expect(key, value, bool, "a boolean")
        elif attr == "log_level":
            options[attr] = LogLevel.from_string(_expect(key, value, str, "a string"))
        else:
            options[attr] = _expect(key, value, str, "a string")
    return RunConfig(**options)

def load_run_config(cwd: Optional[Path] = None) -> RunConfig:
    return build_run_config(load_and_merge_configs(cwd))
