# runtpl/core/functions/files.py
"""
Builtin `files`: lists files under one or more paths together with their text.

    {{foreach f in files(source: "./src", recursive: false, exclude_names: ["lock.json"])}}
    {{f.path}}
    {{f.content}}
    {{endfor}}
"""
import os
from pathlib import Path
from typing import Any, Dict, Iterator, List
import structlog

from runtpl.exceptions import FunctionError

log = structlog.get_logger(__name__)

SOURCE_ARGUMENT_HELP = (
    "'files' function requires a 'source' argument. It must be a comma-separated string "
    "(e.g., \"./src\") or an array of strings (e.g., [\"./src\", \"./tests\"])"
)


def _source_paths(args: Dict[str, Any]) -> List[str]:
    source = args.get("source")
    if isinstance(source, list):
        return [p for p in source if isinstance(p, str)]
    if isinstance(source, str):
        return [p.strip() for p in source.split(",") if p.strip()]
    raise FunctionError(SOURCE_ARGUMENT_HELP)


def _recursive_flag(args: Dict[str, Any]) -> bool:
    if "recursive" not in args:
        return True
    recursive = args["recursive"]
    if not isinstance(recursive, bool):
        raise FunctionError("'recursive' argument must be a boolean (true or false)")
    return recursive


def _string_list(args: Dict[str, Any], key: str) -> List[str]:
    if key not in args:
        return []
    value = args[key]
    if not isinstance(value, list):
        raise FunctionError(f"'{key}' argument must be an array of strings")
    return [v for v in value if isinstance(v, str)]


def _walk_source(source: str, recursive: bool) -> Iterator[str]:
    # yields file paths below `source`, a file source yields itself.
    if not os.path.lexists(source):
        log.warning("files_source_path_skipped", path=source, error="no such file or directory")
        return
    if not os.path.isdir(source):
        yield source
        return

    def on_walk_error(error: OSError):
        log.warning("files_path_walk_error", path=error.filename, error=str(error))

    for root, dirs, file_names in os.walk(source, onerror=on_walk_error):
        if recursive:
            dirs.sort()
        else:
            dirs[:] = []
        for file_name in sorted(file_names):
            yield os.path.join(root, file_name)


def files(args: Dict[str, Any]) -> List[Dict[str, str]]:
    """Returns `{name, path, absolute_path, content}` for every matching file.

    `path` is the traversed path (the source joined with the entry), so it is
    relative whenever the source is. Unreadable entries are logged and left out.
    """
    source_paths = _source_paths(args)
    recursive = _recursive_flag(args)
    exclude_names = _string_list(args, "exclude_names")
    exclude_paths = _string_list(args, "exclude_paths")

    log.debug("files_function_called", sources=source_paths, recursive=recursive,
              exclude_names=exclude_names, exclude_paths=exclude_paths)

    result_files: List[Dict[str, str]] = []
    for source in source_paths:
        for file_path in _walk_source(source, recursive):
            file_name = os.path.basename(file_path)
            if file_name in exclude_names:
                continue
            if any(fragment in file_path for fragment in exclude_paths):
                continue

            try:
                absolute_path = Path(file_path).resolve(strict=True)
            except OSError as e:
                log.warning("files_absolute_path_unavailable", path=file_path, error=str(e))
                continue

            try:
                content = Path(file_path).read_bytes().decode("utf-8")
            except (OSError, UnicodeDecodeError) as e:
                log.warning("files_read_error", path=file_path, error=str(e))
                continue

            result_files.append({
                "name": file_name,
                "path": file_path,
                "absolute_path": str(absolute_path),
                "content": content,
            })

    log.info("files_function_complete", count=len(result_files))
    return result_files
