# runtpl/config/__init__.py
from .settings import RunConfig, LogLevel
from .loader import load_run_config

__all__ = ["RunConfig", "LogLevel", "load_run_config"]
