"""Derive a C compiler's built-in include search path."""

from .config import SearchPathConfig, load_config
from .extract import (
    CompilerInvocation,
    CompilerOutput,
    ExitStatus,
    LaunchFailure,
    SearchListNotFound,
    extract_include_paths,
    parse_search_list,
    run_compiler,
)
from .refresh import describe_failure, refresh_include_paths

__all__ = [
    "CompilerInvocation",
    "CompilerOutput",
    "ExitStatus",
    "LaunchFailure",
    "SearchListNotFound",
    "SearchPathConfig",
    "describe_failure",
    "extract_include_paths",
    "load_config",
    "parse_search_list",
    "refresh_include_paths",
    "run_compiler",
]
