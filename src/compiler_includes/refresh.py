"""Install a compiler's include search path into a SearchPathConfig."""

import sys
from collections.abc import Callable

from .config import SearchPathConfig
from .extract import ExitStatus, LaunchFailure, extract_include_paths


def _print_warning(message: str) -> None:
    print(f"Warning: {message}", file=sys.stderr)


def describe_failure(failure: LaunchFailure | ExitStatus) -> str:
    """Human-readable description of a failed compiler query."""
    if isinstance(failure, LaunchFailure):
        return f"Could not run compiler: {failure.message}"
    message = (
        f"Compiler exited with status {failure.returncode}: "
        f"{failure.invocation.describe()}"
    )
    last_line = failure.output.strip().splitlines()[-1:] if failure.output else []
    if last_line:
        message += f" ({last_line[0]})"
    return message


def refresh_include_paths(
    config: SearchPathConfig,
    notify: Callable[[str], None] | None = None,
) -> list[str]:
    """Recompute ``config.include_paths`` from ``config.program``.

    If the compiler cannot be started or exits non-zero, ``notify`` is called
    with a description and the config is left as it was. Safe to call
    repeatedly; each call runs the compiler once.

    Args:
        config: Configuration to update in place.
        notify: Callback for non-fatal messages (default: warning on stderr).

    Returns:
        The include path list now in effect.

    Raises:
        SearchListNotFound: If the compiler succeeded but its output has no
            search list. The config is not modified.
    """
    if notify is None:
        notify = _print_warning

    result = extract_include_paths(config.program, config.env)
    if isinstance(result, (LaunchFailure, ExitStatus)):
        notify(describe_failure(result))
        return list(config.include_paths)

    config.include_paths = result
    return list(result)
