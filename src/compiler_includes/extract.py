"""Extract the include search path from a compiler's verbose preprocessor output."""

import os
import re
import shlex
import subprocess
import sys
from dataclasses import dataclass, field

# Untranslated diagnostics so the markers below can be found
LOCALE_OVERRIDES = {
    "LC_ALL": "C",
    "LC_MESSAGES": "C",
    "LANG": "C",
    "LANGUAGE": "C",
}

DEFAULT_PROGRAM = "gcc"

START_MARKER = "#include <...> search starts here:"
END_MARKER = "End of search list."

_SEARCH_LIST_PATTERN = re.compile(
    r"^" + re.escape(START_MARKER) + r"[ \t]*\n(.*?)^" + re.escape(END_MARKER) + r"[ \t]*$",
    re.MULTILINE | re.DOTALL,
)
_LEADING_BLANKS = re.compile(r"^[ \t]+", re.MULTILINE)


class SearchListNotFound(RuntimeError):
    """The compiler exited successfully but printed no include search list."""

    def __init__(self, program: str, output: str):
        self.program = program
        self.output = output
        super().__init__(
            f"No include search list found in output of '{program}' "
            f"(expected '{START_MARKER}' ... '{END_MARKER}')"
        )


@dataclass(frozen=True)
class CompilerInvocation:
    """A single preprocessor run that prints the compiler's search path."""

    program: str
    args: tuple[str, ...] = field(
        default_factory=lambda: ("-v", "-E", "--language=c", os.devnull)
    )

    @property
    def command(self) -> list[str]:
        return [self.program, *self.args]

    def describe(self) -> str:
        return shlex.join(self.command)


@dataclass
class CompilerOutput:
    """Combined stdout/stderr of a run that exited with status zero."""

    invocation: CompilerInvocation
    output: str


@dataclass
class LaunchFailure:
    """The compiler could not be started at all."""

    invocation: CompilerInvocation
    message: str


@dataclass
class ExitStatus:
    """The compiler started but exited with a non-zero status."""

    invocation: CompilerInvocation
    returncode: int
    output: str = ""


def locale_environment(
    overrides: dict[str, str] | None = None,
    base: dict[str, str] | None = None,
) -> dict[str, str]:
    """Build the environment for the compiler subprocess.

    The locale variables are pinned to ``C``; ``overrides`` are applied on top.
    The result is always a fresh copy, ``os.environ`` is never modified.

    Args:
        overrides: Extra variables to set in the child environment.
        base: Environment to start from (defaults to ``os.environ``).

    Returns:
        New environment mapping for ``subprocess.run``.
    """
    env = dict(os.environ if base is None else base)
    env.update(LOCALE_OVERRIDES)
    if overrides:
        env.update(overrides)
    return env


def run_compiler(
    program: str,
    env_overrides: dict[str, str] | None = None,
) -> CompilerOutput | LaunchFailure | ExitStatus:
    """Run ``<program> -v -E --language=c <null device>`` and capture its output.

    stderr is merged into stdout since the search list is printed as a
    diagnostic.
    Output is decoded like file names, so paths that are not valid UTF-8
    survive and ``os.fsencode`` gives back the original bytes.

    Args:
        program: Compiler executable name or path.
        env_overrides: Extra environment variables for the compiler only.

    Returns:
        CompilerOutput on a zero exit, otherwise LaunchFailure or ExitStatus.
    """
    invocation = CompilerInvocation(program)
    try:
        result = subprocess.run(
            invocation.command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding=sys.getfilesystemencoding(),
            errors="surrogateescape",
            env=locale_environment(env_overrides),
        )
    except (OSError, ValueError) as e:
        # ValueError: unusable program name, e.g. an embedded NUL
        reason = getattr(e, "strerror", None) or e
        return LaunchFailure(invocation, f"{invocation.describe()}: {reason}")

    if result.returncode != 0:
        return ExitStatus(invocation, result.returncode, result.stdout or "")
    return CompilerOutput(invocation, result.stdout or "")


def parse_search_list(output: str, program: str = "compiler") -> list[str]:
    """Parse the ``#include <...>`` search list from compiler output.

    Example block (as printed by gcc -v -E):

        #include <...> search starts here:
         /usr/lib/gcc/x86_64-linux-gnu/13/include
         /usr/local/include
         /usr/include
        End of search list.

    Leading blanks are removed from each line, nothing else is changed. Order
    and duplicates are kept as printed.

    Args:
        output: Captured compiler output.
        program: Compiler name, used in the error message.

    Returns:
        Directories in search order.

    Raises:
        SearchListNotFound: If the start or end marker is missing.
    """
    match = _SEARCH_LIST_PATTERN.search(output)
    if not match:
        raise SearchListNotFound(program, output)

    block = _LEADING_BLANKS.sub("", match.group(1))
    if not block:
        return []
    paths = block.split("\n")
    # The block ends with the newline before the end marker
    if paths[-1] == "":
        paths.pop()
    return paths


def extract_include_paths(
    program: str = DEFAULT_PROGRAM,
    env_overrides: dict[str, str] | None = None,
) -> list[str] | LaunchFailure | ExitStatus:
    """Get the include search path of ``program``.

    Args:
        program: Compiler executable name or path.
        env_overrides: Extra environment variables for the compiler only.

    Returns:
        The directory list, or the LaunchFailure/ExitStatus describing why the
        compiler could not be queried.

    Raises:
        SearchListNotFound: If the compiler succeeded but printed no search list.
    """
    result = run_compiler(program, env_overrides)
    if not isinstance(result, CompilerOutput):
        return result
    return parse_search_list(result.output, program)
