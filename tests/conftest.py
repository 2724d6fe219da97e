"""Pytest fixtures for compiler-includes tests."""

import shlex
import stat
import sys
from pathlib import Path

import pytest

GCC_OUTPUT = """\
Using built-in specs.
COLLECT_GCC=gcc
Target: x86_64-linux-gnu
gcc version 13.2.0 (Ubuntu 13.2.0-23ubuntu4)
ignoring nonexistent directory "/usr/local/include/x86_64-linux-gnu"
#include "..." search starts here:
#include <...> search starts here:
 /usr/lib/gcc/x86_64-linux-gnu/13/include
 /usr/local/include
 /usr/include/x86_64-linux-gnu
 /usr/include
End of search list.
# 0 "/dev/null"
# 0 "<built-in>"
"""

GCC_PATHS = [
    "/usr/lib/gcc/x86_64-linux-gnu/13/include",
    "/usr/local/include",
    "/usr/include/x86_64-linux-gnu",
    "/usr/include",
]


@pytest.fixture
def gcc_output() -> str:
    """Verbose preprocessor output of a typical gcc."""
    return GCC_OUTPUT


@pytest.fixture
def gcc_paths() -> list[str]:
    """Search list contained in gcc_output."""
    return list(GCC_PATHS)


@pytest.fixture
def fake_compiler(tmp_path: Path):
    """Factory writing an executable shell script that mimics a compiler.

    The script prints ``output`` to stderr (or stdout), runs any ``extra``
    shell lines first, and exits with ``returncode``.
    """
    if sys.platform == "win32":
        pytest.skip("fake compilers are POSIX shell scripts")

    counter = iter(range(1000))

    def make(
        output: str | bytes = "",
        returncode: int = 0,
        stream: str = "stderr",
        extra: str = "",
    ) -> str:
        n = next(counter)
        data = tmp_path / f"compiler{n}.out"
        if isinstance(output, bytes):
            data.write_bytes(output)
        else:
            data.write_text(output)
        redirect = " >&2" if stream == "stderr" else ""
        script = tmp_path / f"compiler{n}"
        script.write_text(
            "#!/bin/sh\n"
            f"{extra}\n"
            f"cat {shlex.quote(str(data))}{redirect}\n"
            f"exit {returncode}\n"
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(script)

    return make


@pytest.fixture
def gcc_like(fake_compiler, gcc_output) -> str:
    """Fake compiler printing a well-formed search list."""
    return fake_compiler(gcc_output)
