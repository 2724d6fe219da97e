"""CLI for compiler-includes."""

import argparse
import json
import os
import sys
from pathlib import Path

from .config import SearchPathConfig, load_config
from .extract import SearchListNotFound
from .refresh import refresh_include_paths

FORMATS = ("lines", "json", "path")


def resolve_config(args: argparse.Namespace) -> SearchPathConfig:
    """Merge the config file (if any) with command line arguments."""
    config = SearchPathConfig()
    if args.config:
        values = load_config(args.config)
        config = SearchPathConfig.from_mapping(values)
        if not args.format and "format" in values:
            args.format = values["format"]
    if args.program:
        config.program = args.program
    if not args.format:
        args.format = "lines"
    return config


def format_paths(paths: list[str], fmt: str) -> str:
    """Render the include path list.

    Args:
        paths: Directories in search order.
        fmt: One of "lines", "json" or "path".

    Returns:
        Text to print (without trailing newline).
    """
    if fmt == "json":
        return json.dumps(paths, indent=2)
    if fmt == "path":
        return os.pathsep.join(paths)
    return "\n".join(paths)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for compiler-includes CLI."""
    parser = argparse.ArgumentParser(
        description="Print the include search path of a C compiler"
    )
    parser.add_argument(
        "--program",
        type=str,
        help="Compiler to query (default: gcc)",
    )
    parser.add_argument("--config", type=Path, help="Path to YAML config file")
    parser.add_argument(
        "--format",
        choices=FORMATS,
        help="Output format: one path per line, JSON array, or a PATH-style list",
    )
    parser.add_argument("--output", type=Path, help="Write the list to this file")

    args = parser.parse_args(argv)
    config = resolve_config(args)
    if args.format not in FORMATS:
        parser.error(f"invalid format in config: {args.format!r}")

    try:
        paths = refresh_include_paths(config)
    except SearchListNotFound as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    text = format_paths(paths, args.format)
    if args.output:
        args.output.write_text(text + "\n" if text else "")
        print(f"Wrote {len(paths)} include paths to {args.output}", file=sys.stderr)
    elif text:
        print(text)


if __name__ == "__main__":
    main()
