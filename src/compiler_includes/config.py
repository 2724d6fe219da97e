"""Configuration for the include search path."""

from dataclasses import dataclass, field
from pathlib import Path

from .extract import DEFAULT_PROGRAM


def load_config(config_path: Path) -> dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dictionary of configuration values.
    """
    try:
        import yaml

        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    except ImportError as err:
        raise ImportError("PyYAML required for config files: pip install pyyaml") from err


@dataclass
class SearchPathConfig:
    """Compiler to query and the include path list read by file lookup."""

    program: str = DEFAULT_PROGRAM
    include_paths: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)  # Extra compiler environment

    @classmethod
    def from_mapping(cls, config: dict) -> "SearchPathConfig":
        """Build a config from a loaded YAML mapping.

        Recognised keys are ``program``, ``include-paths`` (string or list) and
        ``env`` (mapping of environment variables). Other keys are ignored.
        """
        paths = config.get("include-paths") or []
        if isinstance(paths, str):
            paths = [paths]
        env = config.get("env") or {}
        return cls(
            program=str(config.get("program") or DEFAULT_PROGRAM),
            include_paths=[str(p) for p in paths],
            env={str(k): str(v) for k, v in env.items()},
        )
