from __future__ import annotations

import tomllib
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from rewrite.keep import KeepMatch
from utils import default_config_dir

if TYPE_CHECKING:
    from pathlib import Path

CONFIG_FILENAME = "config.toml"

DEFAULT_CONFIG_TEMPLATE = """\
# crate-digest configuration

# Include README.md files in the output.
# readme = true

# Include Cargo.toml files in the output.
# toml = true

# fnmatch patterns, relative to the project root.
# include = ["src/**"]
# exclude = ["benches/**"]

# Honour .gitignore files below the project root, not only the top-level one.
# nested_gitignore = false

# "qualified" keeps exactly the chosen functions; "bare" keeps every function
# in a file that shares a chosen function's name.
# keep_match = "qualified"
"""


class DigestConfig(BaseModel):
    """Configuration for crate-digest runs."""

    model_config = ConfigDict(extra="forbid")

    readme: bool | None = Field(
        default=None,
        description="Include README.md files",
    )
    toml: bool | None = Field(
        default=None,
        description="Include Cargo.toml files",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all matched files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    keep_match: KeepMatch = Field(
        default="qualified",
        description="Match selections by qualified name or by bare function name",
    )


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def default_config_path() -> Path:
    return default_config_dir() / CONFIG_FILENAME


def load_config(config_path: Path | None = None) -> DigestConfig:
    """Load configuration from ``config_path`` or the default location.

    A missing file yields the built-in defaults.
    """
    if config_path is None:
        config_path = default_config_path()

    if not config_path.is_file():
        return DigestConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Failed to read config file {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return DigestConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


def write_default_config(config_path: Path | None = None) -> Path:
    """Write the commented default config and return where it went."""
    if config_path is None:
        config_path = default_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
    except OSError as e:
        msg = f"Failed to write config file {config_path}: {e}"
        raise ConfigError(msg) from e

    return config_path
