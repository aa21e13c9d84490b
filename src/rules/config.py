from __future__ import annotations

from pathlib import Path

import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

CONFIG_FILENAME = "importfirewall.toml"

DEFAULT_EXTENSIONS = [".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts"]


class LayerDef(BaseModel):
    """Definition of a single architectural layer."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1, description="Layer name (e.g., 'app', 'shared')")
    path: str = Field(
        min_length=1,
        description="Path substring identifying files of this layer (e.g., '/src/app/')",
    )
    alias: str = Field(
        min_length=1,
        description="Import alias prefix targeting this layer (e.g., '@app/')",
    )
    allowed_imports: list[str] = Field(
        default_factory=list,
        description="Layer names this layer may import from (self included explicitly)",
    )


class FirewallConfig(BaseModel):
    """Configuration for the import firewall."""

    model_config = ConfigDict(extra="forbid")

    src_dir: str = Field(
        default=".",
        description="Directory under the repository root to scan",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all source files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS),
        description="Source file extensions to check",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    layers: list[LayerDef] = Field(
        description="Layer definitions (declaration order is the first-match tie-break)",
    )

    @model_validator(mode="after")
    def validate_layers(self) -> FirewallConfig:
        """Reject layer tables the first-match lookups cannot handle.

        Names, paths and aliases must be unique, and every allowed import
        must name a declared layer.
        """
        if not self.layers:
            msg = "at least one [[layers]] entry is required"
            raise ValueError(msg)

        for field_name in ("name", "path", "alias"):
            seen: set[str] = set()
            for layer in self.layers:
                value = getattr(layer, field_name)
                if value in seen:
                    msg = f"duplicate layer {field_name} '{value}'"
                    raise ValueError(msg)
                seen.add(value)

        names = {layer.name for layer in self.layers}
        for layer in self.layers:
            unknown = sorted(set(layer.allowed_imports) - names)
            if unknown:
                msg = (
                    f"Layer '{layer.name}' allows unknown layers: {', '.join(unknown)}. "
                    f"Valid layers: {', '.join(sorted(names))}"
                )
                raise ValueError(msg)

        return self


class ConfigError(Exception):
    """Raised when the config file is missing or cannot be parsed."""


def resolve_src_dir(root: Path, src_dir: str) -> Path:
    """Resolve a config-provided src_dir safely within the repo root.

    Absolute paths and paths that escape the root are rejected.
    """
    if src_dir.startswith("~"):
        msg = "src_dir must be a relative path within the repo root"
        raise ConfigError(msg)

    src_path = Path(src_dir)
    if src_path.is_absolute():
        msg = "src_dir must be a relative path within the repo root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_src = (resolved_root / src_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve src_dir '{src_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_src.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"src_dir '{src_dir}' escapes the repository root"
        raise ConfigError(msg) from exc

    return resolved_src


def load_config(root: Path, config_path: Path | None = None) -> FirewallConfig:
    """Load configuration from importfirewall.toml (or an explicit path)."""
    path = config_path if config_path is not None else Path(root) / CONFIG_FILENAME

    if not path.is_file():
        msg = f"Config file not found: {path}"
        raise ConfigError(msg)

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e

    try:
        return FirewallConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid config in {path}: {e}"
        raise ConfigError(msg) from e
