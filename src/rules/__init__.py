"""Layer rules for import-firewall."""

from rules.config import (
    ConfigError,
    FirewallConfig,
    LayerDef,
    load_config,
)
from rules.firewall import Diagnostic, Firewall, evaluate, format_allowed
from rules.layers import EXTERNAL, classify_import, classify_path, resolve_relative
from rules.registry import LayerRegistry, build_registry

__all__ = [
    "EXTERNAL",
    "ConfigError",
    "Diagnostic",
    "Firewall",
    "FirewallConfig",
    "LayerDef",
    "LayerRegistry",
    "build_registry",
    "classify_import",
    "classify_path",
    "evaluate",
    "format_allowed",
    "load_config",
    "resolve_relative",
]
