"""Import firewall evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rules.layers import EXTERNAL, ImportLayer, classify_import, classify_path
from rules.registry import LayerRegistry, build_registry

if TYPE_CHECKING:
    from rules.config import FirewallConfig

THIRD_PARTY_MARKER = "node_modules"
MESSAGE_TEMPLATE = (
    'Layer "{layer}" cannot import from "{imported_layer}". Allowed imports: {allowed}'
)


def format_allowed(allowed: tuple[str, ...]) -> str:
    """Render an allow-list for display, third-party imports always included.

    Examples:
        >>> format_allowed(("feature", "shared"))
        'feature, shared, node_modules'
        >>> format_allowed(())
        'node_modules only'
    """
    if not allowed:
        return f"{THIRD_PARTY_MARKER} only"
    return ", ".join([*allowed, THIRD_PARTY_MARKER])


@dataclass(frozen=True)
class Diagnostic:
    """An import whose target layer is not in the importer's allow-list."""

    layer: str
    imported_layer: str
    allowed: tuple[str, ...]

    @property
    def allowed_display(self) -> str:
        return format_allowed(self.allowed)

    @property
    def message(self) -> str:
        return MESSAGE_TEMPLATE.format(
            layer=self.layer,
            imported_layer=self.imported_layer,
            allowed=self.allowed_display,
        )


def evaluate(
    importing_file_path: str,
    specifier: str,
    registry: LayerRegistry,
) -> Diagnostic | None:
    """Evaluate one import edge against the layer allow-lists.

    Returns ``None`` when the import passes. Files outside every layer,
    third-party imports and imports whose layer cannot be determined all
    pass; only a known layer missing from the importer's allow-list yields
    a diagnostic.
    """
    current_layer = classify_path(importing_file_path, registry)
    if current_layer is None:
        return None

    imported_layer: ImportLayer = classify_import(
        specifier, importing_file_path, registry
    )
    if imported_layer is EXTERNAL or imported_layer is None:
        return None

    allowed = registry.allowed_for(current_layer)
    if imported_layer in allowed:
        return None

    return Diagnostic(
        layer=current_layer,
        imported_layer=str(imported_layer),
        allowed=allowed,
    )


class Firewall:
    """Registry-bound facade over the classification and evaluation functions."""

    def __init__(self, registry: LayerRegistry) -> None:
        self._registry = registry

    @classmethod
    def from_config(cls, config: FirewallConfig) -> Firewall:
        return cls(build_registry(config.layers))

    @property
    def registry(self) -> LayerRegistry:
        return self._registry

    def classify_path(self, file_path: str) -> str | None:
        return classify_path(file_path, self._registry)

    def classify_import(self, specifier: str, importing_file_path: str) -> ImportLayer:
        return classify_import(specifier, importing_file_path, self._registry)

    def evaluate(self, importing_file_path: str, specifier: str) -> Diagnostic | None:
        return evaluate(importing_file_path, specifier, self._registry)
