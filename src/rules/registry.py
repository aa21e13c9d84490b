"""Immutable lookup tables built from the configured layers."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from rules.config import LayerDef


@dataclass(frozen=True)
class LayerRegistry:
    """Read-only view of the layer configuration.

    ``paths`` and ``aliases`` keep configuration order; lookups over them are
    first-match, so declaration order is the tie-break between overlapping
    patterns.
    """

    paths: tuple[tuple[str, str], ...]
    aliases: tuple[tuple[str, str], ...]
    allowed: Mapping[str, tuple[str, ...]]

    @property
    def layer_names(self) -> tuple[str, ...]:
        return tuple(self.allowed)

    def allowed_for(self, layer: str) -> tuple[str, ...]:
        return self.allowed.get(layer, ())


def _first_wins(pairs: Iterable[tuple[str, str]]) -> tuple[tuple[str, str], ...]:
    seen: set[str] = set()
    ordered: list[tuple[str, str]] = []
    for key, name in pairs:
        if key in seen:
            continue
        seen.add(key)
        ordered.append((key, name))
    return tuple(ordered)


def build_registry(layers: Iterable[LayerDef]) -> LayerRegistry:
    """Build the registry from layer definitions in configuration order."""
    layer_list = list(layers)
    allowed: dict[str, tuple[str, ...]] = {}
    for layer in layer_list:
        allowed.setdefault(layer.name, tuple(layer.allowed_imports))

    return LayerRegistry(
        paths=_first_wins((layer.path, layer.name) for layer in layer_list),
        aliases=_first_wins((layer.alias, layer.name) for layer in layer_list),
        allowed=MappingProxyType(allowed),
    )
