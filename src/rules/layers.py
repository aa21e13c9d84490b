"""Layer classification for file paths and import specifiers."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Final, Literal

from utils import join_segments, normalize_path, split_segments

if TYPE_CHECKING:
    from rules.registry import LayerRegistry


class ImportKind(Enum):
    """Sentinel kinds an import specifier may classify to besides a layer."""

    EXTERNAL = "external"


EXTERNAL: Final = ImportKind.EXTERNAL

ImportLayer = str | Literal[ImportKind.EXTERNAL] | None

SAME_DIR_PREFIX = "./"
PARENT_DIR_PREFIX = "../"


def is_relative_specifier(specifier: str) -> bool:
    return specifier.startswith((SAME_DIR_PREFIX, PARENT_DIR_PREFIX))


def _match_path(path: str, registry: LayerRegistry) -> str | None:
    for pattern, layer_name in registry.paths:
        if pattern in path:
            return layer_name
    return None


def _match_alias(specifier: str, registry: LayerRegistry) -> str | None:
    for alias, layer_name in registry.aliases:
        if specifier.startswith(alias):
            return layer_name
    return None


def classify_path(file_path: str, registry: LayerRegistry) -> str | None:
    """Classify a file path into an architectural layer.

    Uses substring containment with first-match-wins semantics: the first
    layer, in configuration order, whose ``path`` occurs anywhere in the
    normalized file path determines the layer.
    """
    return _match_path(normalize_path(file_path), registry)


def resolve_relative(specifier: str, importing_file_path: str) -> str:
    """Resolve a relative specifier against the importing file's directory.

    Pure path algebra, no filesystem access. ``..`` above the root is clamped.

    Examples:
        >>> resolve_relative("../../shared/utils", "/project/src/features/auth/x.js")
        '/project/src/shared/utils/'
        >>> resolve_relative("../../../../../x", "/a/b.js")
        '/x/'
    """
    resolved = split_segments(normalize_path(importing_file_path))[:-1]

    for part in split_segments(normalize_path(specifier)):
        if part == "..":
            if resolved:
                resolved.pop()
        elif part != ".":
            resolved.append(part)

    return join_segments(resolved)


def classify_import(
    specifier: str,
    importing_file_path: str,
    registry: LayerRegistry,
) -> ImportLayer:
    """Classify an import specifier into a layer, ``EXTERNAL`` or ``None``.

    Aliases are checked first, then relative specifiers are resolved against
    the importing file. A ``./`` specifier whose resolved path matches no
    layer stays in the importer's layer; an unmatched ``../`` specifier is
    undeterminable (``None``). Everything else is a third-party import.
    """
    aliased = _match_alias(specifier, registry)
    if aliased is not None:
        return aliased

    if not is_relative_specifier(specifier):
        return EXTERNAL

    resolved_layer = _match_path(resolve_relative(specifier, importing_file_path), registry)
    if resolved_layer is not None:
        return resolved_layer

    if specifier.startswith(SAME_DIR_PREFIX):
        return classify_path(importing_file_path, registry)

    return None
