"""Tree-sitter based import extraction for JavaScript and TypeScript."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

logger = logging.getLogger(__name__)

_GRAMMARS: dict[str, Callable[[], object]] = {
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

_GRAMMAR_BY_SUFFIX = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

_IMPORT_NODE_TYPES = frozenset({"import_statement", "export_statement"})

_PARSERS: dict[str, Parser] = {}


@dataclass(frozen=True)
class ImportSpecifier:
    """A module-level import specifier and its 1-based source position."""

    line: int
    column: int
    specifier: str


def _get_parser(grammar: str) -> Parser:
    """Initialize and cache the Tree-sitter parser for a grammar."""
    parser = _PARSERS.get(grammar)
    if parser is None:
        parser = Parser(Language(_GRAMMARS[grammar]()))
        _PARSERS[grammar] = parser
    return parser


def grammar_for(file_path: Path) -> str | None:
    return _GRAMMAR_BY_SUFFIX.get(file_path.suffix.lower())


def _string_value(node: Node) -> str | None:
    if node.type != "string" or node.text is None:
        return None
    raw = node.text.decode("utf-8", errors="replace")
    if len(raw) < 2:
        return None
    return raw[1:-1]


def _collect(root: Node) -> list[ImportSpecifier]:
    specifiers: list[ImportSpecifier] = []
    for child in root.children:
        if child.type not in _IMPORT_NODE_TYPES:
            continue
        # export statements without a source are local declarations
        source = child.child_by_field_name("source")
        if source is None:
            continue
        value = _string_value(source)
        if value is None:
            continue
        specifiers.append(
            ImportSpecifier(
                line=source.start_point[0] + 1,
                column=source.start_point[1] + 1,
                specifier=value,
            )
        )
    return specifiers


def extract_specifiers_from_source(
    source: bytes, grammar: str = "javascript"
) -> list[ImportSpecifier]:
    """Extract module-level import specifiers from source bytes.

    Collects ``import ... from '<module>'``, side-effect ``import '<module>'`` and
    ``export ... from '<module>'`` statements, in source order.
    """
    tree = _get_parser(grammar).parse(source)
    return _collect(tree.root_node)


def extract_import_specifiers(file_path: Path) -> list[ImportSpecifier]:
    """Extract module-level import specifiers from a JavaScript/TypeScript file.

    Files with an unknown extension, or that cannot be read, yield no
    specifiers.
    """
    grammar = grammar_for(file_path)
    if grammar is None:
        logger.debug("no grammar for %s", file_path)
        return []

    try:
        source = file_path.read_bytes()
    except OSError as exc:
        logger.warning("cannot read %s: %s", file_path, exc)
        return []

    return extract_specifiers_from_source(source, grammar)
