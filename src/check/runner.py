"""Tree-level import firewall check."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pydantic import BaseModel

from parse.es_imports import extract_import_specifiers
from rules.config import resolve_src_dir
from rules.firewall import Firewall
from scan.files import find_source_files
from utils import normalize_path

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import FirewallConfig

logger = logging.getLogger(__name__)


class Violation(BaseModel):
    """A firewall violation located in a source file."""

    file: str
    line: int
    column: int
    specifier: str
    layer: str
    imported_layer: str
    allowed: str
    message: str


@dataclass(frozen=True)
class CheckResult:
    files_checked: int
    violations: tuple[Violation, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.violations


def check_file(file_path: Path, root: Path, firewall: Firewall) -> list[Violation]:
    """Evaluate every module-level import of one file.

    The absolute path of the file is what gets classified, so layer
    patterns such as ``/src/app/`` match regardless of where the root is.
    """
    absolute = normalize_path(file_path.resolve())
    if firewall.classify_path(absolute) is None:
        logger.debug("skipping %s: outside every layer", absolute)
        return []

    relative = file_path.relative_to(root).as_posix()
    violations: list[Violation] = []
    for item in extract_import_specifiers(file_path):
        diagnostic = firewall.evaluate(absolute, item.specifier)
        if diagnostic is None:
            continue
        violations.append(
            Violation(
                file=relative,
                line=item.line,
                column=item.column,
                specifier=item.specifier,
                layer=diagnostic.layer,
                imported_layer=diagnostic.imported_layer,
                allowed=diagnostic.allowed_display,
                message=diagnostic.message,
            )
        )
    return violations


def check_tree(root: Path, config: FirewallConfig) -> CheckResult:
    """Check every source file under the configured src_dir."""
    root = root.resolve()
    src_dir = resolve_src_dir(root, config.src_dir)
    firewall = Firewall.from_config(config)

    files_checked = 0
    violations: list[Violation] = []
    for file_path in find_source_files(
        root,
        extensions=config.extensions,
        src_dir=src_dir,
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
    ):
        files_checked += 1
        violations.extend(check_file(file_path, root, firewall))

    violations.sort(key=lambda v: (v.file, v.line, v.column, v.specifier))
    logger.debug(
        "checked %d files, %d violations", files_checked, len(violations)
    )
    return CheckResult(files_checked=files_checked, violations=tuple(violations))
