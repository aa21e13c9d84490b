"""Command-line interface for import-firewall."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import orjson

from check.runner import CheckResult, check_tree
from rules.config import ConfigError, FirewallConfig, load_config
from rules.firewall import format_allowed


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Repository root (default: .)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Config file (default: <root>/importfirewall.toml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log discovery and per-file progress to stderr",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="import-firewall")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check", help="Check imports against the layer allow-lists"
    )
    _add_common_paths(check_parser)
    check_parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text)",
    )

    layers_parser = subparsers.add_parser(
        "layers", help="Show configured layers in match order"
    )
    _add_common_paths(layers_parser)

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _resolve_config_path(config: str | None) -> Path | None:
    if config is None:
        return None
    return Path(config).expanduser().resolve()


def _write_text(result: CheckResult) -> None:
    for violation in result.violations:
        sys.stdout.write(
            f"{violation.file}:{violation.line}:{violation.column}: "
            f"{violation.message}\n"
        )
    if result.violations:
        sys.stderr.write(
            f"{len(result.violations)} violation(s) in "
            f"{result.files_checked} file(s) checked\n"
        )


def _write_json(result: CheckResult) -> None:
    payload = [violation.model_dump() for violation in result.violations]
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
    sys.stdout.write(orjson.dumps(payload, option=opts).decode("utf-8"))
    sys.stdout.write("\n")


def _handle_check(root: Path, config: FirewallConfig, output_format: str) -> int:
    try:
        result = check_tree(root, config)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    if output_format == "json":
        _write_json(result)
    else:
        _write_text(result)

    return 0 if result.ok else 1


def _handle_layers(config: FirewallConfig) -> int:
    for index, layer in enumerate(config.layers, start=1):
        sys.stdout.write(
            f"{index}. {layer.name}  path={layer.path}  alias={layer.alias}  "
            f"allowed={format_allowed(tuple(layer.allowed_imports))}\n"
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    root = Path(args.root).expanduser().resolve()

    try:
        config = load_config(root, _resolve_config_path(args.config))
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    if args.command == "check":
        return _handle_check(root, config, args.format)

    if args.command == "layers":
        return _handle_layers(config)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
