from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from check.runner import check_file, check_tree
from rules.config import ConfigError, FirewallConfig, load_config
from rules.firewall import Firewall

FIXTURE_REPO = Path(__file__).parent / "fixtures" / "fsd_repo"


def _copy_fsd_repo(root: Path) -> None:
    shutil.copytree(FIXTURE_REPO, root)


def test_check_tree_reports_fixture_violations_sorted(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_fsd_repo(repo_root)

    result = check_tree(repo_root, load_config(repo_root))

    assert result.files_checked == 8
    assert not result.ok
    assert [
        (v.file, v.line, v.specifier, v.layer, v.imported_layer)
        for v in result.violations
    ] == [
        (
            "src/features/auth/components/form.js",
            2,
            "../../../app/components",
            "feature",
            "app",
        ),
        ("src/features/auth/index.ts", 3, "@widgets/header", "feature", "widget"),
        ("src/shared/ui/button.jsx", 1, "@features/auth", "shared", "feature"),
        ("src/widgets/header/index.js", 1, "@app/components", "widget", "app"),
    ]


def test_check_tree_violation_carries_display_fields(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_fsd_repo(repo_root)

    result = check_tree(repo_root, load_config(repo_root))
    widget_violation = result.violations[-1]

    assert widget_violation.column == 24
    assert widget_violation.allowed == "widget, feature, shared, node_modules"
    assert widget_violation.message == (
        'Layer "widget" cannot import from "app". '
        "Allowed imports: widget, feature, shared, node_modules"
    )


def test_check_tree_respects_exclude_and_src_dir(
    tmp_path: Path, fsd_config: FirewallConfig
) -> None:
    repo_root = tmp_path / "repo"
    _copy_fsd_repo(repo_root)

    config = fsd_config.model_copy(
        update={"src_dir": "src", "exclude": ["src/features/*", "src/shared/*"]}
    )
    result = check_tree(repo_root, config)

    assert result.files_checked == 3
    assert [v.file for v in result.violations] == ["src/widgets/header/index.js"]


def test_check_tree_skips_node_modules_and_gitignored(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_fsd_repo(repo_root)
    vendored = repo_root / "src" / "shared" / "node_modules" / "pkg" / "index.js"
    vendored.parent.mkdir(parents=True)
    vendored.write_text("import '@app/x';\n", encoding="utf-8")
    built = repo_root / "src" / "shared" / "dist" / "bundle.js"
    built.parent.mkdir(parents=True)
    built.write_text("import '@app/x';\n", encoding="utf-8")
    (repo_root / ".gitignore").write_text("dist/\n", encoding="utf-8")

    result = check_tree(repo_root, load_config(repo_root))

    assert result.files_checked == 8
    assert len(result.violations) == 4


def test_check_tree_clean_repo_is_ok(tmp_path: Path, fsd_config: FirewallConfig) -> None:
    (tmp_path / "src" / "shared").mkdir(parents=True)
    (tmp_path / "src" / "shared" / "a.js").write_text(
        "import x from './b';\nimport y from 'react';\n", encoding="utf-8"
    )

    result = check_tree(tmp_path, fsd_config)

    assert result.ok
    assert result.files_checked == 1


def test_check_tree_rejects_escaping_src_dir(
    tmp_path: Path, fsd_config: FirewallConfig
) -> None:
    config = fsd_config.model_copy(update={"src_dir": "../elsewhere"})

    with pytest.raises(ConfigError):
        check_tree(tmp_path, config)


def test_check_file_outside_layers_is_skipped(
    tmp_path: Path, fsd_config: FirewallConfig
) -> None:
    script = tmp_path / "scripts" / "build.js"
    script.parent.mkdir()
    script.write_text("import '@app/x';\n", encoding="utf-8")

    assert check_file(script, tmp_path, Firewall.from_config(fsd_config)) == []
