from __future__ import annotations

from pathlib import Path

from rules.config import load_config
from rules.firewall import Firewall

FIXTURE_REPO = Path(__file__).parent / "fixtures" / "fsd_repo"


def _firewall() -> Firewall:
    return Firewall.from_config(load_config(FIXTURE_REPO))


def test_load_fixture_config_has_expected_layers() -> None:
    config = load_config(FIXTURE_REPO)

    assert [layer.name for layer in config.layers] == [
        "app",
        "widget",
        "feature",
        "shared",
    ]
    assert config.layers[-1].allowed_imports == ["shared"]


def test_every_layer_has_allow_list_entry() -> None:
    firewall = _firewall()

    assert firewall.registry.layer_names == ("app", "widget", "feature", "shared")
    assert firewall.registry.allowed_for("shared") == ("shared",)


def test_sentinel_file_classification() -> None:
    firewall = _firewall()

    assert firewall.classify_path("/project/src/app/index.js") == "app"
    assert firewall.classify_path("/project/src/widgets/header/index.js") == "widget"
    assert firewall.classify_path("/project/src/features/auth/index.ts") == "feature"
    assert firewall.classify_path("/project/src/shared/utils/index.js") == "shared"
    assert firewall.classify_path("/project/scripts/build.js") is None


def test_layering_scenarios_with_fixture_config() -> None:
    """Walk the app > widget > feature > shared scenarios end to end.

    - widget -> @app alias: VIOLATION
    - app -> react: third-party, allowed
    - feature -> ../../../app: relative into app, VIOLATION
    - app -> ../other: stays in app, allowed
    - shared -> @shared alias: allowed
    - scripts (no layer) -> anything: unchecked
    """
    firewall = _firewall()

    widget = firewall.evaluate("/project/src/widgets/header/index.js", "@app/components")
    assert widget is not None
    assert (widget.layer, widget.imported_layer) == ("widget", "app")
    assert widget.allowed == ("widget", "feature", "shared")

    assert firewall.evaluate("/project/src/app/index.js", "react") is None

    feature = firewall.evaluate(
        "/project/src/features/auth/components/form.js", "../../../app/components"
    )
    assert feature is not None
    assert (feature.layer, feature.imported_layer) == ("feature", "app")

    assert firewall.evaluate("/project/src/app/components/button.js", "../other") is None

    assert (
        firewall.evaluate("/project/src/shared/utils/index.js", "@shared/helpers")
        is None
    )

    assert firewall.evaluate("/project/scripts/build.js", "@app/index") is None
