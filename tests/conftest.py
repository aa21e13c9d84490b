from __future__ import annotations

import pytest

from rules.config import FirewallConfig
from rules.registry import LayerRegistry, build_registry

FSD_LAYERS: list[dict[str, object]] = [
    {
        "name": "app",
        "path": "/src/app/",
        "alias": "@app/",
        "allowed_imports": ["app", "widget", "feature", "shared"],
    },
    {
        "name": "widget",
        "path": "/src/widgets/",
        "alias": "@widgets/",
        "allowed_imports": ["widget", "feature", "shared"],
    },
    {
        "name": "feature",
        "path": "/src/features/",
        "alias": "@features/",
        "allowed_imports": ["feature", "shared"],
    },
    {
        "name": "shared",
        "path": "/src/shared/",
        "alias": "@shared/",
        "allowed_imports": ["shared"],
    },
]


@pytest.fixture
def fsd_config() -> FirewallConfig:
    return FirewallConfig.model_validate({"layers": FSD_LAYERS})


@pytest.fixture
def fsd_registry(fsd_config: FirewallConfig) -> LayerRegistry:
    return build_registry(fsd_config.layers)
