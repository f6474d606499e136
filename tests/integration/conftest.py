"""Integration test fixtures: real config loading and catalog file, no network."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
BUNDLED_CATALOG = REPO_ROOT / "data" / "stock_info.csv"


@pytest.fixture
def viewer_env(tmp_path: Path, monkeypatch) -> Path:
    """A stock-viewer.yml on disk plus env overrides, as in a deployment."""
    for key in list(os.environ):
        if key.startswith("STOCK_VIEWER_"):
            monkeypatch.delenv(key, raising=False)

    config_file = tmp_path / "stock-viewer.yml"
    config_file.write_text(
        "alpha_vantage:\n"
        "  api_key: from-yaml\n"
        "  base_url: https://av.test\n"
        "  request_timeout: 5\n"
        f"catalog:\n  path: '{BUNDLED_CATALOG.as_posix()}'\n  required: true\n"
    )
    monkeypatch.setenv("STOCK_VIEWER_CONFIG", str(config_file))
    monkeypatch.setenv("STOCK_VIEWER_ALPHA_VANTAGE__API_KEY", "from-env")
    return config_file
