from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.resource_builder import ResourceBuilder


@pytest.fixture
def resource_builder(tmp_path: Path) -> ResourceBuilder:
    """Provide a reusable resource builder rooted at the pytest tmp_path."""
    return ResourceBuilder(tmp_path)
