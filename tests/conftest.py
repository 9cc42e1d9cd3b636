from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from tests._fixtures.discovery_builder import DiscoveryBuilder

FIXTURES = Path(__file__).parent / "_fixtures"


@pytest.fixture
def discovery_builder() -> DiscoveryBuilder:
    """Provide a fresh builder for decoded discovery documents."""
    return DiscoveryBuilder()


@pytest.fixture
def struct_and_cell() -> Any:
    """Decoded discovery document exercising structs, cells and variadics."""
    return json.loads((FIXTURES / "structandcell.json").read_text(encoding="utf-8"))
