"""Shared test fixtures for commodity_ledger."""

import json
import os
import tempfile

import pytest
from loguru import logger


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture(autouse=True)
def _quiet_loguru():
    """Drop sinks left behind by CLI runs whose streams are closed afterwards."""
    yield
    logger.remove()


@pytest.fixture
def ledger_file(tmp_dir):
    """Write a small inventory file and return its path."""
    data = {
        "Gold": {"inventory": 10.0, "total_cost": 110.0},
        "Laranite": {"inventory": 32.0, "total_cost": 960.0},
    }
    path = os.path.join(tmp_dir, "inventory_data.json")
    with open(path, "w") as f:
        json.dump(data, f)
    return path
