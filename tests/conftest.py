"""Pytest configuration."""
import sys
from pathlib import Path

import pytest

# Ensure project root is importable regardless of where pytest is invoked
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from common.logger import request_id_var  # noqa: E402


@pytest.fixture(autouse=True)
def request_id():
    """Tag log lines from each test with a fixed request id."""
    request_id_var.set("test")
    yield "test"
    request_id_var.set("")
