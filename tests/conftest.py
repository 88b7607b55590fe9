"""Pytest configuration for the exchange client tests."""

import os
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Keep test runs from writing history/session log files
os.environ.setdefault("LOG_TO_FILE", "false")

pytest_plugins = ["pytest_asyncio"]
