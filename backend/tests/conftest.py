"""Root conftest — shared test configuration."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
# The background sweep is exercised directly in tests, never on a timer
os.environ.setdefault("ACTIVITY_COMPLETION_INTERVAL_SECONDS", "0")
# Naive test datetimes are UTC and read the same on the shelter's clock
os.environ.setdefault("SHELTER_TIMEZONE", "UTC")
