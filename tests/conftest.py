"""
Test-wide environment.

dog_rentals.config requires DATABASE_URL at import time, so it is pointed at
an in-memory SQLite database before any application module is imported.
"""

from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "WARNING")
