"""Root conftest — shared test configuration."""

import os

# Set before social_graph.config.get_settings() is first called
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("JWT_SECRET", "test-secret-key-with-at-least-32-bytes")
os.environ.setdefault("EXCLUSION_VARIANT", "block")
os.environ.setdefault("LOG_FORMAT", "text")
