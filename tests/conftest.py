"""Root conftest — shared test configuration."""

import os

# Ensure tests never point at a real database or the real GitHub API
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("GITHUB_API_BASE_URL", "http://github.invalid")
os.environ.setdefault("LOG_FORMAT", "text")
