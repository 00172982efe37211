"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/              # Fast, isolated tests
    │   ├── domain/        # Metrics, periods, category hierarchy
    │   ├── application/   # Cache, mutations, validation, services
    │   ├── infrastructure/# HTTP client and gateways (httpx.MockTransport)
    │   └── presentation/  # CLI (typer.testing.CliRunner)
    └── shared/            # Shared fixtures and factories

No test talks to a real server: every HTTP exchange goes through an
in-process httpx.MockTransport.
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from fintrack_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")
elif (CONFIG_DIR / ".env").exists():
    load_dotenv(CONFIG_DIR / ".env")


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "slow: Tests that take more than 1 second",
    )


@pytest.fixture(autouse=True)
def configure_app_settings():
    """Start and end every test with freshly loaded settings."""
    clear_settings_cache()
    yield
    clear_settings_cache()
