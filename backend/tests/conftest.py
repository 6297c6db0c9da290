"""Root conftest — shared test configuration."""

import os

# Settings are cached on first use: pin test values before any app import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SHOPIFY_API_KEY"] = "test-key"
os.environ["SHOPIFY_API_SECRET"] = "test-secret"
os.environ["SHOPIFY_APP_URL"] = "https://fundboard.test"
