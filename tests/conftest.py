"""Shared test configuration."""

import os

# Set before the app (and its cached settings) is imported
os.environ.setdefault("CATALOG_SIMULATED_LATENCY_MS", "0")
os.environ.setdefault("CATALOG_API_KEY", "my-secret-key")
