"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from notion_cms.app import app


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app."""
    return TestClient(app)
