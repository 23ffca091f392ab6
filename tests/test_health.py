"""Tests for the health check endpoint."""

import json
import os
from unittest.mock import patch

from app import create_app
from app.config import reset_global_settings


def test_healthz_ok(client):
    """Test that the health endpoint returns 200 with correct JSON."""
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.content_type == "application/json"

    data = json.loads(response.data)
    assert data == {"status": "ok", "narrativeReports": False}


def test_healthz_reports_narrative_key():
    """Test that a configured API key is reflected in the health payload."""
    reset_global_settings()
    try:
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "test-secret-key-123", "GEMINI_API_KEY": "abc"},
            clear=True,
        ):
            client = create_app().test_client()
            assert client.get("/healthz").get_json()["narrativeReports"] is True
    finally:
        reset_global_settings()
