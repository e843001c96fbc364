"""Tests for accounts/main.py - application factory and lifespan."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI

from accounts.core.settings import get_settings
from accounts.main import create_app, lifespan


@pytest.mark.asyncio
async def test_lifespan_creates_tables_and_disposes_engine():
    mock_app = FastAPI()
    mock_app.state.engine = MagicMock()

    with patch("accounts.main.init_db") as mock_init_db:
        async with lifespan(mock_app):
            mock_init_db.assert_called_once_with(mock_app.state.engine)
            mock_app.state.engine.dispose.assert_not_called()

    mock_app.state.engine.dispose.assert_called_once()


def test_create_app_wires_routes_under_prefix():
    settings = get_settings().model_copy(update={"api_prefix": "/v2"})

    app = create_app(settings)

    paths = {route.path for route in app.routes}
    assert "/v2/users" in paths
    assert "/v2/users/{user_id}/force" in paths
    assert "/v2/health" in paths
    assert app.state.engine.url.drivername == "sqlite"
    app.state.engine.dispose()
