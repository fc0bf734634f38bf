from __future__ import annotations

import pytest

from spp_forecast.main import app as module_app
from spp_forecast.main.app import create_app


@pytest.mark.asyncio
async def test_create_app_initializes_lifespan() -> None:
    app = create_app()
    assert app.title

    paths = set(app.openapi()["paths"])
    assert {"/forecast", "/forecast/dates", "/health", "/info"} <= paths

    async with app.router.lifespan_context(app):
        assert app.state.started_at is not None

    # Ensure module-level app is instantiated
    assert isinstance(module_app.app, type(app))
