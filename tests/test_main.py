import asyncio
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from main import create_app


def test_owned_repository_is_closed_when_serving_fails():
    repository = MagicMock()

    async def serve(app):
        async with app.router.lifespan_context(app):
            raise RuntimeError("serving stopped")

    with patch("main.ReportRepository.connect", return_value=repository):
        app = create_app(settings=Settings())
        with pytest.raises(RuntimeError):
            asyncio.run(serve(app))

    repository.ensure_indexes.assert_called_once()
    repository.close.assert_called_once()
    assert app.state.repository is None


def test_injected_repository_is_left_open():
    repository = MagicMock()
    app = create_app(settings=Settings(), repository=repository)

    with TestClient(app):
        pass

    repository.ensure_indexes.assert_called_once()
    repository.close.assert_not_called()
