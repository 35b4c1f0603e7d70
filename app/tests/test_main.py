import importlib
import logging

import pytest

import app.main as main_module

pytestmark = pytest.mark.api


class TestLoggingSetup:

    def test_import_leaves_root_logging_alone(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        importlib.reload(main_module)

        assert calls == []

    @pytest.mark.asyncio
    async def test_lifespan_configures_logging(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        async with main_module.lifespan(main_module.app):
            assert calls == [{"level": main_module.settings.LOG_LEVEL}]
