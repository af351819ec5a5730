"""Every application module imports cleanly on the supported interpreters."""

import importlib

import pytest
from fastapi import FastAPI

MODULES = [
    "app.config",
    "app.data.locations",
    "app.dependencies",
    "app.exceptions",
    "app.main",
    "app.routers.calendar",
    "app.routers.colors",
    "app.routers.custom_calendars",
    "app.routers.health",
    "app.routers.holidays",
    "app.routers.locations",
    "app.routers.vacations",
    "app.schemas.color",
    "app.schemas.grid",
    "app.schemas.holiday",
    "app.schemas.location",
    "app.schemas.vacation",
    "app.services.calendar_grid",
    "app.services.colors",
    "app.services.custom_calendars",
    "app.services.dates",
    "app.services.holiday_provider",
    "app.services.proxy",
    "app.services.selection",
    "app.services.storage",
    "app.services.vacation",
]


class TestImports:
    @pytest.mark.parametrize("module_name", MODULES)
    def test_module_imports(self, module_name):
        assert importlib.import_module(module_name) is not None

    def test_app_is_built(self):
        module = importlib.import_module("app.main")
        assert isinstance(module.app, FastAPI)

    def test_repository_does_not_shadow_list(self):
        module = importlib.import_module("app.services.custom_calendars")
        repository = module.CustomCalendarRepository
        assert hasattr(repository, "list_all")
        assert "list" not in vars(repository)
