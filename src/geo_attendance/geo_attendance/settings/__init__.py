from __future__ import annotations

import importlib
import os
from types import ModuleType


def get_settings_module() -> str:
    # APP_ENV selects the settings module; development is the default.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "geo_attendance.settings.production"

    if env in {"test", "testing"}:
        return "geo_attendance.settings.testing"

    return "geo_attendance.settings.development"


def load_settings(module_name: str | None = None) -> ModuleType:
    return importlib.import_module(module_name or get_settings_module())
