from __future__ import annotations

# ruff: noqa: S101
import importlib
import os
import sys

import pytest
from django.core.handlers.asgi import ASGIHandler
from django.core.handlers.wsgi import WSGIHandler
from django.urls import resolve, reverse

import config
import manage
from solar.views import FluxDataProxyView, FluxMapPngView, FluxMapView


def test_manage_runs_with_project_settings(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    seen: dict[str, object] = {}

    def _fake_execute(argv: list[str]) -> None:
        seen["argv"] = argv
        seen["settings"] = os.environ["DJANGO_SETTINGS_MODULE"]

    monkeypatch.setattr(
        "django.core.management.execute_from_command_line",
        _fake_execute,
    )
    monkeypatch.setattr(sys, "argv", ["manage.py", "check"])

    manage.main()

    assert seen == {
        "argv": ["manage.py", "check"],
        "settings": "config.settings",
    }


def test_asgi_and_wsgi_handlers() -> None:
    asgi = importlib.reload(importlib.import_module("config.asgi"))
    wsgi = importlib.reload(importlib.import_module("config.wsgi"))
    assert isinstance(asgi.application, ASGIHandler)
    assert isinstance(wsgi.application, WSGIHandler)


@pytest.mark.parametrize(
    ("name", "path", "view_class"),
    [
        ("solar-flux-data", "/api/getFluxData", FluxDataProxyView),
        ("solar-flux-png", "/api/v1/solar/flux.png", FluxMapPngView),
        ("solar-flux-map", "/api/v1/solar/flux-map/", FluxMapView),
    ],
)
def test_root_urlconf_routes_solar_views(
    name: str, path: str, view_class: type
) -> None:
    assert reverse(name) == path
    match = resolve(path)
    assert match.func.view_class is view_class  # type: ignore[attr-defined]


def test_mypy_settings_fall_back_to_placeholder_credentials(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    # Fresh settings import against an isolated environment.
    monkeypatch.setattr(os, "environ", dict(os.environ))
    monkeypatch.delenv("SOLAR_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_SOLAR_API_KEY", raising=False)
    monkeypatch.delenv("DJANGO_SECRET_KEY", raising=False)
    monkeypatch.delitem(sys.modules, "config.settings", raising=False)
    monkeypatch.setattr(config, "settings", config.settings)

    module = importlib.reload(importlib.import_module("config.mypy_settings"))

    assert module.SOLAR_API_KEY == "mypy-only-solar-key"
    assert module.SECRET_KEY == "mypy-only-not-for-prod"
    assert module.DEBUG is False
    assert module.ROOT_URLCONF == "config.urls"
