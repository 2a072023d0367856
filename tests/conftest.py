import pytest


@pytest.fixture(autouse=True)
def _vietnamese_locale(monkeypatch):
    monkeypatch.setenv("VIBE_PLANNER_LOCALE", "vi")
