"""Shared fakes and builders for the planner tests."""

from types import SimpleNamespace
from typing import Any, Dict, List

from app.schemas import Place


def make_place(idx: int, **overrides: Any) -> Place:
    row: Dict[str, Any] = {
        "id": idx,
        "city": "Ho Chi Minh City",
        "name": f"Place {idx}",
        "address": f"{idx} Nguyen Hue",
        "area": "District 1",
        "type": "Cafe",
        "vibes": [],
        "tags": [],
        "budget": "",
        "source": "test",
    }
    row.update(overrides)
    return Place.model_validate(row)


def completion(content: Any) -> SimpleNamespace:
    """Shape an object like an openai chat completion."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeStore:
    def __init__(self, places: List[Place] | None = None, error: Exception | None = None):
        self.places = list(places or [])
        self.error = error
        self.calls: List[str] = []

    async def fetch(self, city: str) -> List[Place]:
        self.calls.append(city)
        if self.error is not None:
            raise self.error
        return [p for p in self.places if city.lower() in p.city.lower()]


class FakeInvoker:
    def __init__(self, response: Any = None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls: List[List[Dict[str, str]]] = []

    def __call__(self, messages: List[Dict[str, str]]) -> Any:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.response

