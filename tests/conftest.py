"""Shared pytest fixtures and example models for valueobjects tests."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest
from pydantic import Field

from valueobjects.config.settings import reset_settings
from valueobjects.domain.collection import TypedCollection
from valueobjects.domain.record import ValueObject


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Isolate every test from ambient config files and cached settings."""
    monkeypatch.delenv("VALUEOBJECTS_CONFIG", raising=False)
    reset_settings()
    yield
    reset_settings()


# ---------------------------------------------------------------------------
# Example models (used across test modules)
# ---------------------------------------------------------------------------


class ExampleSubProperty(ValueObject):
    time: str | None = None
    date: str | None = None
    daylight_savings_time: bool | None = None


class ExampleProperty(ValueObject):
    name: str | None = None
    hire_date: ExampleSubProperty = Field(default_factory=ExampleSubProperty)
    position: str | None = None
    array_a: list[Any] | None = None
    boolean_a: bool | None = None
    float_a: float | None = None
    int_a: int | None = None


class ExamplePropertySet(TypedCollection):
    required_type = (ExampleProperty,)


class IntegerList(TypedCollection):
    required_type = "integer"


class PlainThing:
    """An object with no Exportable capability."""

    def __init__(self) -> None:
        self.id = 0


def make_property(name: str, **kwargs: Any) -> ExampleProperty:
    """Build an ExampleProperty with *name* and any other field values."""
    return ExampleProperty(name=name, **kwargs)
