from datetime import datetime, timezone

import pytest

from core.models import Event


class DummyMCP:
    """Minimal FastMCP stand-in to capture tool, resource and prompt registration."""

    def __init__(self) -> None:
        self.tools = {}
        self.resources = {}
        self.prompts = {}

    def tool(self, *, name: str):
        def _decorator(fn):
            self.tools[name] = fn
            return fn
        return _decorator

    def resource(self, uri: str, **_kwargs):
        def _decorator(fn):
            self.resources[uri] = fn
            return fn
        return _decorator

    def prompt(self, *, name: str, **_kwargs):
        def _decorator(fn):
            self.prompts[name] = fn
            return fn
        return _decorator


class FirstChoice:
    """RandomSource that always picks the first template."""

    def choice(self, seq):
        return seq[0]


def make_event(id, title, iso, category="History", difficulty=2):
    return Event(
        id=id,
        title=title,
        date_occurred=datetime.fromisoformat(iso).replace(tzinfo=timezone.utc),
        category=category,
        difficulty=difficulty,
    )


@pytest.fixture
def dummy_mcp():
    return DummyMCP()


@pytest.fixture
def first_choice():
    return FirstChoice()


@pytest.fixture
def timeline():
    return [
        make_event(1, "World War II Begins", "1939-09-01", "History", 2),
        make_event(2, "Moon Landing", "1969-07-20", "Science", 1),
        make_event(3, "Internet Created", "1989-03-12", "Technology", 3),
    ]


@pytest.fixture
def berlin_wall():
    return make_event(4, "Berlin Wall Falls", "1989-11-09")


@pytest.fixture
def early_card():
    return make_event(5, "World War I Begins", "1914-07-28")


@pytest.fixture
def event_factory():
    return make_event
