"""Shared fixtures: a document, an anchor button and overlay factories."""

from typing import Any, Callable, Optional

import pytest

from grid_overlay.core.document import Document
from grid_overlay.core.element import Element
from grid_overlay.widgets.overlay import Overlay


class Recorder:
    """Selection listener that records every payload it receives."""

    def __init__(self) -> None:
        self.selected: list[Any] = []

    def on_selected(self, payload: Any) -> None:
        self.selected.append(payload)


class FakeClock:
    """Manually advanced clock for scheduler tests."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def document() -> Document:
    return Document(80, 24)


@pytest.fixture
def anchor(document: Document) -> Element:
    """Toolbar button with an icon child, on the first row."""
    button = document.body.append(Element("button", top=0, left=10, width=3, height=1))
    button.append(Element("span", classes=("icon",), left=1, width=1, height=1))
    return button


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_overlay(
    document: Document, anchor: Element, recorder: Recorder
) -> Callable[..., Overlay]:
    """Build an overlay over `count` integer payloads."""

    def factory(count: int = 16, columns: int = 15, listener: Optional[Any] = None) -> Overlay:
        return Overlay(list(range(count)), listener or recorder, anchor, document, columns=columns)

    return factory


@pytest.fixture
def overlay(make_overlay: Callable[..., Overlay]) -> Overlay:
    """16 cells in rows of 15: one full row and a single cell below."""
    return make_overlay()
