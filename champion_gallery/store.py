from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any, Callable, Deque, List, Optional, Tuple

from champion_gallery.collection import CollectionLoader, CollectionState
from champion_gallery.config import Settings
from champion_gallery.device import WindowSize
from champion_gallery.router import format_route, parse_route
from champion_gallery.state import (
    Command,
    CollectionSettled,
    Event,
    LocationChanged,
    PushUrl,
    Screen,
    ViewState,
    decide,
    initial_state,
    update,
)

logger = logging.getLogger(__name__)

Subscriber = Callable[[ViewState], None]


class History:
    """In-memory browser history: a stack of paths with a cursor."""

    def __init__(self, initial_path: str = "/") -> None:
        self.entries: List[str] = [initial_path]
        self.index = 0
        self.pushes = 0

    @property
    def current(self) -> str:
        return self.entries[self.index]

    def push(self, path: str) -> None:
        del self.entries[self.index + 1:]
        self.entries.append(path)
        self.index = len(self.entries) - 1
        self.pushes += 1

    def back(self) -> Optional[str]:
        if self.index == 0:
            return None
        self.index -= 1
        return self.current

    def forward(self) -> Optional[str]:
        if self.index >= len(self.entries) - 1:
            return None
        self.index += 1
        return self.current


class Store:
    """Holds the latest ViewState and processes events one at a time, in arrival order."""

    def __init__(
        self,
        settings: Settings,
        initial_path: str = "/",
        initial_size: Optional[WindowSize] = None,
        session: Optional[Any] = None,
    ) -> None:
        if initial_size is None:
            initial_size = WindowSize(settings.initial_width, settings.initial_height)
        self.settings = settings
        self.history = History(initial_path)
        self.state = initial_state(initial_path, initial_size)
        self.loader = CollectionLoader(settings, self._on_settle, session=session)
        self._queue: Deque[Event] = deque()
        self._lock = threading.RLock()
        self._draining = False
        self._subscribers: List[Subscriber] = []

    def start(self) -> None:
        self.loader.start()

    def _on_settle(self, result: CollectionState) -> None:
        # Runs on the loader thread; only the queue is touched here.
        self.post(CollectionSettled(result))

    def post(self, event: Event) -> None:
        self._queue.append(event)

    def dispatch(self, event: Event) -> ViewState:
        self.post(event)
        return self.drain()

    def drain(self) -> ViewState:
        with self._lock:
            if self._draining:
                # Re-entrant dispatch from a subscriber; the outer loop picks it up.
                return self.state
            self._draining = True
            try:
                while self._queue:
                    self._apply(self._queue.popleft())
            finally:
                self._draining = False
            return self.state

    def _apply(self, event: Event) -> None:
        state, commands = update(self.state, event)
        for command in commands:
            self._run(command)
        if state is self.state:
            return
        self.state = state
        for subscriber in list(self._subscribers):
            try:
                subscriber(state)
            except Exception:
                logger.exception("View state subscriber failed")

    def _run(self, command: Command) -> None:
        if isinstance(command, PushUrl):
            self.history.push(command.path)
            return
        raise TypeError(f"Unknown command: {command!r}")

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def screen(self) -> Screen:
        return decide(self.drain())

    def read(self) -> Tuple[ViewState, str]:
        """Drain and return the snapshot together with the history location it belongs to."""
        with self._lock:
            state = self.drain()
            return state, self.history.current

    def visit(self, path: str) -> Tuple[ViewState, str]:
        """A page load: record a new history entry when the route changes, then apply it."""
        with self._lock:
            route = parse_route(path)
            if route != parse_route(self.history.current):
                self.history.push(format_route(route))
            self.post(LocationChanged(path))
            return self.read()

    def go_back(self) -> Optional[str]:
        with self._lock:
            path = self.history.back()
            if path is not None:
                self.dispatch(LocationChanged(path))
            return path

    def go_forward(self) -> Optional[str]:
        with self._lock:
            path = self.history.forward()
            if path is not None:
                self.dispatch(LocationChanged(path))
            return path
