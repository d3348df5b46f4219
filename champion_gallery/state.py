"""
View state for the champion gallery.

``ViewState`` is an immutable snapshot of the catalog fetch, the current
route and the device class. ``update`` folds one event into a snapshot and
returns the commands the runtime must carry out; ``decide`` maps a snapshot
to the screen that is drawn.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple, Union

from champion_gallery.collection import CollectionState, Failed, Loaded, Loading, NotStarted
from champion_gallery.device import DeviceClass, WindowSize, classify
from champion_gallery.models import Character
from champion_gallery.router import Detail, Home, Route, format_route, parse_route, resolve_character


@dataclass(frozen=True)
class ViewState:
    collection: CollectionState
    route: Route
    device: DeviceClass


# Events

@dataclass(frozen=True)
class CollectionSettled:
    result: CollectionState


@dataclass(frozen=True)
class LocationChanged:
    path: str


@dataclass(frozen=True)
class NavigateRequested:
    route: Route


@dataclass(frozen=True)
class WindowResized:
    size: WindowSize


Event = Union[CollectionSettled, LocationChanged, NavigateRequested, WindowResized]


# Commands

@dataclass(frozen=True)
class PushUrl:
    path: str


Command = PushUrl


def initial_state(initial_path: str, initial_size: WindowSize) -> ViewState:
    return ViewState(
        collection=Loading(),
        route=parse_route(initial_path),
        device=classify(initial_size),
    )


def update(state: ViewState, event: Event) -> Tuple[ViewState, Tuple[Command, ...]]:
    """Fold one event into ``state``.

    Events that re-derive the current value return ``state`` itself, so a
    ``LocationChanged`` following its own ``NavigateRequested`` is a no-op.
    """
    if isinstance(event, CollectionSettled):
        if event.result == state.collection:
            return state, ()
        return replace(state, collection=event.result), ()

    if isinstance(event, LocationChanged):
        route = parse_route(event.path)
        if route == state.route:
            return state, ()
        return replace(state, route=route), ()

    if isinstance(event, NavigateRequested):
        push = PushUrl(format_route(event.route))
        if event.route == state.route:
            return state, (push,)
        return replace(state, route=event.route), (push,)

    if isinstance(event, WindowResized):
        device = classify(event.size)
        if device == state.device:
            return state, ()
        return replace(state, device=device), ()

    raise TypeError(f"Unknown event: {event!r}")


def reduce(state: ViewState, event: Event) -> ViewState:
    return update(state, event)[0]


# Screens

@dataclass(frozen=True)
class LoadingScreen:
    pass


@dataclass(frozen=True)
class ErrorScreen:
    message: str


@dataclass(frozen=True)
class GridScreen:
    characters: Tuple[Character, ...]


@dataclass(frozen=True)
class DetailScreen:
    character: Character
    grid: Tuple[Character, ...]


@dataclass(frozen=True)
class NotFoundScreen:
    identifier: str
    grid: Tuple[Character, ...]


Screen = Union[LoadingScreen, ErrorScreen, GridScreen, DetailScreen, NotFoundScreen]


def decide(state: ViewState) -> Screen:
    collection = state.collection
    if isinstance(collection, (NotStarted, Loading)):
        return LoadingScreen()
    if isinstance(collection, Failed):
        return ErrorScreen(collection.error)
    if not isinstance(collection, Loaded):
        raise TypeError(f"Unknown collection state: {collection!r}")

    route = state.route
    if isinstance(route, Home):
        return GridScreen(collection.characters)
    if not isinstance(route, Detail):
        raise TypeError(f"Unknown route: {route!r}")

    # Phones show the detail panel alone.
    grid = collection.characters if state.device == DeviceClass.NOT_PHONE else ()
    character = resolve_character(route, collection.characters)
    if character is None:
        return NotFoundScreen(route.identifier, grid)
    return DetailScreen(character, grid)
