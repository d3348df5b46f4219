from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union
from urllib.parse import quote, unquote

from champion_gallery.models import Character


@dataclass(frozen=True)
class Home:
    pass


@dataclass(frozen=True)
class Detail:
    identifier: str


Route = Union[Home, Detail]


def parse_route(path: str) -> Route:
    """Map a URL path to a route.

    Only the first non-empty segment counts. Anything that does not decode
    to a usable identifier falls back to ``Home``.
    """
    path = path.split("?", 1)[0].split("#", 1)[0]
    segments = [segment for segment in path.split("/") if segment]
    if not segments:
        return Home()
    try:
        identifier = unquote(segments[0], errors="strict")
    except UnicodeDecodeError:
        return Home()
    if not identifier:
        return Home()
    return Detail(identifier)


def format_route(route: Route) -> str:
    if isinstance(route, Home):
        return "/"
    if isinstance(route, Detail):
        return "/" + quote(route.identifier, safe="")
    raise TypeError(f"Unknown route: {route!r}")


def route_for(character: Character) -> Detail:
    return Detail(character.name.lower())


def resolve_character(route: Route, characters: Iterable[Character]) -> Optional[Character]:
    if not isinstance(route, Detail):
        return None
    wanted = route.identifier.lower()
    return next((c for c in characters if c.name.lower() == wanted), None)
