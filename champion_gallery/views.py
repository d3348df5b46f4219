from __future__ import annotations

from typing import Any, Dict, Iterable, List

from flask import render_template

from champion_gallery.collection import Failed, Loaded, Loading, NotStarted
from champion_gallery.config import Settings
from champion_gallery.device import DeviceClass
from champion_gallery.images import portrait_url, stat_percent, thumbnail_url
from champion_gallery.models import STAT_FIELDS, Character
from champion_gallery.router import Detail, Home, format_route, route_for
from champion_gallery.state import (
    DetailScreen,
    ErrorScreen,
    GridScreen,
    LoadingScreen,
    NotFoundScreen,
    Screen,
    ViewState,
)


def tile_to_dict(character: Character, settings: Settings) -> Dict[str, Any]:
    return {
        "id": character.id,
        "name": character.name,
        "title": character.title,
        "href": format_route(route_for(character)),
        "thumbnail": thumbnail_url(character.image_file_name, settings),
    }


def character_to_dict(character: Character, settings: Settings) -> Dict[str, Any]:
    data = tile_to_dict(character, settings)
    data.update({
        "blurb": character.blurb,
        "portrait": portrait_url(character.image_file_name, settings),
        "tags": list(character.tags),
        "stats": [
            {"name": stat, "value": getattr(character.stats, stat), "percent": stat_percent(getattr(character.stats, stat))}
            for stat in STAT_FIELDS
        ],
    })
    return data


def _tiles(characters: Iterable[Character], settings: Settings) -> List[Dict[str, Any]]:
    return [tile_to_dict(c, settings) for c in characters]


def screen_to_dict(screen: Screen, settings: Settings) -> Dict[str, Any]:
    if isinstance(screen, LoadingScreen):
        return {"kind": "loading"}
    if isinstance(screen, ErrorScreen):
        return {"kind": "error", "message": screen.message}
    if isinstance(screen, GridScreen):
        return {"kind": "grid", "grid": _tiles(screen.characters, settings)}
    if isinstance(screen, DetailScreen):
        return {
            "kind": "detail",
            "character": character_to_dict(screen.character, settings),
            "grid": _tiles(screen.grid, settings),
        }
    if isinstance(screen, NotFoundScreen):
        return {
            "kind": "not_found",
            "identifier": screen.identifier,
            "grid": _tiles(screen.grid, settings),
        }
    raise TypeError(f"Unknown screen: {screen!r}")


def state_to_dict(state: ViewState) -> Dict[str, Any]:
    collection = state.collection
    if isinstance(collection, NotStarted):
        collection_data: Dict[str, Any] = {"status": "not_started"}
    elif isinstance(collection, Loading):
        collection_data = {"status": "loading"}
    elif isinstance(collection, Loaded):
        collection_data = {"status": "loaded", "count": len(collection.characters)}
    elif isinstance(collection, Failed):
        collection_data = {"status": "failed", "error": collection.error}
    else:
        raise TypeError(f"Unknown collection state: {collection!r}")

    if isinstance(state.route, Home):
        route_data: Dict[str, Any] = {"name": "home", "path": format_route(state.route)}
    elif isinstance(state.route, Detail):
        route_data = {
            "name": "detail",
            "identifier": state.route.identifier,
            "path": format_route(state.route),
        }
    else:
        raise TypeError(f"Unknown route: {state.route!r}")

    return {
        "collection": collection_data,
        "route": route_data,
        "device": state.device.value,
    }


def render_page(screen: Screen, device: DeviceClass, settings: Settings) -> str:
    return render_template(
        "index.html",
        screen=screen_to_dict(screen, settings),
        phone=device == DeviceClass.PHONE,
    )
