import pytest

from champion_gallery.models import decode_collection
from champion_gallery.router import Detail, Home, format_route, parse_route, resolve_character, route_for


@pytest.mark.parametrize("path", ["", "/", "//"])
def test_empty_paths_are_home(path):
    assert parse_route(path) == Home()


def test_first_segment_is_detail():
    assert parse_route("/ahri") == Detail("ahri")
    assert parse_route("/ahri/skins") == Detail("ahri")
    assert parse_route("/ahri?tab=stats") == Detail("ahri")


def test_percent_decoding():
    assert parse_route("/kai%27sa") == Detail("kai'sa")
    assert parse_route("/dr.%20mundo") == Detail("dr. mundo")


def test_undecodable_path_falls_back_to_home():
    assert parse_route("/%FF%FE") == Home()


@pytest.mark.parametrize("route", [Home(), Detail("ahri"), Detail("Lux"), Detail("kai'sa"), Detail("dr. mundo")])
def test_round_trip(route):
    assert parse_route(format_route(route)) == route


def test_format_route():
    assert format_route(Home()) == "/"
    assert format_route(Detail("ahri")) == "/ahri"
    assert format_route(Detail("a/b")) == "/a%2Fb"


def test_resolve_character_case_insensitive(payload):
    characters = decode_collection(payload)
    assert resolve_character(Detail("Ahri"), characters).name == "Ahri"
    assert resolve_character(Detail("ahri"), characters).name == "Ahri"
    assert resolve_character(Detail("LUX"), characters).name == "Lux"
    assert resolve_character(Detail("nope"), characters) is None
    assert resolve_character(Home(), characters) is None


def test_route_for_uses_lowercased_name(payload):
    ahri = decode_collection(payload)[0]
    assert route_for(ahri) == Detail("ahri")
    assert format_route(route_for(ahri)) == "/ahri"
