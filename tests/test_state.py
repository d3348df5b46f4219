"""
Tests for the view state reducer and the render decision.
"""
import pytest

from champion_gallery.collection import Failed, Loaded, Loading, NotStarted
from champion_gallery.device import DeviceClass, WindowSize
from champion_gallery.models import decode_collection
from champion_gallery.router import Detail, Home
from champion_gallery.state import (
    CollectionSettled,
    DetailScreen,
    ErrorScreen,
    GridScreen,
    LoadingScreen,
    LocationChanged,
    NavigateRequested,
    NotFoundScreen,
    PushUrl,
    ViewState,
    WindowResized,
    decide,
    initial_state,
    reduce,
    update,
)


@pytest.fixture
def characters(payload):
    return decode_collection(payload)


@pytest.fixture
def loaded(characters):
    return ViewState(Loaded(characters), Home(), DeviceClass.NOT_PHONE)


def test_initial_state():
    state = initial_state("/ahri", WindowSize(320, 600))
    assert state == ViewState(Loading(), Detail("ahri"), DeviceClass.PHONE)


def test_initial_state_with_bad_path_is_home():
    state = initial_state("/%FF", WindowSize(1280, 800))
    assert state.route == Home()


def test_collection_settled_replaces_collection(characters):
    state = initial_state("/", WindowSize(1280, 800))
    settled = reduce(state, CollectionSettled(Loaded(characters)))
    assert settled.collection == Loaded(characters)
    assert settled.route == state.route
    assert settled.device == state.device
    # earlier snapshot untouched
    assert state.collection == Loading()


def test_collection_settled_twice_is_idempotent(characters):
    state = initial_state("/", WindowSize(1280, 800))
    once = reduce(state, CollectionSettled(Loaded(characters)))
    twice = reduce(once, CollectionSettled(Loaded(characters)))
    assert twice == once


def test_location_changed_only_touches_route(loaded):
    state = reduce(loaded, LocationChanged("/lux"))
    assert state.route == Detail("lux")
    assert state.collection == loaded.collection
    assert state.device == loaded.device


def test_location_changed_to_current_route_is_noop(loaded):
    state = reduce(loaded, LocationChanged("/"))
    assert state is loaded


def test_navigate_requested_emits_one_push(loaded):
    state, commands = update(loaded, NavigateRequested(Detail("ahri")))
    assert state.route == Detail("ahri")
    assert commands == (PushUrl("/ahri"),)


def test_window_resized_reclassifies(loaded):
    state = reduce(loaded, WindowResized(WindowSize(300, 640)))
    assert state.device == DeviceClass.PHONE
    assert reduce(state, WindowResized(WindowSize(310, 640))) is state


def test_rapid_device_flips(loaded):
    state = loaded
    for width in (599, 600, 599, 600, 1):
        state = reduce(state, WindowResized(WindowSize(width, 500)))
        decide(state)
    assert state.device == DeviceClass.PHONE


def test_unknown_event_rejected(loaded):
    with pytest.raises(TypeError):
        update(loaded, object())


@pytest.mark.parametrize("collection", [NotStarted(), Loading()])
@pytest.mark.parametrize("route", [Home(), Detail("ahri"), Detail("nope")])
def test_loading_screen_for_any_route(collection, route):
    assert decide(ViewState(collection, route, DeviceClass.NOT_PHONE)) == LoadingScreen()


@pytest.mark.parametrize("route", [Home(), Detail("ahri")])
def test_error_screen_for_any_route(route):
    state = ViewState(Failed("network error"), route, DeviceClass.PHONE)
    assert decide(state) == ErrorScreen("network error")


def test_grid_screen(loaded, characters):
    assert decide(loaded) == GridScreen(characters)


def test_detail_screen_keeps_grid_on_wide_screens(loaded, characters):
    screen = decide(reduce(loaded, LocationChanged("/Ahri")))
    assert isinstance(screen, DetailScreen)
    assert screen.character.name == "Ahri"
    assert screen.grid == characters


def test_detail_screen_on_phone_has_no_grid(loaded):
    state = ViewState(loaded.collection, Detail("lux"), DeviceClass.PHONE)
    screen = decide(state)
    assert isinstance(screen, DetailScreen)
    assert screen.grid == ()


def test_unresolved_detail_is_not_found(loaded, characters):
    screen = decide(reduce(loaded, LocationChanged("/nope")))
    assert screen == NotFoundScreen("nope", characters)


def test_decode_failure_and_lookup_failure_are_distinct(loaded):
    assert isinstance(decide(reduce(loaded, LocationChanged("/%FF"))), GridScreen)
    assert isinstance(decide(reduce(loaded, LocationChanged("/zzz"))), NotFoundScreen)


def test_decide_rejects_unknown_collection():
    with pytest.raises(TypeError):
        decide(ViewState("loaded", Home(), DeviceClass.NOT_PHONE))


def test_full_sequence(characters):
    state = ViewState(Loading(), Home(), DeviceClass.NOT_PHONE)

    state = reduce(state, CollectionSettled(Loaded(characters)))
    screen = decide(state)
    assert isinstance(screen, GridScreen)
    assert len(screen.characters) == 2

    state, commands = update(state, NavigateRequested(Detail("ahri")))
    assert state.route == Detail("ahri")
    assert commands == (PushUrl("/ahri"),)

    after_location, commands = update(state, LocationChanged("/ahri"))
    assert after_location is state
    assert commands == ()

    state = reduce(state, WindowResized(WindowSize(300, 640)))
    assert state.device == DeviceClass.PHONE
    screen = decide(state)
    assert isinstance(screen, DetailScreen)
    assert screen.grid == ()


def test_failure_scenario():
    state = ViewState(Loading(), Detail("ahri"), DeviceClass.NOT_PHONE)
    state = reduce(state, CollectionSettled(Failed("network error")))
    assert decide(state) == ErrorScreen("network error")
